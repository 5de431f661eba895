"""Input handling for wallace."""

from __future__ import annotations

from .source import open_log

__all__ = [
    "open_log",
]
