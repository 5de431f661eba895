"""Utility functions for wallace.

This module provides grouping of decoded messages and CSV export.
"""

from __future__ import annotations

from .export import export_csv, export_groups, write_warnings_log
from .grouping import group_by_name

__all__ = [
    "group_by_name",
    "export_csv",
    "export_groups",
    "write_warnings_log",
]
