"""Unit tests for decoder configuration."""

from __future__ import annotations

import pytest

from wallace import DecoderConfig


class TestDecoderConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self) -> None:
        """Test defaults match the historical behavior."""
        config = DecoderConfig()

        assert config.unknown_types == "drop"
        assert config.max_payload_length is None
        assert config.best_effort_skip is False

    def test_invalid_policy(self) -> None:
        """Test unknown policies are rejected."""
        with pytest.raises(ValueError, match="unknown_types"):
            DecoderConfig(unknown_types="raise")  # type: ignore[arg-type]

    @pytest.mark.parametrize("bound", [-1, 65536])
    def test_invalid_max_payload_length(self, bound: int) -> None:
        """Test the bound must fit the 16-bit length field."""
        with pytest.raises(ValueError, match="max_payload_length"):
            DecoderConfig(max_payload_length=bound)

    def test_valid_bounds(self) -> None:
        """Test edge bounds are accepted."""
        DecoderConfig(max_payload_length=0)
        DecoderConfig(max_payload_length=65535)
