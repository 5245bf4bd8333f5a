"""Tests for SystemEntropySource."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from boundrand.entropy.system import SystemEntropySource
from boundrand.exceptions import EntropyUnavailableError, InvalidLengthError
from boundrand.strength import StrengthLevel


class TestSystemEntropySource:
    """Tests for the os.urandom() wrapper."""

    def test_name(self) -> None:
        assert SystemEntropySource().name == "system"

    def test_strength_is_strong(self) -> None:
        source = SystemEntropySource()
        assert source.strength is StrengthLevel.STRONG
        assert SystemEntropySource.STRENGTH is StrengthLevel.STRONG

    def test_is_always_available(self) -> None:
        assert SystemEntropySource().is_available is True

    def test_returns_correct_byte_count(self) -> None:
        source = SystemEntropySource()
        for n in (1, 10, 100, 1024, 20480):
            assert len(source.get_random_bytes(n)) == n

    def test_returns_bytes_type(self) -> None:
        assert isinstance(SystemEntropySource().get_random_bytes(16), bytes)

    def test_consecutive_calls_differ(self) -> None:
        """Two 32-byte draws colliding is statistically near-impossible."""
        source = SystemEntropySource()
        assert source.get_random_bytes(32) != source.get_random_bytes(32)

    @pytest.mark.parametrize("n", [0, -1, -100])
    def test_rejects_non_positive_length(self, n: int) -> None:
        with pytest.raises(InvalidLengthError):
            SystemEntropySource().get_random_bytes(n)

    @pytest.mark.parametrize("n", [1.0, "8", None, True])
    def test_rejects_non_integer_length(self, n: object) -> None:
        with pytest.raises(InvalidLengthError):
            SystemEntropySource().get_random_bytes(n)  # type: ignore[arg-type]

    def test_os_error_becomes_entropy_unavailable(self) -> None:
        source = SystemEntropySource()
        with (
            patch("boundrand.entropy.system.os.urandom", side_effect=OSError("no entropy")),
            pytest.raises(EntropyUnavailableError, match="no entropy"),
        ):
            source.get_random_bytes(8)

    def test_short_read_becomes_entropy_unavailable(self) -> None:
        source = SystemEntropySource()
        with (
            patch("boundrand.entropy.system.os.urandom", return_value=b"\x00\x01"),
            pytest.raises(EntropyUnavailableError, match="returned 2 bytes"),
        ):
            source.get_random_bytes(8)

    def test_close_is_noop(self) -> None:
        source = SystemEntropySource()
        source.close()
        assert len(source.get_random_bytes(8)) == 8

    def test_health_check(self) -> None:
        health = SystemEntropySource().health_check()
        assert health == {"source": "system", "strength": "strong", "healthy": True}
