"""Tests for FallbackEntropySource."""

from __future__ import annotations

import logging

import pytest

from boundrand.entropy.base import EntropySource
from boundrand.entropy.fallback import FallbackEntropySource
from boundrand.exceptions import EntropyUnavailableError
from boundrand.strength import StrengthLevel


class _AlwaysFailSource(EntropySource):
    """Test double: always raises EntropyUnavailableError."""

    STRENGTH = StrengthLevel.STRONG

    @property
    def name(self) -> str:
        return "always_fail"

    @property
    def is_available(self) -> bool:
        return False

    def _generate(self, n: int) -> bytes:
        raise EntropyUnavailableError("always fails")


class _RuntimeErrorSource(EntropySource):
    """Test double: always raises RuntimeError (not EntropyUnavailableError)."""

    STRENGTH = StrengthLevel.STRONG

    @property
    def name(self) -> str:
        return "runtime_error"

    def _generate(self, n: int) -> bytes:
        raise RuntimeError("unexpected error")


class _FixedBytesSource(EntropySource):
    """Test double: returns a fixed byte pattern at a chosen strength."""

    def __init__(self, pattern: int, strength: StrengthLevel = StrengthLevel.STRONG) -> None:
        self._pattern = pattern
        self._strength = strength
        self.call_count = 0

    @property
    def name(self) -> str:
        return f"fixed_{self._pattern:#04x}"

    @property
    def strength(self) -> StrengthLevel:
        return self._strength

    def _generate(self, n: int) -> bytes:
        self.call_count += 1
        return bytes([self._pattern] * n)


class TestFallbackEntropySource:
    """Tests for the opt-in fallback wrapper."""

    def test_delegates_to_primary(self) -> None:
        primary = _FixedBytesSource(0xAA)
        fallback = _FixedBytesSource(0xBB)
        source = FallbackEntropySource(primary, fallback)

        assert source.get_random_bytes(4) == bytes([0xAA] * 4)
        assert primary.call_count == 1
        assert fallback.call_count == 0

    def test_falls_back_on_entropy_unavailable(self) -> None:
        fallback = _FixedBytesSource(0xBB)
        source = FallbackEntropySource(_AlwaysFailSource(), fallback)

        assert source.get_random_bytes(4) == bytes([0xBB] * 4)
        assert fallback.call_count == 1
        assert source.last_source_used == fallback.name

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        source = FallbackEntropySource(
            _AlwaysFailSource(), _FixedBytesSource(0xBB, StrengthLevel.MEDIUM)
        )
        with caplog.at_level(logging.WARNING, logger="boundrand"):
            source.get_random_bytes(4)
        assert "falling back" in caplog.text
        assert "medium" in caplog.text

    def test_last_source_used_tracks_primary(self) -> None:
        primary = _FixedBytesSource(0xAA)
        source = FallbackEntropySource(primary, _FixedBytesSource(0xBB))
        source.get_random_bytes(4)
        assert source.last_source_used == primary.name

    def test_does_not_catch_non_entropy_errors(self) -> None:
        fallback = _FixedBytesSource(0xBB)
        source = FallbackEntropySource(_RuntimeErrorSource(), fallback)

        with pytest.raises(RuntimeError, match="unexpected error"):
            source.get_random_bytes(4)
        assert fallback.call_count == 0

    def test_raises_when_both_fail(self) -> None:
        source = FallbackEntropySource(_AlwaysFailSource(), _AlwaysFailSource())
        with pytest.raises(EntropyUnavailableError):
            source.get_random_bytes(4)

    def test_strength_is_weakest_link(self) -> None:
        source = FallbackEntropySource(
            _FixedBytesSource(0xAA, StrengthLevel.STRONG),
            _FixedBytesSource(0xBB, StrengthLevel.LOW),
        )
        assert source.strength is StrengthLevel.LOW

    def test_strength_does_not_change_after_fallback(self) -> None:
        source = FallbackEntropySource(
            _AlwaysFailSource(), _FixedBytesSource(0xBB, StrengthLevel.MEDIUM)
        )
        before = source.strength
        source.get_random_bytes(4)
        assert source.strength is before is StrengthLevel.MEDIUM

    def test_name_is_compound(self) -> None:
        primary = _FixedBytesSource(0xAA)
        fallback = _FixedBytesSource(0xBB)
        assert FallbackEntropySource(primary, fallback).name == f"{primary.name}+{fallback.name}"

    def test_availability(self) -> None:
        assert FallbackEntropySource(_AlwaysFailSource(), _FixedBytesSource(0xBB)).is_available
        assert FallbackEntropySource(_FixedBytesSource(0xAA), _AlwaysFailSource()).is_available
        assert not FallbackEntropySource(_AlwaysFailSource(), _AlwaysFailSource()).is_available

    def test_nested_chain(self) -> None:
        last = _FixedBytesSource(0xCC, StrengthLevel.MEDIUM)
        chain = FallbackEntropySource(
            _AlwaysFailSource(), FallbackEntropySource(_AlwaysFailSource(), last)
        )
        assert chain.get_random_bytes(2) == b"\xcc\xcc"
        assert chain.strength is StrengthLevel.MEDIUM

    def test_close_closes_both(self) -> None:
        closed: list[str] = []

        class _TrackClose(_FixedBytesSource):
            def close(self) -> None:
                closed.append(self.name)

        primary = _TrackClose(0x01)
        fallback = _TrackClose(0x02)
        FallbackEntropySource(primary, fallback).close()
        assert closed == [primary.name, fallback.name]

    def test_health_check(self) -> None:
        source = FallbackEntropySource(_FixedBytesSource(0xAA), _FixedBytesSource(0xBB))
        health = source.health_check()
        assert health["source"] == source.name
        assert health["healthy"] is True
        assert health["strength"] == "strong"
        assert {"primary", "fallback", "last_source_used"} <= health.keys()
