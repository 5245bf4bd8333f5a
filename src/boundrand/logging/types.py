"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GenerationRecord:
    """Immutable record of a single generation call.

    Generated values are never recorded; only what was asked for and what
    it cost.

    Attributes:
        timestamp_ns: Wall-clock time of the call (nanoseconds since epoch).
        operation: ``'bytes'``, ``'int'``, ``'float'``, ``'bool'`` or ``'string'``.
        requested: Human-readable request shape (length, range, alphabet size).
        bytes_consumed: Raw entropy bytes drawn.
        draws: Source calls made; above one only after rejections.
        source: Name of the serving entropy source.
        strength: Strength label of the serving source.
        elapsed_ms: Time spent in the call (milliseconds).
    """

    timestamp_ns: int
    operation: str
    requested: str
    bytes_consumed: int
    draws: int
    source: str
    strength: str
    elapsed_ms: float
