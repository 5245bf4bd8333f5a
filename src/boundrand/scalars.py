"""Bounded scalar generators: integers, floats and booleans.

All three draw through a :class:`~boundrand.byte_generator.ByteGenerator`.
Range bounds may be given in either order; a zero-width range returns its
single value without touching the entropy source.

Integers are drawn by rejection sampling: take the fewest whole bytes that
cover ``hi - lo``, mask off the bits above its bit length, and redraw
whenever the sample exceeds the range. Reducing a raw sample with ``%``
would skew results towards low values whenever the range does not divide
the sample space, so it is never done.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Integral, Real
from typing import TYPE_CHECKING, Generic, TypeVar

from boundrand.exceptions import (
    ConfigValidationError,
    EntropyUnavailableError,
    InvalidLengthError,
    RangeTooLargeError,
)

if TYPE_CHECKING:
    from boundrand.byte_generator import ByteGenerator

T = TypeVar("T")

_DEFAULT_INT_BITS = 63
_DEFAULT_REJECTION_LIMIT = 1024


@dataclass(frozen=True, slots=True)
class GenerationResult(Generic[T]):
    """A generated value together with what it cost.

    Attributes:
        value: The generated value.
        bytes_consumed: Raw entropy bytes drawn to produce it.
        draws: Number of source calls (greater than one only after rejections).
    """

    value: T
    bytes_consumed: int
    draws: int


def _normalize_int_bounds(minimum: object, maximum: object) -> tuple[int, int]:
    for bound in (minimum, maximum):
        if isinstance(bound, bool) or not isinstance(bound, Integral):
            raise InvalidLengthError(f"Integer range bounds must be integers, got {bound!r}")
    lo, hi = int(minimum), int(maximum)  # type: ignore[call-overload]
    return (lo, hi) if lo <= hi else (hi, lo)


class IntegerRangeGenerator:
    """Uniform integers in a closed range.

    Args:
        byte_generator: Where raw bytes come from.
        int_bits: Magnitude bits of the native signed domain. Bounds must lie
            in ``[-2**int_bits, 2**int_bits - 1]`` and the range width must not
            exceed ``2**int_bits - 1``.
        rejection_limit: Consecutive rejected samples after which the source
            is declared degenerate.

    Raises:
        ConfigValidationError: If *int_bits* or *rejection_limit* is not a
            positive integer.
    """

    def __init__(
        self,
        byte_generator: ByteGenerator,
        int_bits: int = _DEFAULT_INT_BITS,
        rejection_limit: int = _DEFAULT_REJECTION_LIMIT,
    ) -> None:
        for field_name, value in (("int_bits", int_bits), ("rejection_limit", rejection_limit)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigValidationError(
                    f"{field_name} must be a positive integer, got {value!r}"
                )
        self._bytes = byte_generator
        self._max = (1 << int_bits) - 1
        self._min = -(1 << int_bits)
        self._rejection_limit = rejection_limit

    @property
    def int_max(self) -> int:
        """Largest native integer, also the widest permitted range."""
        return self._max

    @property
    def int_min(self) -> int:
        """Smallest native integer."""
        return self._min

    def next(self, minimum: int, maximum: int) -> int:
        """Return a uniform integer between *minimum* and *maximum* inclusive."""
        return self.sample(minimum, maximum).value

    def sample(self, minimum: int, maximum: int) -> GenerationResult[int]:
        """Draw a uniform integer and report its cost.

        Args:
            minimum: One end of the range (inclusive).
            maximum: The other end of the range (inclusive).

        Returns:
            GenerationResult with the value in ``[lo, hi]``.

        Raises:
            InvalidLengthError: If a bound is not an integer.
            RangeTooLargeError: If a bound or the width falls outside the
                native domain.
            EntropyUnavailableError: If the source fails, or keeps producing
                out-of-range samples past the rejection limit.
        """
        lo, hi = _normalize_int_bounds(minimum, maximum)
        if lo < self._min or hi > self._max:
            raise RangeTooLargeError(
                f"Range bounds must lie within [{self._min}, {self._max}], got [{lo}, {hi}]"
            )
        width = hi - lo
        if width == 0:
            return GenerationResult(lo, 0, 0)
        if width > self._max:
            raise RangeTooLargeError(
                "The supplied range is too broad to generate a random integer from"
            )

        bits = width.bit_length()
        n_bytes = (bits + 7) // 8
        mask = (1 << bits) - 1

        draws = 0
        while draws < self._rejection_limit:
            draws += 1
            candidate = int.from_bytes(self._bytes.generate(n_bytes), "big") & mask
            if candidate <= width:
                return GenerationResult(lo + candidate, n_bytes * draws, draws)

        raise EntropyUnavailableError(
            f"Entropy source produced {draws} consecutive out-of-range samples; "
            f"refusing to continue with a degenerate source"
        )


class FloatRangeGenerator:
    """Floats in a closed range, for sampling rather than secrets.

    One integer is drawn over the full native range ``[0, INT_MAX]``, divided
    by ``INT_MAX`` and scaled linearly into ``[lo, hi]``. This is simpler than
    a perfectly uniform float draw, and its resolution is bounded by the
    integer generator's bit width: at most ``INT_MAX + 1`` distinct outputs
    per range. Values that must be unpredictable should be generated as
    integers or bytes instead.
    """

    def __init__(self, integers: IntegerRangeGenerator) -> None:
        self._integers = integers

    def next(self, minimum: float, maximum: float) -> float:
        """Return a float between *minimum* and *maximum* inclusive."""
        return self.sample(minimum, maximum).value

    def sample(self, minimum: float, maximum: float) -> GenerationResult[float]:
        """Draw a float and report its cost.

        Raises:
            InvalidLengthError: If a bound is not a real number or is NaN.
            RangeTooLargeError: If a bound is infinite or too large for a float,
                or the width exceeds ``INT_MAX``.
        """
        for bound in (minimum, maximum):
            if isinstance(bound, bool) or not isinstance(bound, Real):
                raise InvalidLengthError(f"Float range bounds must be real numbers, got {bound!r}")
        try:
            lo, hi = sorted((float(minimum), float(maximum)))
        except OverflowError as exc:
            raise RangeTooLargeError("Float range bounds must be representable as floats") from exc
        if math.isnan(lo) or math.isnan(hi):
            raise InvalidLengthError("Float range bounds must not be NaN")
        if math.isinf(lo) or math.isinf(hi):
            raise RangeTooLargeError("Float range bounds must be finite")

        width = hi - lo
        if width == 0:
            return GenerationResult(hi, 0, 0)
        int_max = self._integers.int_max
        if math.isinf(width) or width > int_max:
            raise RangeTooLargeError(
                "The supplied range is too broad to generate a random floating point number from"
            )

        drawn = self._integers.sample(0, int_max)
        value = min(lo + drawn.value / int_max * width, hi)
        return GenerationResult(value, drawn.bytes_consumed, drawn.draws)


class BooleanGenerator:
    """Fair booleans from the parity of one byte.

    Only as fair as the source's low bit, which holds for any source rated
    LOW or better.
    """

    def __init__(self, byte_generator: ByteGenerator) -> None:
        self._bytes = byte_generator

    def next(self) -> bool:
        """Return ``True`` or ``False`` with equal probability."""
        return self.sample().value

    def sample(self) -> GenerationResult[bool]:
        """Draw one byte and return its parity with its cost."""
        return GenerationResult(self._bytes.generate(1)[0] % 2 == 1, 1, 1)
