"""Abstract base class for all entropy sources.

Every entropy source (OS randomness, a userspace CSPRNG, or a test mock)
implements this interface. The ABC validates requested lengths and checks
that implementations return exactly the number of bytes asked for, so
subclasses only implement the raw draw in ``_generate()``. A source's
``strength`` is a class-level constant: it never changes over the lifetime
of an instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from boundrand.exceptions import EntropyUnavailableError, InvalidLengthError
from boundrand.strength import StrengthLevel


class EntropySource(ABC):
    """Abstract base for all entropy sources.

    Implementations must provide unpredictable bytes on demand and declare
    their strength via the ``STRENGTH`` class attribute. Sources that depend
    on an optional platform feature must raise
    :class:`~boundrand.exceptions.SourceUnavailableError` from ``__init__``
    when the feature is missing.
    """

    STRENGTH: ClassVar[StrengthLevel] = StrengthLevel.NONE

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source identifier (e.g., ``'system'``, ``'openssl'``)."""

    @property
    def strength(self) -> StrengthLevel:
        """How resistant this source's output is to prediction."""
        return self.STRENGTH

    @property
    def is_available(self) -> bool:
        """Whether the source can currently provide entropy."""
        return True

    def get_random_bytes(self, n: int) -> bytes:
        """Return exactly *n* random bytes.

        Args:
            n: Number of random bytes to generate. Must be at least 1.

        Returns:
            Exactly *n* bytes of entropy.

        Raises:
            InvalidLengthError: If *n* is not a positive integer.
            EntropyUnavailableError: If the source cannot provide *n* bytes.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise InvalidLengthError(f"The number of random bytes must be an integer >= 1, got {n!r}")
        data = self._generate(n)
        if len(data) != n:
            raise EntropyUnavailableError(
                f"Source {self.name!r} returned {len(data)} bytes, expected {n}"
            )
        return data

    @abstractmethod
    def _generate(self, n: int) -> bytes:
        """Draw *n* raw bytes from the underlying primitive.

        *n* has already been validated. Implementations translate primitive
        failures into ``EntropyUnavailableError``.
        """

    def close(self) -> None:
        """Release resources (file handles, library contexts)."""

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this source.

        Returns:
            Dictionary with ``'source'``, ``'strength'`` and ``'healthy'`` keys.
        """
        return {"source": self.name, "strength": self.strength.label, "healthy": self.is_available}
