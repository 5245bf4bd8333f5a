"""Fallback entropy source: opt-in composition wrapper with logged failover.

``FallbackEntropySource`` wraps a *primary* and a *fallback* source. When the
primary raises :class:`~boundrand.exceptions.EntropyUnavailableError`, the
wrapper delegates to the fallback and logs a warning. **All other exceptions
propagate unchanged**: only entropy unavailability is recoverable.

The wrapper never hides a downgrade. Its reported strength is the weaker of
the two sources, because any given draw may have come from either. It is
only ever built when the caller sets ``fallback_mode="weaker"``.
"""

from __future__ import annotations

import logging
from typing import Any

from boundrand.entropy.base import EntropySource
from boundrand.exceptions import EntropyUnavailableError
from boundrand.strength import StrengthLevel

logger = logging.getLogger("boundrand")


class FallbackEntropySource(EntropySource):
    """Tries the primary, falls back on ``EntropyUnavailableError``.

    Reports which source was actually used via :attr:`last_source_used`.
    Chains of more than two sources are built by nesting wrappers.

    Args:
        primary: The preferred entropy source.
        fallback: The source to use when the primary is unavailable.
    """

    def __init__(self, primary: EntropySource, fallback: EntropySource) -> None:
        self._primary = primary
        self._fallback = fallback
        self._strength = min(primary.strength, fallback.strength)
        self._last_source_used: str = primary.name

    @property
    def name(self) -> str:
        """Return a compound name: ``'<primary>+<fallback>'``."""
        return f"{self._primary.name}+{self._fallback.name}"

    @property
    def strength(self) -> StrengthLevel:
        """The weaker of the primary and fallback strengths."""
        return self._strength

    @property
    def is_available(self) -> bool:
        """Returns ``True`` if either the primary or fallback is available."""
        return self._primary.is_available or self._fallback.is_available

    @property
    def last_source_used(self) -> str:
        """Name of the source that provided bytes on the last call."""
        return self._last_source_used

    def _generate(self, n: int) -> bytes:
        try:
            data = self._primary.get_random_bytes(n)
            self._last_source_used = self._primary.name
            return data
        except EntropyUnavailableError:
            logger.warning(
                "Entropy source %r unavailable, falling back to %r (strength %s)",
                self._primary.name,
                self._fallback.name,
                self._fallback.strength.label,
            )
            data = self._fallback.get_random_bytes(n)
            self._last_source_used = self._fallback.name
            return data

    def close(self) -> None:
        """Close both primary and fallback sources."""
        self._primary.close()
        self._fallback.close()

    def health_check(self) -> dict[str, Any]:
        """Return health status for both sources."""
        return {
            "source": self.name,
            "strength": self.strength.label,
            "healthy": self.is_available,
            "primary": self._primary.health_check(),
            "fallback": self._fallback.health_check(),
            "last_source_used": self._last_source_used,
        }
