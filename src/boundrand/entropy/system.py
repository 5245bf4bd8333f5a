"""System entropy source using ``os.urandom()``.

The default source. It reads the kernel CSPRNG (``getrandom()``,
``/dev/urandom`` or ``BCryptGenRandom`` depending on the platform) and is
available everywhere CPython runs.
"""

from __future__ import annotations

import os

from boundrand.entropy.base import EntropySource
from boundrand.entropy.registry import register_entropy_source
from boundrand.exceptions import EntropyUnavailableError
from boundrand.strength import StrengthLevel


@register_entropy_source("system")
class SystemEntropySource(EntropySource):
    """``os.urandom()`` wrapper: always constructible, cryptographically strong."""

    STRENGTH = StrengthLevel.STRONG

    @property
    def name(self) -> str:
        """Return ``'system'``."""
        return "system"

    def _generate(self, n: int) -> bytes:
        try:
            return os.urandom(n)
        except OSError as exc:
            raise EntropyUnavailableError(
                f"os.urandom() could not supply {n} bytes: {exc}"
            ) from exc
