"""Kernel entropy via the ``getrandom()`` syscall.

Only exists on platforms where CPython exposes ``os.getrandom`` (Linux
3.17+). With ``getrandom_nonblocking`` enabled the call passes
``GRND_NONBLOCK``, so an entropy pool that is not yet initialized (very
early boot) is reported as :class:`~boundrand.exceptions.EntropyUnavailableError`
instead of blocking the caller.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from boundrand.entropy.base import EntropySource
from boundrand.entropy.registry import register_entropy_source
from boundrand.exceptions import EntropyUnavailableError, SourceUnavailableError
from boundrand.strength import StrengthLevel

if TYPE_CHECKING:
    from boundrand.config import BoundRandConfig

logger = logging.getLogger("boundrand")


@register_entropy_source("getrandom")
class GetrandomEntropySource(EntropySource):
    """``os.getrandom()`` wrapper.

    Args:
        config: Configuration providing ``getrandom_nonblocking``.

    Raises:
        SourceUnavailableError: If the platform has no ``getrandom()``.
    """

    STRENGTH = StrengthLevel.STRONG

    def __init__(self, config: BoundRandConfig | None = None) -> None:
        if not hasattr(os, "getrandom"):
            raise SourceUnavailableError("getrandom() is not available on this platform")
        nonblocking = config.getrandom_nonblocking if config is not None else False
        self._flags = os.GRND_NONBLOCK if nonblocking else 0

    @property
    def name(self) -> str:
        """Return ``'getrandom'``."""
        return "getrandom"

    def _generate(self, n: int) -> bytes:
        chunks: list[bytes] = []
        remaining = n
        # getrandom() may return fewer bytes than asked for large requests.
        while remaining:
            try:
                chunk = os.getrandom(remaining, self._flags)
            except BlockingIOError as exc:
                raise EntropyUnavailableError(
                    "The kernel entropy pool is not initialized yet"
                ) from exc
            except InterruptedError:
                continue
            except OSError as exc:
                raise EntropyUnavailableError(f"getrandom() failed: {exc}") from exc
            if not chunk:
                raise EntropyUnavailableError("getrandom() returned no data")
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)
