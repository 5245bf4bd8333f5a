"""OpenSSL entropy source using ``ssl.RAND_bytes()``.

``RAND_bytes()`` is a userspace CSPRNG seeded from the kernel, so it is
rated MEDIUM: usable in a cryptographic context, but when security is the
primary concern the kernel sources are preferable. The ``ssl`` module is
optional in CPython builds; this module degrades gracefully when it is
missing and the source refuses construction.
"""

from __future__ import annotations

from boundrand.entropy.base import EntropySource
from boundrand.entropy.registry import register_entropy_source
from boundrand.exceptions import EntropyUnavailableError, SourceUnavailableError
from boundrand.strength import StrengthLevel

# ---------------------------------------------------------------------------
# Import guard: no crash when CPython was built without OpenSSL
# ---------------------------------------------------------------------------

try:
    import ssl

    _OPENSSL_AVAILABLE = hasattr(ssl, "RAND_bytes")
except ImportError:
    _OPENSSL_AVAILABLE = False


@register_entropy_source("openssl")
class OpenSSLEntropySource(EntropySource):
    """OpenSSL ``RAND_bytes()`` wrapper.

    Raises:
        SourceUnavailableError: If the ``ssl`` module is not available.
    """

    STRENGTH = StrengthLevel.MEDIUM

    def __init__(self) -> None:
        if not _OPENSSL_AVAILABLE:
            raise SourceUnavailableError("The OpenSSL bindings (ssl module) are not available")

    @property
    def name(self) -> str:
        """Return ``'openssl'``."""
        return "openssl"

    def _generate(self, n: int) -> bytes:
        try:
            return ssl.RAND_bytes(n)
        except ssl.SSLError as exc:
            raise EntropyUnavailableError(
                f"OpenSSL could not generate {n} sufficiently random bytes: {exc}"
            ) from exc
