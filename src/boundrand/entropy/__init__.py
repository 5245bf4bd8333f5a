"""Entropy source subsystem for boundrand.

Re-exports the ABC, registry, and all built-in source implementations
for convenient access::

    from boundrand.entropy import EntropySource, EntropySourceRegistry
    from boundrand.entropy import SystemEntropySource, MockUniformSource
"""

from boundrand.entropy.base import EntropySource
from boundrand.entropy.fallback import FallbackEntropySource
from boundrand.entropy.getrandom import GetrandomEntropySource
from boundrand.entropy.mock import MockUniformSource
from boundrand.entropy.openssl import OpenSSLEntropySource
from boundrand.entropy.registry import EntropySourceRegistry, register_entropy_source
from boundrand.entropy.system import SystemEntropySource

__all__ = [
    "EntropySource",
    "EntropySourceRegistry",
    "FallbackEntropySource",
    "GetrandomEntropySource",
    "MockUniformSource",
    "OpenSSLEntropySource",
    "SystemEntropySource",
    "register_entropy_source",
]
