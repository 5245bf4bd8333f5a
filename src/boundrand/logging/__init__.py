"""Diagnostic logging subsystem for boundrand.

Provides immutable per-call generation records and a configurable logger
that supports none/summary/full verbosity and in-memory diagnostic mode.
"""

from boundrand.logging.logger import GenerationLogger
from boundrand.logging.types import GenerationRecord

__all__ = [
    "GenerationLogger",
    "GenerationRecord",
]
