"""boundrand: bounded randomness over honestly rated entropy sources.

Turns raw entropy into integers, floats, booleans and strings of a
caller-specified range, length and alphabet. Integers are drawn without
modulo bias, zero-width and inverted ranges are handled, and a missing or
exhausted entropy source raises instead of degrading silently.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("boundrand")
except PackageNotFoundError:
    __version__ = "0.0.0"

from boundrand.alphabet import Alphabet, AlphabetCache, CharacterFlag, build_alphabet
from boundrand.byte_generator import ByteGenerator, SelectionPolicy, build_byte_generator
from boundrand.config import BoundRandConfig, resolve_config
from boundrand.engine import (
    RandomEngine,
    get_default_engine,
    random_bool,
    random_bytes,
    random_float,
    random_int,
    random_string,
    set_default_engine,
)
from boundrand.exceptions import (
    BoundRandError,
    ConfigValidationError,
    EntropyUnavailableError,
    InvalidAlphabetSpecError,
    InvalidLengthError,
    RangeTooLargeError,
    SourceUnavailableError,
)
from boundrand.strength import StrengthLevel
from boundrand.strings import SingleCharacterAlphabetWarning

__all__ = [
    "Alphabet",
    "AlphabetCache",
    "BoundRandConfig",
    "BoundRandError",
    "ByteGenerator",
    "CharacterFlag",
    "ConfigValidationError",
    "EntropyUnavailableError",
    "InvalidAlphabetSpecError",
    "InvalidLengthError",
    "RandomEngine",
    "RangeTooLargeError",
    "SelectionPolicy",
    "SingleCharacterAlphabetWarning",
    "SourceUnavailableError",
    "StrengthLevel",
    "__version__",
    "build_alphabet",
    "build_byte_generator",
    "get_default_engine",
    "random_bool",
    "random_bytes",
    "random_float",
    "random_int",
    "random_string",
    "resolve_config",
    "set_default_engine",
]
