"""Exception hierarchy for boundrand.

All exceptions derive from BoundRandError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
"""


class BoundRandError(Exception):
    """Base exception for all boundrand errors."""


class InvalidLengthError(BoundRandError):
    """A requested length or range bound is non-positive or malformed.

    Raised for ``length < 1`` byte and string requests, and for range
    bounds that are not numbers of the expected kind (non-integral integer
    bounds, NaN float bounds).
    """


class InvalidAlphabetSpecError(BoundRandError):
    """An alphabet request cannot be resolved to a usable character set.

    Raised for zero, negative or unknown flag masks, for explicit character
    lists that are empty, and for flag combinations whose resolved alphabet
    is empty after ambiguous glyphs are excluded.
    """


class RangeTooLargeError(BoundRandError):
    """The requested range exceeds the native integer domain."""


class EntropyUnavailableError(BoundRandError):
    """No entropy source could provide the requested bytes.

    Raised when the host primitive refuses to produce output (for example an
    uninitialized kernel pool in non-blocking mode), returns a short read, or
    keeps producing samples that are rejected. Never recovered by
    substituting weaker randomness unless the caller opted into a
    fallback chain.
    """


class SourceUnavailableError(BoundRandError):
    """An entropy backend cannot be constructed on this platform.

    Raised at construction time, never at first use.
    """


class ConfigValidationError(BoundRandError):
    """Configuration field validation failed.

    Raised when overrides name unknown or non-overridable fields, or when a
    field holds a value outside its accepted set.
    """
