"""Character sets for alphabet-mapped string generation.

An :class:`Alphabet` is built from a bitmask of :class:`CharacterFlag` values.
Runs are concatenated in a fixed order (upper, lower, numeric, hex-upper,
hex-lower, base64-extra, symbols, brackets, punctuation), ambiguous glyphs
are removed when ``LEGIBLE_ONLY`` is set, and the result is deduplicated
keeping the first occurrence. The build is a pure function of the resolved
mask, so alphabets are cached per mask.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import IntFlag
from numbers import Integral
from typing import TYPE_CHECKING

from boundrand.exceptions import InvalidAlphabetSpecError

if TYPE_CHECKING:
    from collections.abc import Iterator


class CharacterFlag(IntFlag):
    """Semantic character groups that can be OR'd into an alphabet request."""

    UPPER = 1
    LOWER = 2
    NUMERIC = 4
    HEX_UPPER = 8
    HEX_LOWER = 16
    BASE64_EXTRA = 32
    SYMBOLS = 64
    BRACKETS = 128
    PUNCTUATION = 256
    LEGIBLE_ONLY = 512
    """Exclusion modifier; contributes no characters of its own."""

    ALPHA = UPPER | LOWER
    ALPHANUMERIC = UPPER | LOWER | NUMERIC
    BASE64 = UPPER | LOWER | NUMERIC | BASE64_EXTRA


# Order matters: it defines the canonical character order of every alphabet.
_RUNS: tuple[tuple[CharacterFlag, str], ...] = (
    (CharacterFlag.UPPER, "ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
    (CharacterFlag.LOWER, "abcdefghijklmnopqrstuvwxyz"),
    (CharacterFlag.NUMERIC, "0123456789"),
    (CharacterFlag.HEX_UPPER, "0123456789ABCDEF"),
    (CharacterFlag.HEX_LOWER, "0123456789abcdef"),
    (CharacterFlag.BASE64_EXTRA, "+/"),
    (CharacterFlag.SYMBOLS, "!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"),
    (CharacterFlag.BRACKETS, "()[]{}<>"),
    (CharacterFlag.PUNCTUATION, ",.;:"),
)

AMBIGUOUS_CHARACTERS: frozenset[str] = frozenset("0O1lI5S2Z6G8B" "()[]{}<>" ",.;:")

_SOURCE_FLAGS = CharacterFlag(sum(int(flag) for flag, _ in _RUNS))
_ALL_FLAGS = _SOURCE_FLAGS | CharacterFlag.LEGIBLE_ONLY


def _dedupe(characters: str) -> str:
    # dict preserves insertion order, so the first occurrence wins.
    return "".join(dict.fromkeys(characters))


@dataclass(frozen=True, slots=True)
class Alphabet:
    """An ordered sequence of unique characters.

    Attributes:
        characters: The characters, without duplicates, in canonical order.
        flags: The resolved mask this alphabet was built from, or ``None``
            for alphabets built from an explicit character list.
    """

    characters: str
    flags: CharacterFlag | None = None

    def __post_init__(self) -> None:
        if not self.characters:
            raise InvalidAlphabetSpecError("An alphabet must contain at least one character")
        if len(set(self.characters)) != len(self.characters):
            raise InvalidAlphabetSpecError("Alphabet characters must be unique")

    @classmethod
    def from_characters(cls, characters: str) -> Alphabet:
        """Build an uncached alphabet from an explicit character list.

        Duplicates are dropped, keeping the first occurrence.

        Raises:
            InvalidAlphabetSpecError: If *characters* is empty.
        """
        return cls(_dedupe(characters))

    def __len__(self) -> int:
        return len(self.characters)

    def __getitem__(self, index: int) -> str:
        return self.characters[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.characters)

    def __contains__(self, character: object) -> bool:
        return isinstance(character, str) and len(character) == 1 and character in self.characters

    def __str__(self) -> str:
        return self.characters


def resolve_flags(flags: int) -> CharacterFlag:
    """Normalize a flag mask into the key alphabets are cached under.

    ``LEGIBLE_ONLY`` on its own implies ``ALPHANUMERIC``.

    Args:
        flags: A CharacterFlag combination or its integer value.

    Returns:
        The resolved mask.

    Raises:
        InvalidAlphabetSpecError: If *flags* is not a positive integer or has
            bits outside the known flags.
    """
    if isinstance(flags, bool) or not isinstance(flags, Integral):
        raise InvalidAlphabetSpecError(f"Alphabet flags must be an integer mask, got {flags!r}")
    flags = int(flags)
    if flags <= 0:
        raise InvalidAlphabetSpecError("At least one character flag must be given")
    if flags & ~int(_ALL_FLAGS):
        raise InvalidAlphabetSpecError(f"Unknown character flag bits in mask {flags:#x}")

    resolved = CharacterFlag(flags)
    if resolved & CharacterFlag.LEGIBLE_ONLY and not resolved & _SOURCE_FLAGS:
        resolved |= CharacterFlag.ALPHANUMERIC
    return resolved


def _build(resolved: CharacterFlag) -> Alphabet:
    accumulated = "".join(run for flag, run in _RUNS if resolved & flag)
    if resolved & CharacterFlag.LEGIBLE_ONLY:
        accumulated = "".join(c for c in accumulated if c not in AMBIGUOUS_CHARACTERS)
    if not accumulated:
        raise InvalidAlphabetSpecError(f"Flags {resolved!r} resolve to an empty alphabet")
    return Alphabet(_dedupe(accumulated), resolved)


class AlphabetCache:
    """Append-only cache of built alphabets keyed by resolved mask.

    The first build for a mask happens under a lock so concurrent callers
    never build duplicates or see a partial alphabet; later lookups read the
    dict without locking.
    """

    def __init__(self) -> None:
        self._alphabets: dict[int, Alphabet] = {}
        self._lock = threading.Lock()

    def build(self, flags: int) -> Alphabet:
        """Return the alphabet for *flags*, building it on first request.

        Args:
            flags: A CharacterFlag combination or its integer value.

        Returns:
            The cached Alphabet; semantically identical masks share one instance.

        Raises:
            InvalidAlphabetSpecError: If the mask is invalid or resolves to
                no characters.
        """
        key = int(resolve_flags(flags))
        alphabet = self._alphabets.get(key)
        if alphabet is not None:
            return alphabet
        with self._lock:
            alphabet = self._alphabets.get(key)
            if alphabet is None:
                alphabet = _build(CharacterFlag(key))
                self._alphabets[key] = alphabet
        return alphabet

    def __len__(self) -> int:
        return len(self._alphabets)

    def __contains__(self, flags: object) -> bool:
        try:
            return int(resolve_flags(flags)) in self._alphabets  # type: ignore[arg-type]
        except InvalidAlphabetSpecError:
            return False


_default_cache = AlphabetCache()


def default_alphabet_cache() -> AlphabetCache:
    """Return the process-wide alphabet cache."""
    return _default_cache


def build_alphabet(flags: int) -> Alphabet:
    """Build (or fetch) an alphabet from the process-wide cache.

    Example::

        >>> str(build_alphabet(CharacterFlag.UPPER | CharacterFlag.NUMERIC))[:3]
        'ABC'
    """
    return _default_cache.build(flags)
