"""Random strings of an exact length.

Two modes:

* **Dense** (no alphabet): ``ceil(3n / 4)`` raw bytes are base64 encoded,
  padding is stripped, and the text is cut to ``n`` characters.
* **Alphabet**: ``n`` raw bytes drive a cumulative walk over an alphabet of
  size ``k``: ``position = (position + byte) % k`` and ``alphabet[position]``
  is emitted for each byte. The walk spreads the ``256 % k`` excess across
  positions instead of always favouring the lowest indices, but it is *not*
  a perfectly uniform per-character mapping. Only the byte stream feeding it
  is assumed cryptographically strong; do not rely on per-character
  uniformity for secrets drawn from small alphabets.
"""

from __future__ import annotations

import base64
import logging
import warnings
from numbers import Integral
from typing import TYPE_CHECKING, Union

from boundrand.alphabet import Alphabet, AlphabetCache, default_alphabet_cache
from boundrand.exceptions import InvalidAlphabetSpecError, InvalidLengthError
from boundrand.scalars import GenerationResult

if TYPE_CHECKING:
    from boundrand.byte_generator import ByteGenerator

logger = logging.getLogger("boundrand")

AlphabetSpec = Union[Alphabet, str, int, None]


class SingleCharacterAlphabetWarning(UserWarning):
    """A string longer than one character was requested from a one-character alphabet.

    The result is that character repeated, which carries no entropy at all.
    """


class StringGenerator:
    """Generates strings in dense or alphabet mode.

    Args:
        byte_generator: Where raw bytes come from.
        alphabets: Cache used to resolve flag masks into alphabets.
        dense_alphabet: ``'standard'`` (``+/``) or ``'urlsafe'`` (``-_``) base64.
        single_char_policy: ``'warn'`` to warn and return the repeated
            character, ``'error'`` to raise ``InvalidAlphabetSpecError``.
    """

    def __init__(
        self,
        byte_generator: ByteGenerator,
        alphabets: AlphabetCache | None = None,
        dense_alphabet: str = "standard",
        single_char_policy: str = "warn",
    ) -> None:
        self._bytes = byte_generator
        self._alphabets = alphabets if alphabets is not None else default_alphabet_cache()
        self._encode = base64.urlsafe_b64encode if dense_alphabet == "urlsafe" else base64.b64encode
        self._single_char_policy = single_char_policy

    def resolve_alphabet(self, alphabet_spec: AlphabetSpec) -> Alphabet | None:
        """Turn an alphabet spec into an Alphabet (``None`` selects dense mode).

        Raises:
            InvalidAlphabetSpecError: If the spec is empty, an invalid mask, or
                of an unsupported type.
        """
        if alphabet_spec is None or isinstance(alphabet_spec, Alphabet):
            return alphabet_spec
        if isinstance(alphabet_spec, str):
            if not alphabet_spec:
                raise InvalidAlphabetSpecError("An explicit character list must not be empty")
            return Alphabet.from_characters(alphabet_spec)
        if isinstance(alphabet_spec, Integral) and not isinstance(alphabet_spec, bool):
            return self._alphabets.build(alphabet_spec)
        raise InvalidAlphabetSpecError(f"Unsupported alphabet spec: {alphabet_spec!r}")

    def next(self, length: int, alphabet_spec: AlphabetSpec = None) -> str:
        """Return a random string of exactly *length* characters."""
        return self.sample(length, alphabet_spec).value

    def sample(self, length: int, alphabet_spec: AlphabetSpec = None) -> GenerationResult[str]:
        """Generate a string and report its cost.

        Args:
            length: Exact number of characters. Must be at least 1.
            alphabet_spec: ``None`` for dense mode, otherwise an Alphabet, an
                explicit character string, or a CharacterFlag mask.

        Returns:
            GenerationResult whose value has exactly *length* characters.

        Raises:
            InvalidLengthError: If *length* is not a positive integer.
            InvalidAlphabetSpecError: If the alphabet spec cannot be resolved,
                or it has one character and the policy is ``'error'``.
            EntropyUnavailableError: If the source fails.
        """
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise InvalidLengthError(
                f"The expected length of the generated string must be at least 1, got {length!r}"
            )
        alphabet = self.resolve_alphabet(alphabet_spec)
        if alphabet is None:
            return self._dense(length)
        if len(alphabet) == 1:
            return self._single(length, alphabet[0])
        return self._walk(length, alphabet)

    def _dense(self, length: int) -> GenerationResult[str]:
        n_bytes = -(-length * 3 // 4)
        text = self._encode(self._bytes.generate(n_bytes)).decode("ascii").rstrip("=")
        return GenerationResult(text[:length], n_bytes, 1)

    def _walk(self, length: int, alphabet: Alphabet) -> GenerationResult[str]:
        size = len(alphabet)
        chars = alphabet.characters
        out: list[str] = []
        position = 0
        for byte in self._bytes.generate(length):
            position = (position + byte) % size
            out.append(chars[position])
        return GenerationResult("".join(out), length, 1)

    def _single(self, length: int, character: str) -> GenerationResult[str]:
        if length > 1:
            message = (
                f"Attempted to generate a random string of {length} characters from a "
                f"one-character alphabet; the result is {character!r} repeated and "
                f"carries no entropy"
            )
            if self._single_char_policy == "error":
                raise InvalidAlphabetSpecError(message)
            logger.warning(message)
            warnings.warn(message, SingleCharacterAlphabetWarning, stacklevel=4)
        return GenerationResult(character * length, 0, 0)
