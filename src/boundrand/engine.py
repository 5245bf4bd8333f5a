"""RandomEngine: explicit, constructed state for every generator.

An engine owns a configuration, one :class:`ByteGenerator`, an alphabet
cache and a diagnostic logger, and exposes the public generation surface.
Nothing is hidden in process-wide statics except the lazily built default
engine behind the module-level functions, whose construction is guarded by
a lock and which tests can replace via :func:`set_default_engine`.

Usage::

    from boundrand import RandomEngine, CharacterFlag

    with RandomEngine() as engine:
        token = engine.random_string(24, CharacterFlag.ALPHANUMERIC)
        roll = engine.random_int(1, 6)
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Any, TypeVar

from boundrand.alphabet import AlphabetCache, default_alphabet_cache
from boundrand.byte_generator import ByteGenerator, build_byte_generator
from boundrand.config import BoundRandConfig, resolve_config, validate_config
from boundrand.logging.logger import GenerationLogger
from boundrand.logging.types import GenerationRecord
from boundrand.scalars import (
    BooleanGenerator,
    FloatRangeGenerator,
    GenerationResult,
    IntegerRangeGenerator,
)
from boundrand.strings import StringGenerator

if TYPE_CHECKING:
    from collections.abc import Callable

    from boundrand.alphabet import Alphabet
    from boundrand.entropy.base import EntropySource
    from boundrand.strength import StrengthLevel
    from boundrand.strings import AlphabetSpec

logger = logging.getLogger("boundrand")

T = TypeVar("T")


class RandomEngine:
    """Bounded randomness over a rated entropy source.

    Args:
        config: Configuration; loaded from the environment when omitted.
        byte_generator: Pre-built byte generator. Built from *config* when
            omitted.
        alphabets: Alphabet cache. The process-wide cache when omitted.

    Raises:
        ConfigValidationError: If the configuration is invalid.
        SourceUnavailableError: If no entropy source qualifies.
    """

    def __init__(
        self,
        config: BoundRandConfig | None = None,
        *,
        byte_generator: ByteGenerator | None = None,
        alphabets: AlphabetCache | None = None,
    ) -> None:
        self._config = config if config is not None else BoundRandConfig()
        validate_config(self._config)

        if byte_generator is None:
            byte_generator = build_byte_generator(self._config)
        self._bytes = byte_generator
        self._alphabets = alphabets if alphabets is not None else default_alphabet_cache()

        self._integers = IntegerRangeGenerator(
            self._bytes,
            int_bits=self._config.int_bits,
            rejection_limit=self._config.rejection_limit,
        )
        self._floats = FloatRangeGenerator(self._integers)
        self._booleans = BooleanGenerator(self._bytes)
        self._strings = StringGenerator(
            self._bytes,
            self._alphabets,
            dense_alphabet=self._config.dense_alphabet,
            single_char_policy=self._config.single_char_policy,
        )
        self._logger = GenerationLogger(self._config)

    @classmethod
    def from_source(
        cls,
        source: EntropySource,
        config: BoundRandConfig | None = None,
    ) -> RandomEngine:
        """Build an engine that draws from exactly one source.

        The source must still meet ``config.min_strength``.
        """
        config = config if config is not None else BoundRandConfig()
        byte_generator = ByteGenerator([source], min_strength=config.min_strength_level)
        return cls(config, byte_generator=byte_generator)

    # --- Introspection ---

    @property
    def config(self) -> BoundRandConfig:
        """The configuration this engine was built with."""
        return self._config

    @property
    def strength(self) -> StrengthLevel:
        """Strength of the serving entropy source."""
        return self._bytes.strength

    @property
    def byte_generator(self) -> ByteGenerator:
        """The choke point all generators draw through."""
        return self._bytes

    @property
    def diagnostics(self) -> GenerationLogger:
        """The engine's diagnostic logger."""
        return self._logger

    # --- Generation ---

    def random_bytes(self, length: int) -> bytes:
        """Return exactly *length* random bytes.

        Raises:
            InvalidLengthError: If *length* < 1.
            EntropyUnavailableError: If the source cannot supply them.
        """
        started = time.perf_counter()
        data = self._bytes.generate(length)
        self._record("bytes", f"length={length}", GenerationResult(data, length, 1), started)
        return data

    def random_int(self, minimum: int = 0, maximum: int | None = None) -> int:
        """Return a uniform integer in the closed range, bounds in either order.

        *maximum* defaults to the native ``INT_MAX``.

        Raises:
            InvalidLengthError: If a bound is not an integer.
            RangeTooLargeError: If the range exceeds the native domain.
            EntropyUnavailableError: If the source fails.
        """
        if maximum is None:
            maximum = self._integers.int_max
        requested = f"[{minimum}, {maximum}]"
        return self._timed("int", requested, self._integers.sample, minimum, maximum)

    def random_float(self, minimum: float = 0.0, maximum: float = 1.0) -> float:
        """Return a float in the closed range, bounds in either order.

        For sampling only; see :class:`~boundrand.scalars.FloatRangeGenerator`.
        """
        requested = f"[{minimum}, {maximum}]"
        return self._timed("float", requested, self._floats.sample, minimum, maximum)

    def random_bool(self) -> bool:
        """Return a fair boolean."""
        return self._timed("bool", "1", self._booleans.sample)

    def random_string(self, length: int | None = None, alphabet_spec: AlphabetSpec = None) -> str:
        """Return a string of exactly *length* characters.

        Args:
            length: Number of characters; ``default_string_length`` when omitted.
            alphabet_spec: ``None`` for dense base64 text, otherwise an
                Alphabet, an explicit character string, or a CharacterFlag mask.

        Raises:
            InvalidLengthError: If *length* < 1.
            InvalidAlphabetSpecError: If the alphabet cannot be resolved.
            EntropyUnavailableError: If the source fails.
        """
        if length is None:
            length = self._config.default_string_length
        shape = "dense" if alphabet_spec is None else "alphabet"
        return self._timed(
            "string", f"length={length} mode={shape}", self._strings.sample, length, alphabet_spec
        )

    def build_alphabet(self, flags: int) -> Alphabet:
        """Build (or fetch) an alphabet from this engine's cache."""
        return self._alphabets.build(flags)

    # --- Lifecycle ---

    def derive(self, **overrides: Any) -> RandomEngine:
        """Return an engine sharing this one's sources with some settings changed.

        Only generation parameters may change; see ``resolve_config()``.

        Raises:
            ConfigValidationError: If an override is unknown, names an
                infrastructure field, or fails validation.
        """
        config = resolve_config(self._config, overrides)
        return RandomEngine(config, byte_generator=self._bytes, alphabets=self._alphabets)

    def health_check(self) -> dict[str, Any]:
        """Return the byte generator's health status."""
        return self._bytes.health_check()

    def close(self) -> None:
        """Close the underlying entropy sources."""
        self._bytes.close()

    def __enter__(self) -> RandomEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Internals ---

    def _timed(
        self,
        operation: str,
        requested: str,
        draw: Callable[..., GenerationResult[T]],
        *args: Any,
    ) -> T:
        started = time.perf_counter()
        result = draw(*args)
        self._record(operation, requested, result, started)
        return result.value

    def _record(
        self,
        operation: str,
        requested: str,
        result: GenerationResult[Any],
        started: float,
    ) -> None:
        if not self._logger.enabled:
            return
        self._logger.log_call(
            GenerationRecord(
                timestamp_ns=time.time_ns(),
                operation=operation,
                requested=requested,
                bytes_consumed=result.bytes_consumed,
                draws=result.draws,
                source=self._bytes.source_name,
                strength=self._bytes.strength.label,
                elapsed_ms=(time.perf_counter() - started) * 1000.0,
            )
        )


# ---------------------------------------------------------------------------
# Default engine and module-level API
# ---------------------------------------------------------------------------

_default_engine: RandomEngine | None = None
_default_lock = threading.Lock()


def get_default_engine() -> RandomEngine:
    """Return the process-wide engine, building it from the environment once."""
    global _default_engine
    engine = _default_engine
    if engine is not None:
        return engine
    with _default_lock:
        if _default_engine is None:
            _default_engine = RandomEngine()
            logger.debug("Built default engine on %r", _default_engine.byte_generator.source_name)
        return _default_engine


def set_default_engine(engine: RandomEngine | None) -> RandomEngine | None:
    """Replace the process-wide engine; ``None`` rebuilds lazily on next use.

    Returns:
        The previous default engine, if one had been built.
    """
    global _default_engine
    with _default_lock:
        previous, _default_engine = _default_engine, engine
    return previous


def random_bytes(length: int) -> bytes:
    """Return exactly *length* random bytes from the default engine."""
    return get_default_engine().random_bytes(length)


def random_int(minimum: int = 0, maximum: int | None = None) -> int:
    """Return a uniform integer in ``[min(a, b), max(a, b)]`` from the default engine."""
    return get_default_engine().random_int(minimum, maximum)


def random_float(minimum: float = 0.0, maximum: float = 1.0) -> float:
    """Return a float in the closed range from the default engine."""
    return get_default_engine().random_float(minimum, maximum)


def random_bool() -> bool:
    """Return a fair boolean from the default engine."""
    return get_default_engine().random_bool()


def random_string(length: int | None = None, alphabet_spec: AlphabetSpec = None) -> str:
    """Return a string of exactly *length* characters from the default engine."""
    return get_default_engine().random_string(length, alphabet_spec)
