"""The single choke point between generators and entropy sources.

Every higher-level generator asks a :class:`ByteGenerator` for exactly the
number of bytes it needs. The byte generator owns source selection:

* sources weaker than the configured minimum are never used;
* by default the strongest qualifying source is used, and nothing else;
* a caller who opts into ``fallback_mode="weaker"`` gets the remaining
  qualifying sources chained behind the selected one, and the generator's
  reported strength drops to that of the weakest link.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from boundrand.config import validate_config
from boundrand.entropy import EntropySourceRegistry, FallbackEntropySource
from boundrand.exceptions import ConfigValidationError, InvalidLengthError, SourceUnavailableError
from boundrand.strength import StrengthLevel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from boundrand.config import BoundRandConfig
    from boundrand.entropy.base import EntropySource

logger = logging.getLogger("boundrand")


class SelectionPolicy(str, Enum):
    """How a ByteGenerator picks its source among qualifying candidates."""

    STRONGEST = "strongest"
    """Highest strength wins; ties go to the earlier candidate."""

    PREFERENCE = "preference"
    """The first qualifying candidate in the order given wins."""


class ByteGenerator:
    """Wraps one or more entropy sources behind ``generate(length)``.

    Args:
        sources: Candidate sources in preference order.
        policy: How to pick among qualifying sources.
        min_strength: Weakest strength that may ever be used.
        allow_fallback: Chain the remaining qualifying sources behind the
            selected one. Off by default: a generator never silently
            downgrades.

    Raises:
        SourceUnavailableError: If no candidate is available at or above
            *min_strength*.
    """

    def __init__(
        self,
        sources: Sequence[EntropySource],
        *,
        policy: SelectionPolicy | str = SelectionPolicy.STRONGEST,
        min_strength: StrengthLevel = StrengthLevel.MEDIUM,
        allow_fallback: bool = False,
    ) -> None:
        self._candidates = list(sources)
        self._policy = SelectionPolicy(policy)
        self._min_strength = min_strength

        qualifying = [
            s for s in self._candidates if s.is_available and s.strength >= min_strength
        ]
        if not qualifying:
            offered = ", ".join(f"{s.name} ({s.strength.label})" for s in self._candidates)
            raise SourceUnavailableError(
                f"No entropy source of strength >= {min_strength.label} is available "
                f"(candidates: {offered or 'none'})"
            )

        if self._policy is SelectionPolicy.STRONGEST:
            # sorted() is stable, so equal strengths keep preference order.
            qualifying = sorted(qualifying, key=lambda s: s.strength, reverse=True)

        source: EntropySource = qualifying[-1] if allow_fallback else qualifying[0]
        if allow_fallback:
            for candidate in reversed(qualifying[:-1]):
                source = FallbackEntropySource(candidate, source)
        self._source = source

        logger.debug(
            "Selected entropy source %r (strength %s, policy %s)",
            self._source.name,
            self._source.strength.label,
            self._policy.value,
        )

    @property
    def source(self) -> EntropySource:
        """The source (or fallback chain) that serves every request."""
        return self._source

    @property
    def source_name(self) -> str:
        """Name of the serving source."""
        return self._source.name

    @property
    def strength(self) -> StrengthLevel:
        """Strength of the serving source; constant for this generator's lifetime."""
        return self._source.strength

    def generate(self, length: int) -> bytes:
        """Return exactly *length* unpredictable bytes.

        Args:
            length: Number of bytes. Must be an integer >= 1.

        Returns:
            Exactly *length* bytes.

        Raises:
            InvalidLengthError: If *length* is not a positive integer.
            EntropyUnavailableError: If the source cannot supply the bytes.
        """
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise InvalidLengthError(
                f"The expected number of random bytes must be at least 1, got {length!r}"
            )
        return self._source.get_random_bytes(length)

    def health_check(self) -> dict[str, Any]:
        """Return the serving source's health plus selection details."""
        return {
            **self._source.health_check(),
            "policy": self._policy.value,
            "min_strength": self._min_strength.label,
            "candidates": [s.name for s in self._candidates],
        }

    def close(self) -> None:
        """Close every candidate source."""
        for candidate in self._candidates:
            candidate.close()

    def __enter__(self) -> ByteGenerator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_byte_generator(config: BoundRandConfig) -> ByteGenerator:
    """Build a ByteGenerator from configuration.

    Candidates whose platform feature is missing are skipped; an unknown
    source name is a configuration error.

    Args:
        config: Configuration naming sources, policy, minimum strength and
            fallback mode.

    Returns:
        A ready ByteGenerator.

    Raises:
        ConfigValidationError: If a source name is not registered or an
            enumerated field is invalid.
        SourceUnavailableError: If no usable source remains.
    """
    validate_config(config)

    sources: list[EntropySource] = []
    for name in config.source_names:
        try:
            sources.append(EntropySourceRegistry.create(name, config))
        except KeyError as exc:
            raise ConfigValidationError(str(exc.args[0])) from exc
        except SourceUnavailableError as exc:
            logger.debug("Skipping entropy source %r: %s", name, exc)

    return ByteGenerator(
        sources,
        policy=config.selection_policy,
        min_strength=config.min_strength_level,
        allow_fallback=config.fallback_mode == "weaker",
    )
