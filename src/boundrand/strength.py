"""Strength rating attached to every entropy source."""

from __future__ import annotations

from enum import IntEnum

from boundrand.exceptions import ConfigValidationError


class StrengthLevel(IntEnum):
    """Ordered classification of how hard a source's output is to predict.

    Strength is a property of the source, never of a single generated value.
    Ordering follows the enum values, so ``StrengthLevel.LOW < StrengthLevel.STRONG``.
    """

    NONE = 0
    LOW = 1
    MEDIUM = 2
    STRONG = 3

    @classmethod
    def parse(cls, value: str | int | StrengthLevel) -> StrengthLevel:
        """Resolve a config value into a strength level.

        Args:
            value: A level, its integer value, or its case-insensitive name.

        Returns:
            The matching StrengthLevel.

        Raises:
            ConfigValidationError: If *value* names no known level.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        elif isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        names = ", ".join(level.name.lower() for level in cls)
        raise ConfigValidationError(f"Unknown strength level: {value!r}. Expected one of: {names}")

    @property
    def label(self) -> str:
        """Lowercase name used in logs and health checks."""
        return self.name.lower()
