"""Configuration system for boundrand.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (BOUNDRAND_*) -> .env file -> field defaults.

Per-engine overrides are applied via resolve_config() which creates a new
config instance without mutating the defaults. Infrastructure fields (which
sources exist, how they are selected, the integer domain) are fixed once an
engine is built and cannot be overridden.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from boundrand.exceptions import ConfigValidationError
from boundrand.strength import StrengthLevel

# Fields that a derived engine may change. Everything that decides where
# bytes come from is deliberately excluded.
_PER_ENGINE_FIELDS: frozenset[str] = frozenset(
    {
        "default_string_length",
        "dense_alphabet",
        "single_char_policy",
        "rejection_limit",
        "log_level",
        "diagnostic_mode",
    }
)

_SELECTION_POLICIES: frozenset[str] = frozenset({"strongest", "preference"})
_FALLBACK_MODES: frozenset[str] = frozenset({"error", "weaker"})
_DENSE_ALPHABETS: frozenset[str] = frozenset({"standard", "urlsafe"})
_SINGLE_CHAR_POLICIES: frozenset[str] = frozenset({"warn", "error"})
_LOG_LEVELS: frozenset[str] = frozenset({"none", "summary", "full"})

# All known config field names (populated after class definition).
_ALL_FIELDS: frozenset[str] = frozenset()


class BoundRandConfig(BaseSettings):
    """Configuration for boundrand.

    Resolution order: init kwargs -> env vars (BOUNDRAND_*) -> .env file -> defaults.

    Fields are divided into two groups:
    - **Infrastructure**: Entropy sources, selection policy, minimum
      strength, fallback opt-in, integer domain. NOT overridable.
    - **Generation parameters**: String defaults, diagnostics, logging.
      Overridable per engine via ``resolve_config()``.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOUNDRAND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Infrastructure (NOT overridable) ---

    entropy_sources: str = Field(
        default="system,getrandom,openssl",
        description="Comma-separated registry names of candidate sources, in preference order",
    )
    selection_policy: str = Field(
        default="strongest",
        description="Source selection: 'strongest' or 'preference' (first qualifying)",
    )
    min_strength: str = Field(
        default="medium",
        description="Weakest acceptable source: 'none', 'low', 'medium', 'strong'",
    )
    fallback_mode: str = Field(
        default="error",
        description="'error' never falls back; 'weaker' chains remaining sources behind the selected one",
    )
    getrandom_nonblocking: bool = Field(
        default=False,
        description="Pass GRND_NONBLOCK to getrandom() so an uninitialized pool fails instead of blocking",
    )
    int_bits: int = Field(
        default=63,
        ge=8,
        le=4096,
        description="Magnitude bits of the native signed integer domain (63 = signed 64-bit)",
    )
    mock_seed: int | None = Field(
        default=None,
        description="Seed for the mock_uniform source (testing only)",
    )

    # --- Generation parameters (overridable) ---

    default_string_length: int = Field(
        default=8,
        ge=1,
        description="Length used by random_string() when none is given",
    )
    dense_alphabet: str = Field(
        default="standard",
        description="Encoding for dense strings: 'standard' (+/) or 'urlsafe' (-_) base64",
    )
    single_char_policy: str = Field(
        default="warn",
        description="Reaction to n > 1 strings over a one-character alphabet: 'warn' or 'error'",
    )
    rejection_limit: int = Field(
        default=1024,
        ge=1,
        description="Consecutive rejected integer samples after which the source is treated as degenerate",
    )

    # --- Logging (overridable) ---

    log_level: str = Field(
        default="none",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Store all generation records in memory for analysis",
    )

    @property
    def source_names(self) -> list[str]:
        """Candidate source names parsed from ``entropy_sources``."""
        return [s.strip() for s in self.entropy_sources.split(",") if s.strip()]

    @property
    def min_strength_level(self) -> StrengthLevel:
        """``min_strength`` parsed into a StrengthLevel."""
        return StrengthLevel.parse(self.min_strength)

    @property
    def int_max(self) -> int:
        """Largest value (and widest range) of the native integer domain."""
        return (1 << self.int_bits) - 1

    @property
    def int_min(self) -> int:
        """Smallest value of the native integer domain."""
        return -(1 << self.int_bits)


# Populate _ALL_FIELDS now that the class is defined.
_ALL_FIELDS = frozenset(BoundRandConfig.model_fields.keys())


def validate_config(config: BoundRandConfig) -> None:
    """Check enumerated string fields against their accepted values.

    Args:
        config: The configuration to check.

    Raises:
        ConfigValidationError: If any enumerated field holds an unknown value
            or no entropy source is named.
    """
    choices = {
        "selection_policy": _SELECTION_POLICIES,
        "fallback_mode": _FALLBACK_MODES,
        "dense_alphabet": _DENSE_ALPHABETS,
        "single_char_policy": _SINGLE_CHAR_POLICIES,
        "log_level": _LOG_LEVELS,
    }
    for field_name, accepted in choices.items():
        value = getattr(config, field_name)
        if value not in accepted:
            raise ConfigValidationError(
                f"Invalid {field_name}: {value!r}. Expected one of: {', '.join(sorted(accepted))}"
            )
    StrengthLevel.parse(config.min_strength)
    if not config.source_names:
        raise ConfigValidationError("entropy_sources must name at least one source")


def validate_overrides(overrides: dict[str, Any]) -> None:
    """Validate override keys without creating a config.

    Args:
        overrides: Field names mapped to their new values.

    Raises:
        ConfigValidationError: If any key is unknown or non-overridable.
    """
    for field_name in overrides:
        if field_name not in _ALL_FIELDS:
            raise ConfigValidationError(f"Unknown config field: '{field_name}'")
        if field_name not in _PER_ENGINE_FIELDS:
            raise ConfigValidationError(
                f"Field '{field_name}' is an infrastructure field and cannot be "
                f"overridden on a derived engine"
            )


def resolve_config(
    defaults: BoundRandConfig,
    overrides: dict[str, Any] | None,
) -> BoundRandConfig:
    """Create a new config instance merging defaults with overrides.

    Only fields in _PER_ENGINE_FIELDS are overridable.

    Args:
        defaults: The base configuration.
        overrides: Field names mapped to their new values.

    Returns:
        A new BoundRandConfig with overrides applied, or *defaults* itself
        when there is nothing to override.

    Raises:
        ConfigValidationError: If any key is unknown or non-overridable, or
            the merged values fail validation.
    """
    if not overrides:
        return defaults

    validate_overrides(overrides)

    # model_copy(update=...) skips validation, so string "16" would not
    # be coerced to int 16. model_validate runs the full validator.
    merged = defaults.model_dump()
    merged.update(overrides)
    try:
        resolved = BoundRandConfig.model_validate(merged)
    except ValueError as exc:
        raise ConfigValidationError(str(exc)) from exc
    validate_config(resolved)
    return resolved
