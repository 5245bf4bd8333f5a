"""Seeded mock entropy source for testing and reproducible sampling.

Generates uniformly distributed bytes from a numpy ``Generator``, allowing
deterministic tests (via seed). Rated NONE: its output is fully predictable
from the seed, so it is only selected when ``min_strength`` is ``"none"``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from boundrand.entropy.base import EntropySource
from boundrand.entropy.registry import register_entropy_source
from boundrand.strength import StrengthLevel

if TYPE_CHECKING:
    from boundrand.config import BoundRandConfig


@register_entropy_source("mock_uniform")
class MockUniformSource(EntropySource):
    """Deterministic uniform byte source.

    Args:
        config: Optional configuration providing ``mock_seed``.
        seed: RNG seed; takes precedence over ``config.mock_seed``.
    """

    STRENGTH = StrengthLevel.NONE

    def __init__(self, config: BoundRandConfig | None = None, seed: int | None = None) -> None:
        if seed is None and config is not None:
            seed = config.mock_seed
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def name(self) -> str:
        """Return ``'mock_uniform'``."""
        return "mock_uniform"

    def _generate(self, n: int) -> bytes:
        return self._rng.integers(0, 256, size=n, dtype=np.uint8).tobytes()
