"""Statistical property tests for the generators.

These tests validate distributional invariants rather than individual code
paths. They draw large samples and check them against the uniform
distribution with scipy:

1. **Integers**: rejection sampling leaves no modulo bias, including for
   ranges where nearly half of all samples are rejected.
2. **Floats**: values spread uniformly over the unit interval (KS test).
3. **Booleans**: parity of a byte is fair (binomial test).
4. **Strings**: dense text and the alphabet walk use every character
   equally often over a long run.

Dependencies:
    scipy (chi-square, KS and binomial tests), listed in the ``test`` extra.
"""

from __future__ import annotations

import string

import numpy as np
import pytest
from scipy import stats

from boundrand.engine import RandomEngine

# ---------------------------------------------------------------------------
# Sample sizes and significance levels.
# ---------------------------------------------------------------------------

_NUM_INTS: int = 100_000
_NUM_SAMPLES: int = 20_000
_STRING_LENGTH: int = 100_000

# p above this threshold means uniformity cannot be rejected.
_ALPHA: float = 0.001


def _chisquare_pvalue(observed: np.ndarray) -> float:
    return float(stats.chisquare(observed).pvalue)


class TestIntegerUniformity:
    """No value of a range is favoured."""

    def test_die_roll_with_system_source(self, system_engine: RandomEngine) -> None:
        draws = np.fromiter(
            (system_engine.random_int(0, 6) for _ in range(_NUM_INTS)), dtype=np.int64
        )
        counts = np.bincount(draws, minlength=7)
        assert counts.size == 7
        assert _chisquare_pvalue(counts) > _ALPHA

    def test_heavy_rejection_range(self, mock_engine: RandomEngine) -> None:
        # 129 values out of 256 byte patterns: almost half are rejected.
        draws = np.fromiter(
            (mock_engine.random_int(0, 128) for _ in range(_NUM_INTS)), dtype=np.int64
        )
        counts = np.bincount(draws, minlength=129)
        assert counts.size == 129
        assert _chisquare_pvalue(counts) > _ALPHA

    def test_negative_range_mean(self, mock_engine: RandomEngine) -> None:
        draws = np.array([mock_engine.random_int(-1000, 1000) for _ in range(_NUM_SAMPLES)])
        assert draws.min() >= -1000
        assert draws.max() <= 1000
        # Standard error of the mean is about 577 / sqrt(20000) ~= 4.1.
        assert abs(draws.mean()) < 20


class TestFloatUniformity:
    def test_unit_interval_ks(self, mock_engine: RandomEngine) -> None:
        values = np.array([mock_engine.random_float() for _ in range(_NUM_SAMPLES)])
        assert ((values >= 0.0) & (values <= 1.0)).all()
        assert stats.kstest(values, "uniform").pvalue > _ALPHA

    def test_shifted_interval_ks(self, mock_engine: RandomEngine) -> None:
        values = np.array([mock_engine.random_float(10.0, -5.0) for _ in range(_NUM_SAMPLES)])
        assert stats.kstest(values, "uniform", args=(-5.0, 15.0)).pvalue > _ALPHA


class TestBooleanFairness:
    def test_binomial(self, mock_engine: RandomEngine) -> None:
        trues = sum(mock_engine.random_bool() for _ in range(_NUM_SAMPLES))
        assert stats.binomtest(trues, _NUM_SAMPLES, 0.5).pvalue > _ALPHA


class TestStringCharacterFrequencies:
    """Every character of the alphabet appears equally often."""

    @staticmethod
    def _counts(text: str, alphabet: str) -> np.ndarray:
        index = {c: i for i, c in enumerate(alphabet)}
        return np.bincount([index[c] for c in text], minlength=len(alphabet))

    def test_dense_mode(self, mock_engine: RandomEngine) -> None:
        alphabet = string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
        text = mock_engine.random_string(_STRING_LENGTH)
        assert _chisquare_pvalue(self._counts(text, alphabet)) > _ALPHA

    @pytest.mark.parametrize("alphabet", ["0123456789", string.ascii_letters + string.digits])
    def test_alphabet_walk(self, mock_engine: RandomEngine, alphabet: str) -> None:
        text = mock_engine.random_string(_STRING_LENGTH, alphabet)
        assert _chisquare_pvalue(self._counts(text, alphabet)) > _ALPHA
