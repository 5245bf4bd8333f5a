"""Shared pytest fixtures for boundrand tests.

Provides configuration objects, scripted and seeded entropy sources, and
ready-built engines used across multiple test modules.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from boundrand.byte_generator import ByteGenerator
from boundrand.config import BoundRandConfig
from boundrand.engine import RandomEngine, set_default_engine
from boundrand.entropy.base import EntropySource
from boundrand.entropy.mock import MockUniformSource
from boundrand.strength import StrengthLevel


class ScriptedSource(EntropySource):
    """Test double: serves a fixed byte script and counts calls.

    Running past the end of the script fails the test, so a test states
    exactly how much entropy the code under test may consume.
    """

    def __init__(self, script: bytes, strength: StrengthLevel = StrengthLevel.STRONG) -> None:
        self._script = script
        self._offset = 0
        self._strength = strength
        self.calls: list[int] = []

    @property
    def name(self) -> str:
        return "scripted"

    @property
    def strength(self) -> StrengthLevel:
        return self._strength

    @property
    def consumed(self) -> int:
        return self._offset

    def _generate(self, n: int) -> bytes:
        self.calls.append(n)
        if self._offset + n > len(self._script):
            pytest.fail(f"Scripted source exhausted: asked for {n} bytes at offset {self._offset}")
        chunk = self._script[self._offset : self._offset + n]
        self._offset += n
        return chunk


class ForbiddenSource(EntropySource):
    """Test double: any draw fails the test."""

    STRENGTH = StrengthLevel.STRONG

    @property
    def name(self) -> str:
        return "forbidden"

    def _generate(self, n: int) -> bytes:
        pytest.fail(f"Unexpected entropy request for {n} bytes")


def _make_config(**overrides: object) -> BoundRandConfig:
    """Create a BoundRandConfig isolated from any .env file."""
    return BoundRandConfig(_env_file=None, **overrides)  # type: ignore[call-arg]


@pytest.fixture(autouse=True)
def _reset_default_engine() -> Iterator[None]:
    """Drop any default engine a test built."""
    yield
    set_default_engine(None)


@pytest.fixture
def config_factory() -> Callable[..., BoundRandConfig]:
    """Factory for configs isolated from any .env file."""
    return _make_config


@pytest.fixture
def default_config() -> BoundRandConfig:
    """Return a BoundRandConfig with all default values."""
    return _make_config()


@pytest.fixture
def mock_config() -> BoundRandConfig:
    """Return a config that accepts the seeded mock source."""
    return _make_config(entropy_sources="mock_uniform", min_strength="none", mock_seed=42)


@pytest.fixture
def mock_engine(mock_config: BoundRandConfig) -> RandomEngine:
    """Return an engine over the seeded mock source."""
    return RandomEngine(mock_config)


@pytest.fixture
def system_engine(default_config: BoundRandConfig) -> Iterator[RandomEngine]:
    """Return an engine over the platform's strongest source."""
    with RandomEngine(default_config) as engine:
        yield engine


@pytest.fixture
def seeded_source() -> MockUniformSource:
    """Return a MockUniformSource with a fixed seed."""
    return MockUniformSource(seed=42)


@pytest.fixture
def scripted() -> Callable[..., ScriptedSource]:
    """Factory for ScriptedSource instances."""
    return ScriptedSource


@pytest.fixture
def forbidden_source() -> ForbiddenSource:
    """Return a source that fails the test on any draw."""
    return ForbiddenSource()


@pytest.fixture
def bytes_from() -> Callable[[EntropySource], ByteGenerator]:
    """Factory wrapping a single source in a ByteGenerator that accepts any strength."""

    def factory(source: EntropySource) -> ByteGenerator:
        return ByteGenerator([source], min_strength=StrengthLevel.NONE)

    return factory
