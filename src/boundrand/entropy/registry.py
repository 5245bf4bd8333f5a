"""Entropy source registry with entry-point auto-discovery.

Built-in sources are registered at module import time via the
``@register_entropy_source`` decorator. Sources shipped by other packages
are discovered lazily on the first lookup miss via the
``boundrand.entropy_sources`` entry-point group.
"""

from __future__ import annotations

import importlib.metadata
import inspect
import logging
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from boundrand.config import BoundRandConfig
    from boundrand.entropy.base import EntropySource

logger = logging.getLogger("boundrand")

_ENTRY_POINT_GROUP = "boundrand.entropy_sources"


def _accepts_config(cls: type) -> bool:
    """Check whether a source constructor takes a BoundRandConfig first.

    Args:
        cls: The source class to inspect.

    Returns:
        True if the first constructor parameter is named ``config`` or is
        annotated as ``BoundRandConfig``.
    """
    try:
        sig = inspect.signature(cls)
    except (ValueError, TypeError):
        return False

    # Only the first parameter matters; signature() already strips 'self'.
    for param in sig.parameters.values():
        if param.name == "config":
            return True
        annotation = param.annotation
        if isinstance(annotation, str):
            return "BoundRandConfig" in annotation
        return getattr(annotation, "__name__", None) == "BoundRandConfig"
    return False


class EntropySourceRegistry:
    """Registry for entropy source classes.

    Discovery chain:

    1. Built-in sources registered via ``@register_entropy_source``
    2. Third-party sources discovered via ``boundrand.entropy_sources``
       entry points (loaded lazily on the first lookup miss)
    """

    _registry: ClassVar[dict[str, type[EntropySource]]] = {}
    _entry_points_loaded: ClassVar[bool] = False

    @classmethod
    def register(cls, name: str) -> Callable[[type[EntropySource]], type[EntropySource]]:
        """Decorator to register a source class under a string key.

        Args:
            name: Unique identifier for the source (e.g., ``'system'``).

        Returns:
            The original class, unmodified.

        Raises:
            ValueError: If *name* already belongs to a different class.

        Example::

            @EntropySourceRegistry.register("hsm")
            class HsmSource(EntropySource):
                ...
        """

        def decorator(source_cls: type[EntropySource]) -> type[EntropySource]:
            existing = cls._registry.get(name)
            if existing is not None and existing is not source_cls:
                raise ValueError(
                    f"Entropy source {name!r} is already registered to {existing.__qualname__}"
                )
            cls._registry[name] = source_cls
            return source_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[EntropySource]:
        """Look up a source class by name.

        Args:
            name: Registered identifier for the source.

        Returns:
            The entropy source class (not an instance).

        Raises:
            KeyError: If *name* is not found after loading entry points.
        """
        if name in cls._registry:
            return cls._registry[name]

        if not cls._entry_points_loaded:
            cls._load_entry_points()
            if name in cls._registry:
                return cls._registry[name]

        available = ", ".join(sorted(cls._registry.keys())) or "(none)"
        raise KeyError(f"Unknown entropy source: {name!r}. Available: {available}")

    @classmethod
    def create(cls, name: str, config: BoundRandConfig) -> EntropySource:
        """Instantiate a registered source.

        The config is passed only to constructors that ask for it.

        Args:
            name: Registered identifier for the source.
            config: Configuration for sources that need one.

        Returns:
            A constructed source.

        Raises:
            KeyError: If *name* is not registered.
            SourceUnavailableError: If the source's platform feature is missing.
        """
        source_cls = cls.get(name)
        if _accepts_config(source_cls):
            return source_cls(config)  # type: ignore[call-arg]
        return source_cls()

    @classmethod
    def list_available(cls) -> list[str]:
        """Return all registered source names, sorted.

        Triggers entry-point loading if not yet done.
        """
        if not cls._entry_points_loaded:
            cls._load_entry_points()
        return sorted(cls._registry.keys())

    @classmethod
    def _load_entry_points(cls) -> None:
        """Discover and register sources from the entry-point group.

        A broken entry point is logged and skipped; it never blocks the others.
        """
        cls._entry_points_loaded = True
        try:
            eps = importlib.metadata.entry_points(group=_ENTRY_POINT_GROUP)
        except Exception:  # Intentional: must not crash on broken metadata
            logger.warning("Failed to load entry points for %s", _ENTRY_POINT_GROUP, exc_info=True)
            return

        for ep in eps:
            if ep.name in cls._registry:
                # Built-in registration wins.
                continue
            try:
                cls._registry[ep.name] = ep.load()
                logger.debug("Loaded entropy source %r from entry point", ep.name)
            except Exception:  # Intentional: one bad plugin must not block others
                logger.warning(
                    "Failed to load entropy source entry point %r: %s",
                    ep.name,
                    ep.value,
                    exc_info=True,
                )

    @classmethod
    def _reset(cls) -> None:
        """Reset registry state. **Test-only**, not part of the public API."""
        cls._registry.clear()
        cls._entry_points_loaded = False


register_entropy_source = EntropySourceRegistry.register
