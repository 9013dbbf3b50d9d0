"""
SourceRegistry: maps source names to RawSource classes.

Built-in sources are registered by import path and loaded on demand, so
the numpy backend costs nothing unless it is asked for. Third-party
sources are discovered lazily from ``seedline.sources`` entry points.

Example:
    source_class = SourceRegistry.get("stdlib")
    source = source_class(seed=42)
"""

from __future__ import annotations

import importlib
import logging
from importlib.metadata import entry_points

from seedline.sources.base import RawSource

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "seedline.sources"

_BUILTINS: dict[str, str] = {
    "stdlib": "seedline.sources.stdlib:StdlibSource",
    "numpy": "seedline.sources.pcg64:NumpySource",
}


class SourceRegistry:
    """
    Registry mapping source names to RawSource subclasses.

    Entry points are scanned once, on first lookup. Built-ins win over
    entry points with the same name.
    """

    _sources: dict[str, type[RawSource]] = {}
    _plugins: dict[str, str] = {}
    _loaded: bool = False

    @classmethod
    def _ensure_loaded(cls) -> None:
        """Collect entry point targets (once); classes load on first get()."""
        if cls._loaded:
            return
        cls._loaded = True
        for ep in entry_points(group=ENTRY_POINT_GROUP):
            if ep.name not in _BUILTINS:
                cls._plugins[ep.name] = ep.value

    @classmethod
    def register(cls, source_class: type[RawSource]) -> type[RawSource]:
        """
        Register a source class under its ``name``.

        Usable as a class decorator.

        Raises:
            ValueError: If the class has no name.
        """
        if not source_class.name:
            raise ValueError(f"{source_class.__name__} must define a non-empty name")
        cls._sources[source_class.name] = source_class
        return source_class

    @classmethod
    def get(cls, name: str) -> type[RawSource]:
        """
        Get the source class registered under *name*.

        Raises:
            KeyError: If no source with that name exists.
        """
        if name in cls._sources:
            return cls._sources[name]

        cls._ensure_loaded()
        target = _BUILTINS.get(name) or cls._plugins.get(name)
        if target is None:
            available = ", ".join(cls.names()) or "(none)"
            raise KeyError(
                f"No source {name!r} registered. Available sources: {available}"
            )

        module_name, _, attr = target.partition(":")
        try:
            source_class = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError):
            logger.debug(f"Failed to load source {name!r} from {target}", exc_info=True)
            raise
        logger.debug(f"Loaded source {name!r} from {target}")
        cls._sources[name] = source_class
        return source_class

    @classmethod
    def names(cls) -> list[str]:
        """List all known source names (loaded or not)."""
        cls._ensure_loaded()
        return sorted(set(_BUILTINS) | set(cls._plugins) | set(cls._sources))
