"""
Sources module: underlying PRNG algorithms.

Provides:

- RawSource: Abstract base for sources
- StdlibSource: random.Random backend (default)
- NumpySource: numpy PCG64 backend (optional, loaded lazily)
- SourceRegistry: Name-to-class lookup, extensible via entry points
"""

from seedline.sources.base import RawSource
from seedline.sources.registry import SourceRegistry
from seedline.sources.stdlib import StdlibSource

__all__ = [
    "RawSource",
    "SourceRegistry",
    "StdlibSource",
]
