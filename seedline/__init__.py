"""
seedline: A deterministic random generator you can save and resume.

A generator's whole position is (seed, draw_count). Export it as JSON or
8 bytes, persist it anywhere, and restore it later to continue the exact
same sequence, as if the save/load never happened.

Example:
    import seedline

    rng = seedline.DeterministicSequenceGenerator(seed=12345)
    damage = rng.next_int(1, 7)
    crit = rng.next_float() < 0.1

    text = rng.to_json()  # '{"Seed":12345,"CallCount":2}'

    # later, possibly on another machine
    rng = seedline.DeterministicSequenceGenerator.from_json(text)
    rng.next_int(100)  # same value the uninterrupted generator would give
"""

__version__ = "0.1.0"

# Config
from seedline.config import SeedlineConfig

# Errors
from seedline.errors import (
    FormatError,
    InvalidArgumentError,
    InvalidStateError,
    NullInputError,
    SeedlineError,
    TruncatedDataError,
)

# Generator
from seedline.generator import DeterministicSequenceGenerator

# Seeding
from seedline.seeding import SeedSource, fixed_seed, tick_count_seed

# Sources
from seedline.sources import RawSource, SourceRegistry, StdlibSource

# State
from seedline.state import INT32_MAX, INT32_MIN, GeneratorState


# Lazy import for display (requires rich only when called)
def __getattr__(name: str):
    if name == "display_state":
        from seedline.display import display_state

        return display_state
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Generator
    "DeterministicSequenceGenerator",
    # State
    "GeneratorState",
    "INT32_MIN",
    "INT32_MAX",
    # Errors
    "SeedlineError",
    "InvalidArgumentError",
    "InvalidStateError",
    "NullInputError",
    "FormatError",
    "TruncatedDataError",
    # Seeding
    "SeedSource",
    "tick_count_seed",
    "fixed_seed",
    # Sources
    "RawSource",
    "StdlibSource",
    "SourceRegistry",
    # Config
    "SeedlineConfig",
    # Display (lazy-loaded)
    "display_state",
]
