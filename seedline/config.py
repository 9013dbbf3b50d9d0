"""
SeedlineConfig: Project-level configuration loader for seedline.

This module provides:

- find_config_file: Walk up directories to locate .seedline.toml
- merge_generator_tables: Overlay local [generator] keys on the base file
- SeedlineConfig: Typed generator defaults with load/from_dict interface

Configuration is loaded from `.seedline.toml` with optional
`.seedline.local.toml` overrides from the same directory. Only the
``[generator]`` table is read:

    [generator]
    source = "stdlib"
    replay_warning_threshold = 1000000

Nothing in seedline loads configuration implicitly; pass the result to
the generator yourself.

Example:
    >>> config = SeedlineConfig.load()
    >>> rng = DeterministicSequenceGenerator(seed=42, config=config)
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_FILENAME = ".seedline.toml"
LOCAL_CONFIG_FILENAME = ".seedline.local.toml"

DEFAULT_SOURCE = "stdlib"
DEFAULT_REPLAY_WARNING_THRESHOLD = 1_000_000


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Return the nearest `.seedline.toml` at or above *start_dir* (default: cwd).
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_generator_tables(base: dict[str, Any], local: dict[str, Any]) -> dict[str, Any]:
    """
    Overlay the local file's ``[generator]`` keys on the base file's.

    Other tables are not read, so they are not merged. Inputs are not mutated.
    """
    return {"generator": {**base.get("generator", {}), **local.get("generator", {})}}


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SeedlineConfig:
    """
    Generator defaults.

    Attributes:
        source: Registry name of the source used when a generator is
            created without an explicit ``source``.
        replay_warning_threshold: Restores that replay more draws than this
            log a warning. Replay cost grows linearly with the draw count.
        path: File the config was loaded from, if any.
    """

    source: str = DEFAULT_SOURCE
    replay_warning_threshold: int = DEFAULT_REPLAY_WARNING_THRESHOLD
    path: Path | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.source, str) or not self.source:
            raise ValueError(
                f"generator.source must be a non-empty string, got {self.source!r}"
            )
        threshold = self.replay_warning_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
            raise ValueError(
                "generator.replay_warning_threshold must be a non-negative "
                f"integer, got {threshold!r}"
            )

    @classmethod
    def load(cls, start_dir: Path | None = None) -> SeedlineConfig:
        """
        Find and load project configuration.

        Walks up from *start_dir* (default: cwd) to locate ``.seedline.toml``,
        parses it, and overlays the [generator] table of ``.seedline.local.toml`` from the same
        directory if present.

        Raises:
            FileNotFoundError: If no ``.seedline.toml`` is found.
            ValueError: If a ``[generator]`` value is invalid.
        """
        config_path = find_config_file(start_dir)
        if config_path is None:
            raise FileNotFoundError(
                f"Could not find {CONFIG_FILENAME} in {start_dir or Path.cwd()} "
                f"or any parent directory"
            )

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        local_path = config_path.parent / LOCAL_CONFIG_FILENAME
        if local_path.is_file():
            with open(local_path, "rb") as f:
                data = merge_generator_tables(data, tomllib.load(f))

        return cls.from_dict(data, path=config_path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> SeedlineConfig:
        """
        Create a config from parsed TOML data.

        Missing keys fall back to defaults; unknown keys are ignored.
        """
        generator = data.get("generator", {})
        return cls(
            source=generator.get("source", DEFAULT_SOURCE),
            replay_warning_threshold=generator.get(
                "replay_warning_threshold", DEFAULT_REPLAY_WARNING_THRESHOLD
            ),
            path=path,
        )
