"""
Display utilities for generator state.

Renders a generator (or a bare snapshot) as a rich table. Useful when
debugging save files: shows where a sequence is and, optionally, what it
will produce next.

Requires rich (optional dependency): pip install seedline[rich]
"""

from __future__ import annotations

from typing import Any

from seedline import _canonical
from seedline.generator import DeterministicSequenceGenerator
from seedline.state import GeneratorState


def display_state(
    target: DeterministicSequenceGenerator | GeneratorState,
    console: Any | None = None,
    preview: int = 0,
) -> None:
    """
    Print a summary of a generator's state.

    Args:
        target: A generator or a GeneratorState snapshot.
        console: Optional rich Console instance.
        preview: Number of upcoming next_float() values to show. They are
            drawn from a clone, so *target* is not advanced.

    Raises:
        ImportError: If rich is not installed.
        ValueError: If preview is negative.

    Example:
        rng = DeterministicSequenceGenerator.from_json(text)
        display_state(rng, preview=5)
    """
    try:
        from rich.console import Console
        from rich.table import Table
    except ImportError as e:
        raise ImportError(
            "rich is required for display_state(). "
            "Install it with: pip install seedline[rich]"
        ) from e

    if preview < 0:
        raise ValueError(f"preview must be non-negative, got {preview}")

    if isinstance(target, DeterministicSequenceGenerator):
        state = target.export_state()
        source_name = target.source_name
        upcoming = target.clone() if preview else None
    else:
        state = target
        source_name = None
        upcoming = DeterministicSequenceGenerator.from_state(state) if preview else None

    if console is None:
        console = Console()

    table = Table(title="Generator State", show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Seed", str(state.seed))
    table.add_row("Draw count", str(state.draw_count))
    if source_name is not None:
        table.add_row("Source", source_name)
    table.add_row("Fingerprint", _canonical.fingerprint(state))
    table.add_row("JSON", _canonical.encode_text(state))
    table.add_row("Bytes", _canonical.encode_binary(state).hex())

    if upcoming is not None:
        for i in range(preview):
            position = state.draw_count + i + 1
            table.add_row(f"[dim]draw {position}[/dim]", f"{upcoming.next_float():.6f}")

    console.print(table)
