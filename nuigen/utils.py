"""Shared utility functions for nui-gen.

Provides async file I/O wrappers, component naming helpers, and Rich-based
console reporting.  All console output in the package goes through the
module-level ``console`` so tests can capture or silence it in one place.
"""

from __future__ import annotations

import asyncio
import re
import shutil
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def pascal_case(name: str) -> str:
    """Convert a component folder name to its PascalCase form.

    Examples::

        pascal_case("button")        -> "Button"
        pascal_case("button-group")  -> "ButtonGroup"
        pascal_case("input_number")  -> "InputNumber"
    """
    parts = re.split(r"[-_\s]+", name.strip())
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The ``Path`` object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


async def read_text(path: str | Path) -> str:
    """Read a UTF-8 text file without blocking the event loop."""
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")


async def write_text(path: str | Path, content: str) -> Path:
    """Write a UTF-8 text file, creating parent directories as needed."""
    file_path = Path(path)
    await asyncio.to_thread(_write_file, file_path, content)
    return file_path


async def copy_file(src: str | Path, dst: str | Path) -> Path:
    """Copy *src* to *dst*, creating parent directories of *dst* as needed."""
    dst_path = Path(dst)
    await asyncio.to_thread(_copy_file, Path(src), dst_path)
    return dst_path


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(src: Path, dst: Path) -> None:
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_item_header(label: str, name: str) -> None:
    """Print a rule separating the output of one work item from the next."""
    console.print()
    console.print(
        Rule(
            f"[bold bright_cyan] {escape(label)}: {escape(name)} [/bold bright_cyan]",
            style="bright_cyan",
        )
    )


def print_summary_table(rows: list[tuple[str, str, str]], title: str = "Summary") -> None:
    """Print a three-column item/status/detail summary table.

    Args:
        rows: ``(item, status, detail)`` tuples.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Status")
    table.add_column("Detail")

    for item, status, detail in rows:
        color = "red" if status == "failed" else "yellow" if status == "skipped" else "green"
        table.add_row(escape(item), f"[{color}]{status}[/{color}]", escape(detail))

    console.print(table)
    console.print()


def print_info(message: str) -> None:
    """Print a dimmed progress message."""
    console.print(f"[dim]{escape(message)}[/dim]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
