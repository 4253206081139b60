"""Colorized console output for clusterenv workflows.

Thin wrapper around :mod:`rich` that degrades gracefully when stdout
is not a TTY (e.g. piped, CI, cron).  All user-facing status messages
should flow through this module; ``logger.*`` calls are kept for
structured file logging.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

# Shared console, auto-detects TTY; force_terminal=None lets Rich decide.
# No emoji codes: env values and commands are printed verbatim.
console = Console(stderr=False, force_terminal=None, emoji=False)

# ── Symbols ────────────────────────────────────────────────────────────────

_PASS = "[bold green]✓[/]"
_FAIL = "[bold red]✗[/]"
_WARN = "[bold yellow]⚠[/]"
_ARROW = "[bold cyan]›[/]"

# ── Phase headers ──────────────────────────────────────────────────────────


def phase(title: str) -> None:
    """Print a bold phase header (e.g. ``RENDER``)."""
    console.print()
    console.print(f"[bold blue]── {escape(title)} ──[/]")


# ── Status lines ───────────────────────────────────────────────────────────


def ok(msg: str) -> None:
    """Green checkmark + message."""
    console.print(f"  {_PASS} {escape(msg)}")


def fail(msg: str) -> None:
    """Red cross + message."""
    console.print(f"  {_FAIL} [red]{escape(msg)}[/]")


def warn(msg: str) -> None:
    """Yellow warning + message."""
    console.print(f"  {_WARN} [yellow]{escape(msg)}[/]")


def step(msg: str) -> None:
    """Cyan arrow + action message (in-progress)."""
    console.print(f"  {_ARROW} {escape(msg)}")


def detail(key: str, value: str) -> None:
    """Key-value pair, indented."""
    console.print(f"    [bold]{escape(key)}[/]: {escape(value)}")


def plain(text: str) -> None:
    """Raw text with no markup, highlighting or wrapping (safe to pipe)."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


# ── Banners / panels ──────────────────────────────────────────────────────


def error_panel(title: str, body: str) -> None:
    """Red-bordered error panel."""
    console.print()
    console.print(
        Panel(
            escape(body),
            title=f"[bold red]{escape(title)}[/]",
            border_style="red",
            padding=(1, 2),
        )
    )
