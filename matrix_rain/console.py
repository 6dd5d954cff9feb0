"""
Shared Rich Console singleton for terminal output.

Everything printed outside the running animation (the welcome header,
configuration warnings, fatal errors) goes through this one instance. While
the textual app owns the screen nothing is printed here; diagnostics go to
textual's log instead.

Usage:
    from .console import console
    console.print("[yellow]Warning: ...[/yellow]")
"""

from rich.console import Console

console = Console()
