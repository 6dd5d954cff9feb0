"""
Registry of the runtime key controls and command-line presets.

The same table feeds two outputs: the Rich-formatted controls panel printed
before the animation starts, and the plain-text epilog of `matrix --help`
(argparse does not understand Rich markup). The key handling itself lives
in controls.py; this module only describes it.
"""

from typing import TypedDict


class ControlInfo(TypedDict):
    """Display information for one group of runtime keys."""

    keys: list[str]  # Keys as shown to the user (e.g., ["↑", "↓"])
    description: str  # Short one-line description


class PresetInfo(TypedDict):
    name: str
    args: str


CONTROLS: list[ControlInfo] = [
    {"keys": ["↑", "↓"], "description": "Adjust speed (faster/slower)"},
    {"keys": ["←", "→"], "description": "Adjust density (less/more drops)"},
    {"keys": ["+", "-"], "description": "Adjust drop length"},
    {"keys": ["1-6"], "description": "Color schemes (green/blue/red/purple/cyan/rainbow)"},
    {"keys": ["q", "Esc", "Enter", "Space", "Ctrl+C"], "description": "Quit"},
]

PRESETS: list[PresetInfo] = [
    {"name": "Gentle", "args": "-s 40 -d 20 -n 3 -l 20"},
    {"name": "Sparse", "args": "-s 50 -d 10 -n 2 -l 15"},
    {"name": "Chaos", "args": "-s 5 -d 90 -n 15 -l 45 -c rainbow"},
]

# Width of the key column in both help formats.
_KEY_COLUMN = 26


def _key_label(control: ControlInfo) -> str:
    return "/".join(control["keys"])


def get_help_text() -> str:
    """Controls and presets with Rich markup, for console.print()."""
    lines = ["[bold]Runtime Controls:[/bold]"]
    for control in CONTROLS:
        label = _key_label(control)
        padding = " " * (_KEY_COLUMN - len(label))
        lines.append(f"  [cyan]{label}[/cyan]{padding}{control['description']}")

    lines.append("")
    lines.append("[bold]Presets:[/bold]")
    for preset in PRESETS:
        lines.append(f"  [green]{preset['name']}:[/green]  matrix {preset['args']}")
    return "\n".join(lines)


def get_plain_help() -> str:
    """The same information as get_help_text(), without markup."""
    lines = ["runtime controls:"]
    for control in CONTROLS:
        lines.append(f"  {_key_label(control).ljust(_KEY_COLUMN)}{control['description']}")

    lines.append("")
    lines.append("presets:")
    for preset in PRESETS:
        lines.append(f"  {preset['name'] + ':':<9} matrix {preset['args']}")
    return "\n".join(lines)
