"""``diskforge settings`` — show the effective environment-driven defaults."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from diskforge.config import DiskforgeSettings

console = Console()


def settings_cmd() -> None:
    """Print the settings resolved from DISKFORGE_* variables and .env."""
    current = DiskforgeSettings()

    table = Table(title="Diskforge settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Environment variable", style="dim")

    for name, value in current.model_dump().items():
        shown = "[dim]unset[/dim]" if value is None else str(value)
        table.add_row(name, shown, f"DISKFORGE_{name.upper()}")

    console.print(table)
