"""Main Typer application — imports and registers all CLI commands.

Entry point: ``diskforge`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from diskforge.cli.commands.materialize import materialize_cmd
from diskforge.cli.commands.settings_cmd import settings_cmd
from diskforge.config import settings

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

app = typer.Typer(
    name="diskforge",
    help="Diskforge: write in-memory build output to the real filesystem.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to DISKFORGE_LOG_LEVEL).",
    ),
) -> None:
    """Configure logging for every command."""
    level = (log_level or settings.log_level).upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(
            f"{level!r} is not one of {', '.join(LOG_LEVELS)}.", param_hint="--log-level"
        )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


# Register subcommands
app.command(name="materialize", help="Materialize a directory of build output.")(materialize_cmd)
app.command(name="settings", help="Show effective settings.")(settings_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
