"""``diskforge materialize SOURCE_DIR`` — run one pass over a staging directory.

Loads every file under SOURCE_DIR into an in-memory host build, emits it,
and lets a materializer write the result under the output root.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from diskforge.config import settings
from diskforge.core.config_guard import ConfigurationError
from diskforge.core.materializer import AssetMaterializer
from diskforge.host.build_host import BuildHost
from diskforge.host.directory import load_directory_assets
from diskforge.host.stores import MemoryOutputStore
from diskforge.models.config import MaterializerConfig
from diskforge.models.outcomes import PassReport
from diskforge.reporting.renderer import PassRenderer

console = Console()


def materialize_cmd(
    source_dir: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory holding the build output to materialize.",
    ),
    output_root: Path = typer.Option(
        None,
        "--output-root",
        "-o",
        help="Destination directory (defaults to DISKFORGE_OUTPUT_ROOT).",
    ),
    filter_pattern: str = typer.Option(
        None,
        "--filter",
        "-f",
        help="Only write assets whose path matches this regular expression.",
    ),
    no_change_detection: bool = typer.Option(
        False,
        "--no-change-detection",
        help="Write every asset even if its content is unchanged.",
    ),
    no_atomic: bool = typer.Option(
        False,
        "--no-atomic",
        help="Overwrite files in place instead of an atomic replace.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress per-asset notices.",
    ),
    workers: int = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of parallel writers (defaults to DISKFORGE_MAX_WORKERS).",
    ),
) -> None:
    """Materialize the files of SOURCE_DIR under the output root."""
    overrides: dict = {}
    if output_root is not None:
        overrides["output_root"] = output_root
    if filter_pattern is not None:
        overrides["filter"] = filter_pattern
    if no_change_detection:
        overrides["use_change_detection"] = False
    if no_atomic:
        overrides["atomic_write"] = False
    if quiet:
        overrides["verbose"] = False
    if workers is not None:
        overrides["max_workers"] = workers

    reports: list[PassReport] = []
    try:
        config = MaterializerConfig.from_settings(settings, **overrides)
        materializer = AssetMaterializer(config)
        host = BuildHost(output_store=MemoryOutputStore())
        materializer.apply(host, on_report=reports.append)
        host.emit(load_directory_assets(source_dir))
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    report = reports[-1]
    PassRenderer(console=console).print_report(report)

    if report.failed:
        console.print(f"[bold red]{len(report.failed)} asset(s) failed.[/bold red]")
        raise typer.Exit(code=1)
