"""Rich terminal renderer for materializer pass reports.

Color scheme
------------
- green     : WRITTEN
- dim       : SKIPPED_UNCHANGED
- yellow    : SKIPPED_BY_FILTER
- magenta   : SKIPPED_BUILD_ERRORS, SKIPPED_ENVIRONMENT
- bold red  : FAILED
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.filesize import decimal
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from diskforge.models.outcomes import PassReport, WriteOutcome

_OUTCOME_STYLES: dict[WriteOutcome, str] = {
    WriteOutcome.WRITTEN: "green",
    WriteOutcome.SKIPPED_UNCHANGED: "dim",
    WriteOutcome.SKIPPED_BY_FILTER: "yellow",
    WriteOutcome.SKIPPED_BUILD_ERRORS: "magenta",
    WriteOutcome.SKIPPED_ENVIRONMENT: "magenta",
    WriteOutcome.FAILED: "bold red",
}


class PassRenderer:
    """Renders ``PassReport`` as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, report: PassReport) -> Panel:
        """Render a report as a Panel holding the asset table and a summary."""
        table = self._build_asset_table(report)

        summary_parts: list[str] = [f"[bold]Pass:[/bold] {report.pass_number}"]
        for outcome in WriteOutcome:
            count = report.count(outcome)
            if count:
                style = _OUTCOME_STYLES[outcome]
                summary_parts.append(f"[{style}]{outcome.value}: {count}[/{style}]")
        if report.skip_reason is not None:
            summary_parts.append(f"[magenta]pass skipped ({report.skip_reason.value})[/magenta]")

        return Panel(
            Group(table, Text(""), Text.from_markup("  |  ".join(summary_parts))),
            title="[bold]Diskforge[/bold]",
            subtitle=f"{report.started_at.strftime('%H:%M:%S')}",
            border_style="blue",
            padding=(1, 2),
        )

    def _build_asset_table(self, report: PassReport) -> Table:
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("Asset", min_width=20)
        table.add_column("Destination", min_width=20)
        table.add_column("Outcome", justify="center")
        table.add_column("Size", justify="right", width=10)
        table.add_column("Details")

        for asset in report.assets:
            style = _OUTCOME_STYLES[asset.outcome]
            size = decimal(asset.size_bytes) if asset.size_bytes else "[dim]-[/dim]"
            table.add_row(
                escape(asset.asset_path),
                asset.relative_destination or "[dim]-[/dim]",
                f"[{style}]{asset.outcome.value}[/{style}]",
                size,
                f"[red]{escape(asset.reason)}[/red]" if asset.reason else "",
            )
        return table

    def print_report(self, report: PassReport) -> None:
        self.console.print(self.render(report))
