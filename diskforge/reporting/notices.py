"""Plain-text per-asset notices for the operator.

Format: ``<source path> -> <destination path>: <outcome>``, with the size
appended for writes and failures and the reason appended for failures.
"""

from __future__ import annotations

from rich.filesize import decimal

from diskforge.models.outcomes import AssetReport, WriteOutcome

OUTCOME_LABELS: dict[WriteOutcome, str] = {
    WriteOutcome.WRITTEN: "written",
    WriteOutcome.SKIPPED_BY_FILTER: "skipped; does not match filter",
    WriteOutcome.SKIPPED_UNCHANGED: "skipped; matched hash index",
    WriteOutcome.SKIPPED_BUILD_ERRORS: "skipped; build reported errors",
    WriteOutcome.SKIPPED_ENVIRONMENT: "skipped; output store is persistent",
    WriteOutcome.FAILED: "is not written",
}


def format_notice(report: AssetReport) -> str:
    """Render one ``AssetReport`` as a single line."""
    destination = report.relative_destination or (
        str(report.destination) if report.destination is not None else "-"
    )
    source = report.asset_path if report.asset_path.startswith("/") else f"./{report.asset_path}"
    line = f"{source} -> {destination}: {OUTCOME_LABELS[report.outcome]}"
    if report.outcome in (WriteOutcome.WRITTEN, WriteOutcome.FAILED):
        line += f" ({decimal(report.size_bytes)})"
    if report.outcome == WriteOutcome.FAILED and report.reason:
        line += f": {report.reason}"
    return line
