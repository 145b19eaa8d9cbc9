"""Tests for per-asset notices and the Rich pass renderer."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from diskforge.models.outcomes import AssetReport, PassReport, WriteOutcome
from diskforge.reporting.notices import OUTCOME_LABELS, format_notice
from diskforge.reporting.renderer import _OUTCOME_STYLES, PassRenderer


def _report(outcome: WriteOutcome, **fields) -> AssetReport:
    defaults = {
        "asset_path": "app.js",
        "outcome": outcome,
        "destination": Path("/srv/build/app.js"),
        "relative_destination": "build/app.js",
    }
    defaults.update(fields)
    return AssetReport(**defaults)


class TestFormatNotice:
    def test_written_includes_size(self):
        line = format_notice(_report(WriteOutcome.WRITTEN, size_bytes=2048))
        assert line == "./app.js -> build/app.js: written (2.0 kB)"

    def test_unchanged_has_no_size(self):
        line = format_notice(_report(WriteOutcome.SKIPPED_UNCHANGED, size_bytes=2048))
        assert line == "./app.js -> build/app.js: skipped; matched hash index"

    def test_failed_includes_reason(self):
        line = format_notice(_report(WriteOutcome.FAILED, size_bytes=10, reason="disk full"))
        assert line.endswith("is not written (10 bytes): disk full")

    def test_absolute_source_not_prefixed(self):
        line = format_notice(_report(WriteOutcome.SKIPPED_BY_FILTER, asset_path="/abs/a.js"))
        assert line.startswith("/abs/a.js -> ")

    def test_missing_destination(self):
        report = AssetReport(asset_path="a.js", outcome=WriteOutcome.SKIPPED_BUILD_ERRORS)
        assert format_notice(report) == "./a.js -> -: skipped; build reported errors"

    def test_every_outcome_labelled_and_styled(self):
        for outcome in WriteOutcome:
            assert outcome in OUTCOME_LABELS
            assert outcome in _OUTCOME_STYLES


class TestPassReport:
    def test_counts_and_lookup(self):
        report = PassReport(
            pass_number=1,
            assets=[
                _report(WriteOutcome.WRITTEN),
                _report(WriteOutcome.FAILED, asset_path="b.js", reason="x"),
                _report(WriteOutcome.WRITTEN, asset_path="c.js"),
            ],
        )
        assert report.count(WriteOutcome.WRITTEN) == 2
        assert report.counts[WriteOutcome.FAILED] == 1
        assert [r.asset_path for r in report.written] == ["app.js", "c.js"]
        assert report.outcome_for("b.js") == WriteOutcome.FAILED
        assert report.outcome_for("missing.js") is None
        assert report.skipped is False


class TestPassRenderer:
    def test_render_returns_panel(self):
        renderer = PassRenderer(console=Console(record=True, width=120))
        panel = renderer.render(PassReport(pass_number=3, assets=[_report(WriteOutcome.WRITTEN)]))
        assert isinstance(panel, Panel)

    def test_print_report_output(self):
        console = Console(record=True, width=160)
        report = PassReport(
            pass_number=2,
            assets=[
                _report(WriteOutcome.WRITTEN, size_bytes=12),
                _report(WriteOutcome.FAILED, asset_path="b.js", reason="disk full"),
            ],
        )
        PassRenderer(console=console).print_report(report)
        text = console.export_text()
        assert "app.js" in text
        assert "disk full" in text
        assert "written: 1" in text
        assert "failed: 1" in text

    def test_skipped_pass_summary(self):
        console = Console(record=True, width=160)
        report = PassReport(
            pass_number=1,
            skip_reason=WriteOutcome.SKIPPED_ENVIRONMENT,
            assets=[AssetReport(asset_path="a.js", outcome=WriteOutcome.SKIPPED_ENVIRONMENT)],
        )
        PassRenderer(console=console).print_report(report)
        assert "pass skipped (skipped_environment)" in console.export_text()
