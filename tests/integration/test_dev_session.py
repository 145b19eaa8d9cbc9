"""End-to-end: a materializer tapped into a host across a watch-rebuild session.

These tests exercise BuildHost, HookBus, EnvironmentGate, HashIndex,
PathResolver, the filters, and the writers working together.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from diskforge.core.config_guard import ConfigurationError
from diskforge.core.environment_gate import GateState
from diskforge.core.materializer import AssetMaterializer
from diskforge.core.writer import write_atomic
from diskforge.host.build_host import AFTER_EMIT, BuildHost
from diskforge.host.stores import DiskOutputStore, MemoryOutputStore
from diskforge.models.outcomes import PassReport, WriteOutcome


class TestDevServerSession:
    """Repeated rebuilds against an in-memory host store."""

    @pytest.fixture
    def host(self, tmp_path: Path) -> BuildHost:
        return BuildHost(output_store=MemoryOutputStore(), output_path=tmp_path / "dist")

    @pytest.fixture
    def reports(self) -> list[PassReport]:
        return []

    @pytest.fixture
    def materializer(
        self, host: BuildHost, reports: list[PassReport], tmp_path: Path
    ) -> AssetMaterializer:
        m = AssetMaterializer(cwd=tmp_path, filter=r"^(?!.*\.hot-update\.)")
        m.apply(host, on_report=reports.append)
        return m

    def test_registers_on_after_emit(self, host: BuildHost, materializer: AssetMaterializer):
        assert host.hooks.taps(AFTER_EMIT) == ["diskforge"]

    def test_watch_session(
        self,
        host: BuildHost,
        materializer: AssetMaterializer,
        reports: list[PassReport],
        tmp_path: Path,
    ):
        dist = tmp_path / "dist"
        bundle = {
            "index.html": "<script src=app.js></script>",
            "app.js?abc123": "console.log(1)",
            "app.js.map": '{"version":3}',
            "main.hot-update.json": "{}",
        }

        with patch("diskforge.core.materializer.write_atomic", wraps=write_atomic) as writer:
            # Initial build writes everything the filter accepts.
            host.emit(bundle)
            assert writer.call_count == 3
            assert (dist / "app.js").read_text() == "console.log(1)"
            assert not (dist / "main.hot-update.json").exists()

            # A rebuild with no changes writes nothing.
            host.emit(bundle)
            assert writer.call_count == 3
            assert reports[-1].count(WriteOutcome.SKIPPED_UNCHANGED) == 3

            # Edit one module: only the bundle and its map change.
            edited = {**bundle, "app.js?def456": "console.log(2)", "app.js.map": '{"version":3,"x":1}'}
            del edited["app.js?abc123"]
            host.emit(edited)
            assert writer.call_count == 5
            assert (dist / "app.js").read_text() == "console.log(2)"

            # A broken build leaves the last good output in place.
            host.emit({**edited, "app.js?bad": "syntax error"}, errors=["SyntaxError"])
            assert writer.call_count == 5
            assert reports[-1].skip_reason == WriteOutcome.SKIPPED_BUILD_ERRORS
            assert (dist / "app.js").read_text() == "console.log(2)"

        assert [r.pass_number for r in reports] == [1, 2, 3, 4]
        assert materializer.state == GateState.READY


class TestPersistentHost:
    def test_disk_host_left_alone(self, tmp_path: Path):
        host = BuildHost(output_store=DiskOutputStore(), output_path=tmp_path / "dist")
        reports: list[PassReport] = []
        materializer = AssetMaterializer(cwd=tmp_path)
        materializer.apply(host, on_report=reports.append)

        with patch("diskforge.core.materializer.write_atomic") as writer:
            host.emit({"app.js": "x"})

        writer.assert_not_called()
        assert reports[0].skip_reason == WriteOutcome.SKIPPED_ENVIRONMENT
        assert materializer.state == GateState.DISABLED
        # The host's own write is still on disk.
        assert (tmp_path / "dist" / "app.js").read_text() == "x"

    def test_forced_mirror_to_second_root(self, tmp_path: Path):
        host = BuildHost(output_store=DiskOutputStore(), output_path=tmp_path / "dist")
        materializer = AssetMaterializer(
            cwd=tmp_path, force_run=True, output_root=tmp_path / "mirror"
        )
        materializer.apply(host)
        host.emit({"css/site.css": "body{}"})
        assert (tmp_path / "mirror" / "css" / "site.css").read_text() == "body{}"


class TestMisconfiguredHost:
    def test_missing_output_path_surfaces_from_emit(self):
        host = BuildHost(output_store=MemoryOutputStore(), output_path=None)
        materializer = AssetMaterializer()
        materializer.apply(host)

        with pytest.raises(ConfigurationError, match="output root is not defined"):
            host.emit({"app.js": "x"})

        # Reported once; later builds are skipped quietly.
        host.emit({"app.js": "x"})
        assert materializer.state == GateState.DISABLED
