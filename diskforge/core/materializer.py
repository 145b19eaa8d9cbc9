"""AssetMaterializer — writes a host's in-memory build output to disk.

One pass runs per build-completion event:

1. Gate: the environment gate decides (once) whether to run at all.
2. Build errors: with ``halt_on_build_errors`` a build that reported
   errors is skipped entirely.
3. Per asset, in host order: resolve the destination, apply the filter,
   fingerprint and consult the hash index, create the parent directory,
   write the body.

Path resolution failures are configuration errors and abort the pass.
Directory and write failures are isolated to their asset and reported as
``FAILED``; the pass always continues.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from diskforge.core.environment_gate import EnvironmentGate, GateState
from diskforge.core.hash_index import HashIndex
from diskforge.core.hasher import body_bytes, fingerprint
from diskforge.core.path_resolver import PathResolver, ResolvedPath
from diskforge.core.writer import ensure_parent_dir, write_atomic, write_plain
from diskforge.host.build_host import AFTER_EMIT
from diskforge.host.stores import is_memory_store
from diskforge.models.assets import BuildResult, asset_size
from diskforge.models.config import MaterializerConfig, build_config
from diskforge.models.outcomes import AssetReport, PassReport, WriteOutcome
from diskforge.reporting.notices import format_notice

logger = logging.getLogger(__name__)


class AssetMaterializer:
    """Incrementally mirrors build assets onto the real filesystem.

    Each instance owns its hash index and gate state; two materializers
    never share either.

    Parameters
    ----------
    config:
        A validated ``MaterializerConfig``.  Keyword *options* are applied
        on top of it (or on top of the defaults when it is None).
    store_detector:
        Returns True for non-persistent host output stores.
    cwd:
        Directory that reported destination paths are made relative to.

    Raises
    ------
    ConfigurationError
        If any option is invalid.
    """

    name = "diskforge"

    def __init__(
        self,
        config: MaterializerConfig | None = None,
        *,
        store_detector: Callable[[Any], bool] = is_memory_store,
        cwd: Path | str | None = None,
        **options: Any,
    ) -> None:
        self.config = build_config(config, **options)
        self._hash_index = HashIndex()
        self._gate = EnvironmentGate(
            force_run=self.config.force_run,
            output_root=self.config.output_root,
            store_detector=store_detector,
        )
        self._cwd = cwd
        self._resolver: PathResolver | None = None
        self._pass_count = 0
        self._report_listeners: list[Callable[[PassReport], Any]] = []
        logger.debug("Options: %s", self.config.model_dump())

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def hash_index(self) -> HashIndex:
        return self._hash_index

    @property
    def gate(self) -> EnvironmentGate:
        return self._gate

    @property
    def state(self) -> GateState:
        return self._gate.state

    @property
    def pass_count(self) -> int:
        return self._pass_count

    def reset(self) -> None:
        """Re-arm one-time setup.  The hash index is kept."""
        self._gate.reset()
        self._resolver = None

    # ------------------------------------------------------------------
    # Host integration
    # ------------------------------------------------------------------

    def apply(
        self,
        host: Any,
        on_report: Callable[[PassReport], Any] | None = None,
    ) -> None:
        """Register this materializer on the host's ``after_emit`` hook.

        *on_report*, if given, receives the ``PassReport`` of every pass.
        """
        if on_report is not None:
            self._report_listeners.append(on_report)
        host.hooks.tap(AFTER_EMIT, self.name, self.on_build_complete)

    def on_build_complete(self, build: BuildResult) -> PassReport:
        report = self.run_pass(build)
        for listener in self._report_listeners:
            listener(report)
        return report

    # ------------------------------------------------------------------
    # Pass
    # ------------------------------------------------------------------

    def run_pass(self, build: BuildResult) -> PassReport:
        """Materialize one build's assets and report what happened."""
        self._pass_count += 1
        started_at = datetime.now(timezone.utc)

        if not self._gate.should_run(build.output_store, build.output_path):
            return self._skipped_pass(build, WriteOutcome.SKIPPED_ENVIRONMENT, started_at)

        logger.debug("Build reported %d errors.", len(build.errors))
        if self.config.halt_on_build_errors and build.has_errors:
            if self.config.verbose:
                logger.info(
                    "Build reported %d errors; skipping %d assets.",
                    len(build.errors),
                    len(build.assets),
                )
            return self._skipped_pass(build, WriteOutcome.SKIPPED_BUILD_ERRORS, started_at)

        resolver = self._get_resolver()
        items = [
            (asset_path, asset, resolver.resolve(asset_path))
            for asset_path, asset in build.assets.items()
        ]

        if self.config.max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                reports = list(pool.map(lambda item: self._materialize(*item), items))
        else:
            reports = [self._materialize(*item) for item in items]

        report = PassReport(
            pass_number=self._pass_count,
            assets=reports,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )
        logger.debug(
            "Pass %d: %d written, %d unchanged, %d filtered, %d failed",
            report.pass_number,
            report.count(WriteOutcome.WRITTEN),
            report.count(WriteOutcome.SKIPPED_UNCHANGED),
            report.count(WriteOutcome.SKIPPED_BY_FILTER),
            report.count(WriteOutcome.FAILED),
        )
        return report

    def _get_resolver(self) -> PathResolver:
        root = self._gate.output_root
        if self._resolver is None or self._resolver.output_root != root:
            self._resolver = PathResolver(root, cwd=self._cwd)
        return self._resolver

    def _skipped_pass(
        self, build: BuildResult, outcome: WriteOutcome, started_at: datetime
    ) -> PassReport:
        return PassReport(
            pass_number=self._pass_count,
            skip_reason=outcome,
            assets=[
                AssetReport(asset_path=asset_path, outcome=outcome)
                for asset_path in build.assets
            ],
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )

    # ------------------------------------------------------------------
    # Per asset
    # ------------------------------------------------------------------

    def _materialize(self, asset_path: str, asset: Any, resolved: ResolvedPath) -> AssetReport:
        destination = resolved.destination

        def report(outcome: WriteOutcome, **fields: Any) -> AssetReport:
            result = AssetReport(
                asset_path=asset_path,
                outcome=outcome,
                destination=destination,
                relative_destination=resolved.relative,
                **fields,
            )
            self._notify(result)
            return result

        try:
            accepted = self.config.filter.accepts(asset_path)
        except Exception as exc:  # noqa: BLE001
            return report(WriteOutcome.FAILED, reason=f"filter raised: {exc}")
        if not accepted:
            return report(WriteOutcome.SKIPPED_BY_FILTER)

        try:
            data = body_bytes(asset.source())
            size = asset_size(asset, data)
        except Exception as exc:  # noqa: BLE001
            return report(WriteOutcome.FAILED, reason=f"could not read asset body: {exc}")

        digest = ""
        previous: str | None = None
        if self.config.use_change_detection:
            digest = fingerprint(data)
            claimed, previous = self._hash_index.claim(destination, digest)
            if not claimed:
                return report(WriteOutcome.SKIPPED_UNCHANGED, size_bytes=size, fingerprint=digest)

        try:
            ensure_parent_dir(destination)
        except (OSError, ValueError) as exc:
            self._release(destination, digest, previous)
            return report(
                WriteOutcome.FAILED,
                size_bytes=size,
                fingerprint=digest,
                reason=f"could not create directory {destination.parent}: {exc}",
            )

        try:
            if self.config.atomic_write:
                write_atomic(destination, data)
            else:
                write_plain(destination, data)
        except (OSError, ValueError) as exc:
            self._release(destination, digest, previous)
            return report(WriteOutcome.FAILED, size_bytes=size, fingerprint=digest, reason=str(exc))

        return report(WriteOutcome.WRITTEN, size_bytes=size, fingerprint=digest)

    def _release(self, destination: Path, digest: str, previous: str | None) -> None:
        if digest and self.config.retry_failed_writes:
            self._hash_index.release(destination, digest, previous)

    def _notify(self, report: AssetReport) -> None:
        if not self.config.verbose:
            return
        if report.outcome == WriteOutcome.FAILED:
            logger.warning("%s", format_notice(report))
        else:
            logger.info("%s", format_notice(report))
