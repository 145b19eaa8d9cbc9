"""Per-asset and per-pass outcome models (reporting only, never persisted)."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class WriteOutcome(str, Enum):
    """What happened to one asset during one pass."""

    WRITTEN = "written"
    SKIPPED_BY_FILTER = "skipped_by_filter"
    SKIPPED_UNCHANGED = "skipped_unchanged"
    SKIPPED_BUILD_ERRORS = "skipped_build_errors"
    SKIPPED_ENVIRONMENT = "skipped_environment"
    FAILED = "failed"


class AssetReport(BaseModel):
    """Outcome for a single asset.

    ``destination`` is None when the pass was skipped before paths were
    resolved.  ``reason`` is populated for FAILED.
    """

    model_config = ConfigDict(frozen=True)

    asset_path: str
    outcome: WriteOutcome
    destination: Path | None = None
    relative_destination: str = ""
    size_bytes: int = 0
    fingerprint: str = ""
    reason: str = ""


class PassReport(BaseModel):
    """Everything one materializer pass did, in host asset order."""

    model_config = ConfigDict(frozen=True)

    pass_number: int
    skip_reason: WriteOutcome | None = None  # set when the whole pass was skipped
    assets: list[AssetReport] = []
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    finished_at: datetime | None = None

    def count(self, outcome: WriteOutcome) -> int:
        return sum(1 for report in self.assets if report.outcome == outcome)

    @property
    def counts(self) -> dict[WriteOutcome, int]:
        return dict(Counter(report.outcome for report in self.assets))

    @property
    def written(self) -> list[AssetReport]:
        return [r for r in self.assets if r.outcome == WriteOutcome.WRITTEN]

    @property
    def failed(self) -> list[AssetReport]:
        return [r for r in self.assets if r.outcome == WriteOutcome.FAILED]

    @property
    def skipped(self) -> bool:
        return self.skip_reason is not None

    def outcome_for(self, asset_path: str) -> WriteOutcome | None:
        for report in self.assets:
            if report.asset_path == asset_path:
                return report.outcome
        return None
