"""Diskforge data models — all Pydantic v2, all frozen (immutable)."""

from diskforge.models.assets import BuildAsset, BuildResult, MemoryAsset
from diskforge.models.config import MaterializerConfig, build_config
from diskforge.models.outcomes import AssetReport, PassReport, WriteOutcome

__all__ = [
    "AssetReport",
    "BuildAsset",
    "BuildResult",
    "MaterializerConfig",
    "MemoryAsset",
    "PassReport",
    "WriteOutcome",
    "build_config",
]
