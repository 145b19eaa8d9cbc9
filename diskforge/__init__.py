"""Diskforge: incremental materialization of in-memory build assets.

Bundlers running a dev server keep their output in memory.  Diskforge
hooks into build completion and mirrors that output onto the real
filesystem, writing only the files whose content changed since the
previous build.

v0.2.0:
  - Per-instance hash index with optional retry of failed writes
  - One-time environment gate (uninitialized -> ready | disabled)
  - Pattern and predicate asset filters resolved at config validation
  - Atomic replace by default
  - Optional parallel writes (max_workers)
"""

__version__ = "0.2.0"
__description__ = "Incremental materialization of in-memory build assets onto disk"

from diskforge.core.config_guard import ConfigurationError
from diskforge.core.materializer import AssetMaterializer
from diskforge.models.config import MaterializerConfig
from diskforge.models.outcomes import PassReport, WriteOutcome

__all__ = [
    "AssetMaterializer",
    "ConfigurationError",
    "MaterializerConfig",
    "PassReport",
    "WriteOutcome",
    "__version__",
]
