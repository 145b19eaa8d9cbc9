"""Process settings — env-driven defaults for materializers and the CLI.

Reads from a .env file and DISKFORGE_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class DiskforgeSettings(BaseSettings):
    """Default materializer options with environment variable overrides.

    Examples
    --------
    Override via environment::

        export DISKFORGE_OUTPUT_ROOT=/srv/app/build
        export DISKFORGE_LOG_LEVEL=DEBUG
        export DISKFORGE_FORCE_RUN=true

    Or via .env file::

        DISKFORGE_VERBOSE=false
        DISKFORGE_MAX_WORKERS=4
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DISKFORGE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Materializer defaults
    output_root: Path | None = None
    use_change_detection: bool = True
    halt_on_build_errors: bool = True
    force_run: bool = False
    atomic_write: bool = True
    verbose: bool = True
    max_workers: int = 1


# Module-level singleton: import as `from diskforge.config import settings`
settings = DiskforgeSettings()
