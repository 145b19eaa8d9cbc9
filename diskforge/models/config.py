"""Materializer configuration model."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    ValidationError,
    field_validator,
)

from diskforge.core.asset_filter import AssetFilter, NoFilter, build_filter
from diskforge.core.config_guard import ConfigurationError

if TYPE_CHECKING:
    from diskforge.config import DiskforgeSettings


class MaterializerConfig(BaseModel):
    """Immutable options captured when a materializer is constructed.

    Invalid types fail here, before any build event is processed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    filter: AssetFilter = Field(default_factory=NoFilter)
    use_change_detection: StrictBool = True  # skip writes whose fingerprint is unchanged
    halt_on_build_errors: StrictBool = True
    force_run: StrictBool = False  # bypass the in-memory store check
    atomic_write: StrictBool = True
    verbose: StrictBool = True
    output_root: Path | None = None
    max_workers: StrictInt = Field(default=1, ge=1)
    retry_failed_writes: StrictBool = False

    @field_validator("filter", mode="before")
    @classmethod
    def _resolve_filter(cls, value: Any) -> AssetFilter:
        try:
            return build_filter(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc
        except re.error as exc:
            raise ValueError(f"filter pattern does not compile: {exc}") from exc

    @classmethod
    def from_settings(cls, settings: DiskforgeSettings, **overrides: Any) -> MaterializerConfig:
        """Build a config from environment-driven settings plus overrides."""
        values: dict[str, Any] = {
            "use_change_detection": settings.use_change_detection,
            "halt_on_build_errors": settings.halt_on_build_errors,
            "force_run": settings.force_run,
            "atomic_write": settings.atomic_write,
            "verbose": settings.verbose,
            "output_root": settings.output_root,
            "max_workers": settings.max_workers,
        }
        values.update(overrides)
        return build_config(**values)


def build_config(config: MaterializerConfig | None = None, **options: Any) -> MaterializerConfig:
    """Validate keyword options into a ``MaterializerConfig``.

    If *config* is given, *options* are applied on top of it and validated
    again.

    Raises
    ------
    ConfigurationError
        Naming every invalid option.
    """
    if config is not None:
        if not options:
            return config
        options = {**config.model_dump(), **options}
    try:
        return MaterializerConfig(**options)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid materializer options: {problems}") from exc
