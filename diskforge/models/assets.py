"""Asset and build-result models exchanged with the host build tool."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from diskforge.core.hasher import body_bytes


@runtime_checkable
class BuildAsset(Protocol):
    """What the host reports for each output: a body and a size accessor."""

    def source(self) -> Any:
        """Return the body: text, bytes, or a sequence of fragments."""
        ...

    def size(self) -> int | None:
        """Return the reported size in bytes, if known."""
        ...


class MemoryAsset(BaseModel):
    """An asset whose body is held in memory.

    The body may be ``str``, ``bytes``, or a list of fragments that are
    concatenated in order when materialized.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    body: Any
    reported_size: int | None = None

    def source(self) -> Any:
        return self.body

    def size(self) -> int | None:
        if self.reported_size is not None:
            return self.reported_size
        return len(body_bytes(self.body))


class BuildResult(BaseModel):
    """One build-completion notification from the host.

    ``assets`` preserves the order the host reported them in.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    assets: dict[str, Any] = Field(default_factory=dict)
    errors: list[Any] = Field(default_factory=list)
    output_path: Path | None = None
    output_store: Any = None

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0


def asset_size(asset: Any, data: bytes) -> int:
    """Reported size, falling back to the body length when absent or zero."""
    size_fn = getattr(asset, "size", None)
    reported = size_fn() if callable(size_fn) else None
    return reported or len(data)
