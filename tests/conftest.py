"""Shared test fixtures for Diskforge."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from diskforge.core.materializer import AssetMaterializer
from diskforge.host.stores import DiskOutputStore, MemoryOutputStore
from diskforge.models.assets import BuildResult, MemoryAsset


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    """Provide the directory assets are materialized under."""
    return tmp_path / "build"


@pytest.fixture
def memory_store() -> MemoryOutputStore:
    """Provide a fresh dev-server style output store."""
    return MemoryOutputStore()


@pytest.fixture
def disk_store() -> DiskOutputStore:
    """Provide a persistent output store."""
    return DiskOutputStore()


@pytest.fixture
def make_build(
    output_root: Path, memory_store: MemoryOutputStore
) -> Callable[..., BuildResult]:
    """Factory fixture: build a BuildResult from ``{path: body}``.

    Bodies are wrapped in ``MemoryAsset`` unless they already expose
    ``source()``.
    """

    def _factory(
        assets: dict[str, Any] | None = None,
        errors: list[Any] | None = None,
        **overrides: Any,
    ) -> BuildResult:
        wrapped = {
            path: body if callable(getattr(body, "source", None)) else MemoryAsset(body=body)
            for path, body in (assets or {}).items()
        }
        defaults: dict[str, Any] = {
            "assets": wrapped,
            "errors": errors or [],
            "output_path": output_root,
            "output_store": memory_store,
        }
        defaults.update(overrides)
        return BuildResult(**defaults)

    return _factory


@pytest.fixture
def make_materializer(tmp_path: Path) -> Callable[..., AssetMaterializer]:
    """Factory fixture: a materializer reporting paths relative to tmp_path."""

    def _factory(**options: Any) -> AssetMaterializer:
        return AssetMaterializer(cwd=tmp_path, **options)

    return _factory


@pytest.fixture
def materializer(make_materializer: Callable[..., AssetMaterializer]) -> AssetMaterializer:
    """Convenience: a materializer with default options."""
    return make_materializer()
