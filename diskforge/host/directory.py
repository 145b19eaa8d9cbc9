"""Load a staging directory as a set of in-memory build assets."""

from __future__ import annotations

from pathlib import Path

from diskforge.models.assets import MemoryAsset


def load_directory_assets(root: Path | str) -> dict[str, MemoryAsset]:
    """Read every file under *root* into a ``MemoryAsset``.

    Keys are POSIX paths relative to *root*, in sorted order.
    """
    base = Path(root)
    if not base.is_dir():
        raise NotADirectoryError(f"Not a directory: {base}")

    assets: dict[str, MemoryAsset] = {}
    for path in sorted(base.rglob("*")):
        if path.is_file():
            data = path.read_bytes()
            assets[path.relative_to(base).as_posix()] = MemoryAsset(
                body=data, reported_size=len(data)
            )
    return assets
