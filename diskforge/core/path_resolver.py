"""Destination path resolution for build-reported asset paths."""

from __future__ import annotations

import os
from pathlib import Path
from typing import NamedTuple

from diskforge.core.config_guard import ConfigurationError


class ResolvedPath(NamedTuple):
    """Where an asset lands on disk, plus a cwd-relative form for notices."""

    destination: Path
    relative: str


def strip_query(asset_path: str) -> str:
    """Drop a cache-busting ``?query`` suffix from an asset identifier."""
    return asset_path.split("?", 1)[0]


class PathResolver:
    """Turns reported asset paths into absolute destination paths.

    Absolute asset paths are normalized in place; relative ones are joined to
    the output root and normalized.

    Parameters
    ----------
    output_root:
        Base directory for relative asset paths.  May be None, in which
        case only absolute asset paths resolve.
    cwd:
        Directory the ``relative`` form is computed against.  Defaults to
        the process working directory at resolution time.
    """

    def __init__(self, output_root: Path | str | None, cwd: Path | str | None = None) -> None:
        self._root = Path(output_root) if output_root is not None else None
        self._cwd = Path(cwd) if cwd is not None else None

    @property
    def output_root(self) -> Path | None:
        return self._root

    def resolve(self, asset_path: str) -> ResolvedPath:
        """Resolve *asset_path* to its destination.

        Raises
        ------
        ConfigurationError
            If *asset_path* is relative and no output root is configured.
        """
        target = strip_query(asset_path)

        if os.path.isabs(target):
            destination = Path(os.path.normpath(target))
        elif self._root is None:
            raise ConfigurationError(
                f"output root is not defined; cannot resolve relative asset path {asset_path!r}"
            )
        else:
            destination = Path(os.path.normpath(self._root / target))

        cwd = self._cwd if self._cwd is not None else Path.cwd()
        try:
            relative = os.path.relpath(destination, cwd)
        except ValueError:
            # Different drives on Windows.
            relative = str(destination)

        return ResolvedPath(destination=destination, relative=relative)
