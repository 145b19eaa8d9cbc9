"""Filesystem write primitives used by the materializer."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

DEFAULT_FILE_MODE = 0o666


def new_file_mode() -> int:
    """Mode a plain ``open(..., "w")`` would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return DEFAULT_FILE_MODE & ~umask


def ensure_parent_dir(path: Path) -> None:
    """Create the parent directory of *path*, tolerating one that exists.

    Concurrent creation of a shared parent is safe.  Any other failure
    (permissions, a regular file in the way) propagates as ``OSError``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def write_plain(path: Path, data: bytes) -> None:
    """Overwrite *path* in place."""
    path.write_bytes(data)


def write_atomic(path: Path, data: bytes) -> None:
    """Write *data* to *path* so readers never see a partial file.

    Stages the bytes in a temporary file in the same directory, fsyncs it,
    then ``os.replace``s it over the target.  An existing target's
    permission bits are carried over to the replacement; a new file gets
    the umask-filtered default, the same as ``write_plain``.
    """
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = new_file_mode()

    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
