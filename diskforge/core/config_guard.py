"""Configuration guard — output root resolution and setup failures.

The guard runs once, when the environment gate first opens.  It fails hard
(raises ``ConfigurationError``) if no usable output root can be determined,
before any asset is touched.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# A host output path of "/" is what hosts report when output.path was
# never configured, so it is never a usable root.
UNUSABLE_HOST_ROOTS: frozenset[str] = frozenset({"/", ""})


class ConfigurationError(RuntimeError):
    """Raised when materializer configuration is invalid or incomplete.

    Configuration errors surface synchronously to the caller.  They are
    never converted into per-asset outcomes.
    """


def resolve_output_root(
    explicit_root: Path | str | None,
    host_output_path: Path | str | None,
) -> Path:
    """Determine the directory relative asset paths are written under.

    Resolution order
    ----------------
    1. *explicit_root*, the ``output_root`` option.
    2. *host_output_path*, the host build's configured output path, unless
       it is ``/`` or empty.

    Raises
    ------
    ConfigurationError
        If neither source yields a root.
    """
    if explicit_root is not None and str(explicit_root) != "":
        root = Path(explicit_root)
    elif host_output_path is not None and str(host_output_path) not in UNUSABLE_HOST_ROOTS:
        root = Path(host_output_path)
    else:
        msg = (
            "output root is not defined. Pass output_root=... or configure "
            "the host build's output path."
        )
        logger.error(msg)
        raise ConfigurationError(msg)

    return root.absolute()
