"""Environment gate — decides once whether materialization runs at all.

Materializing only makes sense when the host writes its output into a
non-persistent (in-memory) store, as dev servers do.  When the host
already writes to disk, a second writer would duplicate or fight its
writes, so the gate stays closed unless ``force_run`` is set.

States
------
- ``uninitialized``  first pass has not happened yet
- ``ready``          gate open, output root resolved
- ``disabled``       gate closed for the life of the materializer
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any

from diskforge.core.config_guard import ConfigurationError, resolve_output_root
from diskforge.host.stores import describe_store, is_memory_store

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    """One-time setup state of an ``EnvironmentGate``."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DISABLED = "disabled"


class EnvironmentGate:
    """Evaluates the output store once and caches the verdict.

    Parameters
    ----------
    force_run:
        Open the gate even for persistent output stores.
    output_root:
        Explicit output root.  Takes precedence over the host's.
    store_detector:
        Returns True for non-persistent stores.  Defaults to
        ``is_memory_store``.
    """

    def __init__(
        self,
        *,
        force_run: bool = False,
        output_root: Path | str | None = None,
        store_detector: Callable[[Any], bool] = is_memory_store,
    ) -> None:
        self._force_run = force_run
        self._explicit_root = output_root
        self._detect = store_detector
        self._state = GateState.UNINITIALIZED
        self._output_root: Path | None = None

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def output_root(self) -> Path | None:
        """The resolved output root; None until the gate is ready."""
        return self._output_root

    def should_run(self, output_store: Any, host_output_path: Path | str | None = None) -> bool:
        """Return whether passes should materialize assets.

        Only the first call inspects the store and resolves the output
        root; later calls return the cached verdict.

        Raises
        ------
        ConfigurationError
            On the first call, if the gate would open but no output root
            can be resolved.  The gate is then disabled.
        """
        if self._state is GateState.READY:
            return True
        if self._state is GateState.DISABLED:
            return False

        logger.debug("Host output store is %s.", describe_store(output_store))

        if not self._force_run and not self._detect(output_store):
            self._state = GateState.DISABLED
            logger.debug(
                "Output store %s is persistent; materialization disabled "
                "(set force_run to override).",
                describe_store(output_store),
            )
            return False

        try:
            self._output_root = resolve_output_root(self._explicit_root, host_output_path)
        except ConfigurationError:
            self._state = GateState.DISABLED
            raise

        self._state = GateState.READY
        logger.debug("Output root is %s.", self._output_root)
        return True

    def reset(self) -> None:
        """Return to ``uninitialized`` so the next pass re-evaluates."""
        self._state = GateState.UNINITIALIZED
        self._output_root = None
