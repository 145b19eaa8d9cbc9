"""Minimal host build tool — hook bus plus an emit step.

``BuildHost`` stands in for a bundler: it owns an output store and an
output path, and when a build is emitted it stores every asset and then
notifies everything tapped into its hooks.  Integrations register a single
"on build complete" callback; ``after_emit`` is preferred because the host
has already written its own store when it fires.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from diskforge.core.hasher import body_bytes
from diskforge.host.stores import MemoryOutputStore
from diskforge.models.assets import BuildResult, MemoryAsset

logger = logging.getLogger(__name__)

HookCallback = Callable[[BuildResult], Any]

AFTER_EMIT = "after_emit"
DONE = "done"


class UnknownHookError(KeyError):
    """Raised when tapping a hook the host does not provide."""


class HookBus:
    """Named hooks, each with an ordered list of tapped callbacks."""

    HOOK_NAMES: tuple[str, ...] = (AFTER_EMIT, DONE)

    def __init__(self) -> None:
        self._taps: dict[str, list[tuple[str, HookCallback]]] = {
            hook: [] for hook in self.HOOK_NAMES
        }

    def tap(self, hook: str, name: str, callback: HookCallback) -> None:
        """Register *callback* under *name* on *hook*."""
        if hook not in self._taps:
            raise UnknownHookError(f"Unknown hook {hook!r}; available: {list(self._taps)}")
        self._taps[hook].append((name, callback))
        logger.debug("Tapped %s into %s", name, hook)

    def taps(self, hook: str) -> list[str]:
        """Names tapped into *hook*, in registration order."""
        return [name for name, _ in self._taps.get(hook, [])]

    def call(self, hook: str, build: BuildResult) -> None:
        """Invoke every callback tapped into *hook*, in order."""
        for _, callback in self._taps.get(hook, []):
            callback(build)


class BuildHost:
    """A host build that emits assets into an output store.

    Parameters
    ----------
    output_store:
        Where the host itself writes.  Defaults to a new
        ``MemoryOutputStore`` (dev-server behavior).
    output_path:
        The host's configured output directory.
    """

    def __init__(
        self,
        output_store: Any | None = None,
        output_path: Path | str | None = None,
    ) -> None:
        self.output_store = output_store if output_store is not None else MemoryOutputStore()
        self.output_path = Path(output_path) if output_path is not None else None
        self.hooks = HookBus()

    def _store_path(self, asset_path: str) -> str:
        target = asset_path.split("?", 1)[0]
        if os.path.isabs(target) or self.output_path is None:
            return target
        return str(self.output_path / target)

    def emit(
        self,
        assets: Mapping[str, Any],
        errors: Iterable[Any] = (),
    ) -> BuildResult:
        """Finish a build: store its assets, then fire ``after_emit`` and ``done``.

        Plain ``str``/``bytes``/fragment-list values are wrapped in
        ``MemoryAsset``.
        """
        normalized: dict[str, Any] = {}
        for asset_path, asset in assets.items():
            if not callable(getattr(asset, "source", None)):
                asset = MemoryAsset(body=asset)
            normalized[asset_path] = asset
            self.output_store.write_file(self._store_path(asset_path), body_bytes(asset.source()))

        build = BuildResult(
            assets=normalized,
            errors=list(errors),
            output_path=self.output_path,
            output_store=self.output_store,
        )
        logger.debug(
            "Build emitted %d assets with %d errors", len(build.assets), len(build.errors)
        )
        self.hooks.call(AFTER_EMIT, build)
        self.hooks.call(DONE, build)
        return build
