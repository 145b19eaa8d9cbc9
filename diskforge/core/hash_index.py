"""In-memory hash index — output path to last written fingerprint.

The index lives exactly as long as the materializer that owns it.  It is
never persisted and never shrinks: one entry per distinct output path ever
seen, which is bounded by the project's build graph.
"""

from __future__ import annotations

import threading
from pathlib import Path


class HashIndex:
    """Maps normalized destination paths to content fingerprints.

    Every read and write goes through a lock so a pass may process assets
    on worker threads.  An index must not be shared between materializers
    writing different output trees.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(path: Path | str) -> str:
        return str(path)

    # ------------------------------------------------------------------
    # Lookup / record
    # ------------------------------------------------------------------

    def lookup(self, path: Path | str) -> str | None:
        """Return the recorded fingerprint for *path*, or None."""
        with self._lock:
            return self._entries.get(self._key(path))

    def record(self, path: Path | str, digest: str) -> None:
        """Record *digest* for *path*, overwriting any prior entry."""
        with self._lock:
            self._entries[self._key(path)] = digest

    # ------------------------------------------------------------------
    # Atomic compare-and-record
    # ------------------------------------------------------------------

    def claim(self, path: Path | str, digest: str) -> tuple[bool, str | None]:
        """Record *digest* unless it is already the recorded value.

        Returns ``(claimed, previous)``.  ``claimed`` is False when the
        index already held *digest* for *path*, meaning the write can be
        skipped.  ``previous`` is the fingerprint that was replaced.
        """
        key = self._key(path)
        with self._lock:
            previous = self._entries.get(key)
            if previous == digest:
                return False, previous
            self._entries[key] = digest
            return True, previous

    def release(self, path: Path | str, digest: str, previous: str | None) -> None:
        """Undo a claim after a failed write.

        Only rolls back if *digest* is still the recorded value.  A path
        first seen in the failed claim keeps an empty entry so the next
        pass retries the write.
        """
        key = self._key(path)
        with self._lock:
            if self._entries.get(key) != digest:
                return
            self._entries[key] = previous if previous is not None else ""

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the current entries."""
        with self._lock:
            return dict(self._entries)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        with self._lock:
            return self._key(path) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
