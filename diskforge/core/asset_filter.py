"""Asset filters — decide which asset paths are eligible for materialization.

Filters are a tagged variant resolved once, when the configuration is
validated:

- ``NoFilter``        accepts every path
- ``PatternFilter``   accepts paths a regular expression matches (search)
- ``PredicateFilter`` accepts paths a callable returns truthy for

Filters see only the reported asset path string, never file contents.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class AssetFilter(ABC):
    """Uniform ``accepts(path)`` capability shared by every filter kind."""

    kind: str = "abstract"

    @abstractmethod
    def accepts(self, path: str) -> bool:
        """Return True if *path* should be materialized."""

    def __call__(self, path: str) -> bool:
        return self.accepts(path)


class NoFilter(AssetFilter):
    """Accepts all paths."""

    kind = "none"

    def accepts(self, path: str) -> bool:
        return True

    def __repr__(self) -> str:
        return "NoFilter()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoFilter)

    def __hash__(self) -> int:
        return hash(self.kind)


class PatternFilter(AssetFilter):
    """Accepts a path iff the pattern matches anywhere in it."""

    kind = "pattern"

    def __init__(self, pattern: re.Pattern[str] | str) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def accepts(self, path: str) -> bool:
        return self.pattern.search(path) is not None

    def __repr__(self) -> str:
        return f"PatternFilter({self.pattern.pattern!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PatternFilter) and other.pattern == self.pattern

    def __hash__(self) -> int:
        return hash((self.kind, self.pattern))


class PredicateFilter(AssetFilter):
    """Accepts a path iff the predicate returns a truthy value."""

    kind = "predicate"

    def __init__(self, predicate: Callable[[str], Any]) -> None:
        self.predicate = predicate

    def accepts(self, path: str) -> bool:
        return bool(self.predicate(path))

    def __repr__(self) -> str:
        name = getattr(self.predicate, "__name__", type(self.predicate).__name__)
        return f"PredicateFilter({name})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PredicateFilter) and other.predicate is self.predicate

    def __hash__(self) -> int:
        return hash((self.kind, id(self.predicate)))


def build_filter(value: Any) -> AssetFilter:
    """Resolve a ``filter`` option value into an ``AssetFilter``.

    Accepts None, an ``AssetFilter``, a compiled pattern, a regex string,
    or a callable.

    Raises
    ------
    TypeError
        If *value* is none of the above.
    re.error
        If a regex string does not compile.
    """
    if value is None:
        return NoFilter()
    if isinstance(value, AssetFilter):
        return value
    if isinstance(value, (re.Pattern, str)):
        return PatternFilter(value)
    if callable(value):
        return PredicateFilter(value)
    raise TypeError(
        f"filter must be a regular expression or a callable, got {type(value).__name__}"
    )
