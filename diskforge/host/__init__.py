"""Host build collaborators — output stores, hooks, and asset sources.

The materializer only needs three things from a host: a build-completion
hook, the build's asset set and error list, and a way to tell whether the
host's output store is persistent.
"""

from diskforge.host.build_host import AFTER_EMIT, DONE, BuildHost, HookBus
from diskforge.host.directory import load_directory_assets
from diskforge.host.stores import (
    DiskOutputStore,
    MemoryOutputStore,
    describe_store,
    is_memory_store,
)

__all__ = [
    "AFTER_EMIT",
    "DONE",
    "BuildHost",
    "DiskOutputStore",
    "HookBus",
    "MemoryOutputStore",
    "describe_store",
    "is_memory_store",
    "load_directory_assets",
]
