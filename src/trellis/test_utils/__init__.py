from .bus import SpyBus
from .workspace import WorkspaceFactory, snapshot_tree

__all__ = ["SpyBus", "WorkspaceFactory", "snapshot_tree"]
