from pathlib import Path

from trellis.needle import Needle, find_project_root
from .messaging.bus import MessageBus
from .fs import DirEntry, FileSystemAdapter, MemoryFileSystem, RealFileSystem

# --- Composition root for shared services ---

# Packaged templates come first; the project's .trellis/needle overrides them.
trellis_needle = Needle(roots=[Path(__file__).parent / "assets", find_project_root()])

bus = MessageBus(needle_instance=trellis_needle)

__all__ = [
    "bus",
    "trellis_needle",
    "MessageBus",
    "DirEntry",
    "FileSystemAdapter",
    "MemoryFileSystem",
    "RealFileSystem",
]
