from .app import StructureBuilder, create_structure_from_string, plan_structure
from .common.fs import FileSystemAdapter, MemoryFileSystem, RealFileSystem
from .spec import (
    BuildConfig,
    BuildResult,
    Operation,
    OperationKind,
    StructureRootError,
    TrellisError,
)

__all__ = [
    "BuildConfig",
    "BuildResult",
    "FileSystemAdapter",
    "MemoryFileSystem",
    "Operation",
    "OperationKind",
    "RealFileSystem",
    "StructureBuilder",
    "StructureRootError",
    "TrellisError",
    "create_structure_from_string",
    "plan_structure",
]
