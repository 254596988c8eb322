import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from trellis.common.fs import FileSystemAdapter, RealFileSystem
from .models import Operation, OperationKind


@dataclass(frozen=True)
class BuildConfig:
    """
    Options for one build. Constructed once and shared by the parser,
    interpreter and executor; never mutated mid-run.
    """

    verbose: bool = False
    fs: FileSystemAdapter = field(default_factory=RealFileSystem)
    search: str = ""
    replace: str = ""
    replace_file_names: bool = False
    replace_folder_names: bool = False
    # Explicit stand-ins for `~` and the process working directory.
    home_dir: Path = field(default_factory=Path.home)
    working_dir: Path = field(default_factory=Path.cwd)

    def substitute(self, operation: Operation) -> Operation:
        if not self.search:
            return operation
        applies = (
            operation.kind is OperationKind.CREATE_FILE and self.replace_file_names
        ) or (
            operation.kind is OperationKind.CREATE_DIRECTORY
            and self.replace_folder_names
        )
        if not applies:
            return operation
        new_name = operation.name.replace(self.search, self.replace, 1)
        if not new_name or new_name == operation.name:
            return operation
        return operation.renamed(new_name)

    def absolute(self, path: Union[str, Path]) -> Path:
        """Anchors `path` at `working_dir` and collapses `.` and `..` segments."""
        path = Path(path)
        if not path.is_absolute():
            path = self.working_dir / path
        return Path(os.path.normpath(path))
