from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List, Optional

import tomli_w


class WorkspaceFactory:
    """Builds source trees and project config for tests."""

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files_to_create: List[Dict[str, Any]] = []
        self._dirs_to_create: List[str] = []
        self._pyproject_data: Dict[str, Any] = {}

    def with_config(self, trellis_config: Dict[str, Any]) -> "WorkspaceFactory":
        tool = self._pyproject_data.setdefault("tool", {})
        tool["trellis"] = trellis_config
        return self

    def with_file(self, path: str, content: str = "") -> "WorkspaceFactory":
        self._files_to_create.append({"path": path, "content": dedent(content)})
        return self

    def with_binary(self, path: str, content: bytes) -> "WorkspaceFactory":
        self._files_to_create.append({"path": path, "content": content})
        return self

    def with_dir(self, path: str) -> "WorkspaceFactory":
        self._dirs_to_create.append(path)
        return self

    def with_structure(
        self, content: str, path: str = "structure.txt"
    ) -> "WorkspaceFactory":
        # Indentation is the payload here: no dedent.
        self._files_to_create.append({"path": path, "content": content})
        return self

    def build(self) -> Path:
        if self._pyproject_data:
            pyproject = self.root_path / "pyproject.toml"
            pyproject.parent.mkdir(parents=True, exist_ok=True)
            with pyproject.open("wb") as f:
                tomli_w.dump(self._pyproject_data, f)

        for rel in self._dirs_to_create:
            (self.root_path / rel).mkdir(parents=True, exist_ok=True)

        for file_spec in self._files_to_create:
            output_path = self.root_path / file_spec["path"]
            output_path.parent.mkdir(parents=True, exist_ok=True)
            content = file_spec["content"]
            if isinstance(content, bytes):
                output_path.write_bytes(content)
            else:
                output_path.write_text(content, encoding="utf-8")

        return self.root_path


def snapshot_tree(root: Path, contents: bool = False) -> Dict[str, Optional[Any]]:
    """
    Maps every path under `root` (POSIX, relative) to None for directories,
    or to True / the file bytes for files.
    """
    tree: Dict[str, Optional[Any]] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        if path.is_dir():
            tree[rel] = None
        else:
            tree[rel] = path.read_bytes() if contents else True
    return tree
