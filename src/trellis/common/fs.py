import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Protocol, Union


@dataclass(frozen=True)
class DirEntry:
    name: str
    is_dir: bool


class FileSystemAdapter(Protocol):
    """
    The storage capability the builder runs against. Swap the implementation
    to retarget a build at another backend.
    """

    def exists(self, path: Path) -> bool: ...
    def make_dirs(self, path: Path) -> None: ...
    def write_text(self, path: Path, content: str) -> None: ...
    def write_bytes(self, path: Path, content: bytes) -> None: ...
    def is_dir(self, path: Path) -> bool: ...
    def copy_file(self, src: Path, dest: Path) -> None: ...
    def remove_file(self, path: Path) -> None: ...
    def remove_tree(self, path: Path) -> None: ...
    def rename(self, src: Path, dest: Path) -> None: ...
    def list_dir(self, path: Path) -> List[DirEntry]: ...


class RealFileSystem:
    def exists(self, path: Path) -> bool:
        return path.exists()

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def write_bytes(self, path: Path, content: bytes) -> None:
        path.write_bytes(content)

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def copy_file(self, src: Path, dest: Path) -> None:
        shutil.copyfile(src, dest)

    def remove_file(self, path: Path) -> None:
        path.unlink()

    def remove_tree(self, path: Path) -> None:
        shutil.rmtree(path)

    def rename(self, src: Path, dest: Path) -> None:
        # os.rename semantics: fails across devices, which callers rely on.
        src.rename(dest)

    def list_dir(self, path: Path) -> List[DirEntry]:
        return [
            DirEntry(name=child.name, is_dir=child.is_dir())
            for child in sorted(path.iterdir(), key=lambda p: p.name)
        ]


_Node = Union[bytes, Dict[str, "_Node"]]


class MemoryFileSystem:
    """
    A dict-backed tree that mimics RealFileSystem, including the built-in
    exceptions it raises. Paths are treated as POSIX paths.
    """

    def __init__(self, files: Optional[Dict[str, Union[str, bytes]]] = None):
        self._root: Dict[str, _Node] = {}
        for path, content in (files or {}).items():
            target = PurePosixPath(path)
            self.make_dirs(Path(str(target.parent)))
            data = content.encode("utf-8") if isinstance(content, str) else content
            self.write_bytes(Path(str(target)), data)

    def _parts(self, path: Path) -> List[str]:
        return [p for p in PurePosixPath(path).parts if p != "/"]

    def _lookup(self, path: Path) -> Optional[_Node]:
        node: _Node = self._root
        for part in self._parts(path):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def _parent_dir(self, path: Path) -> Dict[str, _Node]:
        parts = self._parts(path)
        if not parts:
            raise IsADirectoryError(str(path))
        parent = self._lookup(Path("/", *parts[:-1]))
        if parent is None:
            raise FileNotFoundError(str(path))
        if not isinstance(parent, dict):
            raise NotADirectoryError(str(path))
        return parent

    def exists(self, path: Path) -> bool:
        return self._lookup(path) is not None

    def make_dirs(self, path: Path) -> None:
        node = self._root
        for part in self._parts(path):
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise FileExistsError(str(path))
            node = child

    def write_text(self, path: Path, content: str) -> None:
        self.write_bytes(path, content.encode("utf-8"))

    def write_bytes(self, path: Path, content: bytes) -> None:
        parent = self._parent_dir(path)
        name = self._parts(path)[-1]
        if isinstance(parent.get(name), dict):
            raise IsADirectoryError(str(path))
        parent[name] = bytes(content)

    def read_bytes(self, path: Path) -> bytes:
        node = self._lookup(path)
        if node is None:
            raise FileNotFoundError(str(path))
        if isinstance(node, dict):
            raise IsADirectoryError(str(path))
        return node

    def is_dir(self, path: Path) -> bool:
        return isinstance(self._lookup(path), dict)

    def copy_file(self, src: Path, dest: Path) -> None:
        self.write_bytes(dest, self.read_bytes(src))

    def remove_file(self, path: Path) -> None:
        parent = self._parent_dir(path)
        name = self._parts(path)[-1]
        if name not in parent:
            raise FileNotFoundError(str(path))
        if isinstance(parent[name], dict):
            raise IsADirectoryError(str(path))
        del parent[name]

    def remove_tree(self, path: Path) -> None:
        parent = self._parent_dir(path)
        name = self._parts(path)[-1]
        if name not in parent:
            raise FileNotFoundError(str(path))
        if not isinstance(parent[name], dict):
            raise NotADirectoryError(str(path))
        del parent[name]

    def rename(self, src: Path, dest: Path) -> None:
        src_parent = self._parent_dir(src)
        src_name = self._parts(src)[-1]
        if src_name not in src_parent:
            raise FileNotFoundError(str(src))
        dest_parent = self._parent_dir(dest)
        dest_name = self._parts(dest)[-1]
        if isinstance(dest_parent.get(dest_name), dict):
            raise IsADirectoryError(str(dest))
        dest_parent[dest_name] = src_parent.pop(src_name)

    def list_dir(self, path: Path) -> List[DirEntry]:
        node = self._lookup(path)
        if node is None:
            raise FileNotFoundError(str(path))
        if not isinstance(node, dict):
            raise NotADirectoryError(str(path))
        return [
            DirEntry(name=name, is_dir=isinstance(child, dict))
            for name, child in sorted(node.items())
        ]

    def snapshot(self, path: Path = Path("/")) -> Dict[str, Optional[bytes]]:
        """Flattens the tree under `path`: directories map to None."""
        result: Dict[str, Optional[bytes]] = {}

        def walk(node: _Node, prefix: PurePosixPath):
            if not isinstance(node, dict):
                result[str(prefix)] = node
                return
            if str(prefix) != ".":
                result[str(prefix)] = None
            for name, child in node.items():
                walk(child, prefix / name)

        node = self._lookup(path)
        if node is not None:
            walk(node, PurePosixPath("."))
        return result
