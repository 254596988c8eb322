import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

import yaml

log = logging.getLogger(__name__)


class FileHandler(Protocol):
    """
    Protocol for handlers that turn one catalog file into a flat mapping.
    """

    def match(self, path: Path) -> bool:
        """Returns True if this handler can process the given file."""
        ...

    def load(self, path: Path) -> Dict[str, Any]:
        """Parses the file and returns a dictionary."""
        ...


class JsonHandler:
    """Standard handler for JSON files."""

    def match(self, path: Path) -> bool:
        return path.suffix.lower() == ".json"

    def load(self, path: Path) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)


class YamlHandler:
    """Handler for hand-written YAML overrides."""

    def match(self, path: Path) -> bool:
        return path.suffix.lower() in (".yaml", ".yml")

    def load(self, path: Path) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
        return content if isinstance(content, dict) else {}


class Loader:
    def __init__(self, handlers: Optional[List[FileHandler]] = None):
        self.handlers = handlers or [JsonHandler(), YamlHandler()]

    def _load_and_merge_file(self, path: Path, registry: Dict[str, str]):
        for handler in self.handlers:
            if handler.match(path):
                try:
                    content = handler.load(path)
                except (OSError, ValueError, yaml.YAMLError) as e:
                    log.warning(f"Ignoring malformed message file {path}: {e}")
                    return
                # Keys are full dotted ids at the top level.
                for key, value in content.items():
                    registry[str(key)] = str(value)
                return

    def load_directory(self, root_path: Path) -> Dict[str, str]:
        registry: Dict[str, str] = {}

        if not root_path.is_dir():
            return registry

        for dirpath, _, filenames in os.walk(root_path):
            for filename in sorted(filenames):
                self._load_and_merge_file(Path(dirpath) / filename, registry)

        return registry
