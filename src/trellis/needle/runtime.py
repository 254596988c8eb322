import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from .loader import Loader
from .pointer import SemanticPointer


def find_project_root(start_dir: Optional[Path] = None) -> Path:
    """
    Finds the project root by searching upwards for common markers.
    Search priority: pyproject.toml -> .git
    """
    current_dir = (start_dir or Path.cwd()).resolve()
    while current_dir.parent != current_dir:
        if (current_dir / "pyproject.toml").is_file():
            return current_dir
        if (current_dir / ".git").is_dir():
            return current_dir
        current_dir = current_dir.parent
    return start_dir or Path.cwd()


class Needle:
    """
    The runtime kernel for semantic addressing of user-facing messages.
    """

    def __init__(self, roots: Optional[List[Path]] = None):
        self.default_lang = "en"
        self._registry: Dict[str, Dict[str, str]] = {}  # lang -> {key: template}
        self._loader = Loader()
        self._loaded_langs: set = set()
        self.roots = list(roots) if roots else [find_project_root()]

    def add_root(self, path: Path):
        """Adds a new search root to the beginning of the list."""
        if path not in self.roots:
            self.roots.insert(0, path)
            self._loaded_langs.clear()

    def _ensure_lang_loaded(self, lang: str):
        if lang in self._loaded_langs:
            return

        merged_registry: Dict[str, str] = {}

        # Earlier roots are defaults, later roots are overrides.
        for root in self.roots:
            asset_path = root / "needle" / lang
            if asset_path.is_dir():
                merged_registry.update(self._loader.load_directory(asset_path))

            hidden_path = root / ".trellis" / "needle" / lang
            if hidden_path.is_dir():
                merged_registry.update(self._loader.load_directory(hidden_path))

        self._registry[lang] = merged_registry
        self._loaded_langs.add(lang)

    def get(
        self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None
    ) -> str:
        """
        Resolves a semantic pointer to a template with graceful fallback.

        Lookup Order:
        1. Target Language
        2. Default Language (en)
        3. Identity (the key itself)
        """
        key = str(pointer)
        target_lang = lang or os.getenv("TRELLIS_LANG", self.default_lang)

        self._ensure_lang_loaded(target_lang)
        val = self._registry.get(target_lang, {}).get(key)
        if val is not None:
            return val

        if target_lang != self.default_lang:
            self._ensure_lang_loaded(self.default_lang)
            val = self._registry.get(self.default_lang, {}).get(key)
            if val is not None:
                return val

        return key
