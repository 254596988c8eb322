from .pointer import L, SemanticPointer
from .runtime import Needle, find_project_root
from .loader import Loader, FileHandler, JsonHandler, YamlHandler

__all__ = [
    "L",
    "SemanticPointer",
    "Needle",
    "find_project_root",
    "Loader",
    "FileHandler",
    "JsonHandler",
    "YamlHandler",
]
