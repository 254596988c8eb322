from typing import Any, Union


class SemanticPointer:
    """
    Dotted message id built by attribute access, e.g. `L.move.failed`.

    Segments that are only known at runtime go through indexing:
    `L[kind.value].source_missing`.
    """

    __slots__ = ("_key",)

    def __init__(self, key: str = ""):
        self._key = key

    def _child(self, segment: str) -> "SemanticPointer":
        return SemanticPointer(f"{self._key}.{segment}" if self._key else segment)

    def __getattr__(self, name: str) -> "SemanticPointer":
        if name.startswith("__"):
            raise AttributeError(name)
        return self._child(name)

    def __getitem__(self, segment: Union[str, "SemanticPointer"]) -> "SemanticPointer":
        segment = str(segment)
        if not segment:
            raise KeyError("Empty message id segment.")
        return self._child(segment)

    def __str__(self) -> str:
        return self._key

    def __repr__(self) -> str:
        return f"<SemanticPointer: '{self._key}'>"

    def __eq__(self, other: Any) -> bool:
        return str(other) == self._key

    def __hash__(self) -> int:
        return hash(self._key)


L = SemanticPointer()
