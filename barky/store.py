"""Storage of flattened key/value pairs with structural conflict checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, TypeVar

from .path import PathType, join_path, split_path

__all__ = ["ValueInfo", "PropertyConflictError", "Storage", "ordered_map_keys"]

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class ValueInfo:
    """A stored value and the index of the file it came from."""

    file: int
    value: str


class PropertyConflictError(ValueError):
    """Raised when a key clashes with the structure already stored."""

    def __init__(self, path: str) -> None:
        super().__init__(f"property conflict at path {path}")
        self.path = path


@dataclass
class _Node:
    """Inner tree node; a ``None`` child marks a leaf holding a value."""

    type: PathType
    data: Dict[str, Optional["_Node"]] = field(default_factory=dict)


def ordered_map_keys(m: Iterable[K]) -> List[K]:
    """Return the keys of ``m`` in sorted order."""
    return sorted(m)


class Storage:
    """Flattened key/value pairs kept consistent with a hierarchical tree.

    Each value remembers the index of the file it originated from.
    """

    def __init__(self) -> None:
        self._root: Optional[_Node] = None
        self._data: Dict[str, ValueInfo] = {}
        self._file: Dict[str, int] = {}

    def raw_data(self) -> Dict[str, ValueInfo]:
        """The internal mapping of flattened key to ValueInfo (not a copy)."""
        return self._data

    def data(self) -> Dict[str, str]:
        """A new mapping of flattened key to value, without file indexes."""
        return {key: info.value for key, info in self._data.items()}

    def add_file(self, file: str) -> int:
        """Register ``file`` and return its index, assigned from 0 upwards."""
        return self._file.setdefault(file, len(self._file))

    def raw_file(self) -> Dict[str, int]:
        """The internal mapping of file name to index (not a copy)."""
        return self._file

    def keys(self) -> List[str]:
        """All stored flattened keys in lexicographic order."""
        return ordered_map_keys(self._data)

    def sub_keys(self, key: str) -> List[str]:
        """Sorted names of the immediate children under ``key``.

        An empty key means the top level. Unknown paths give an empty
        list; raises PathError for malformed keys and
        PropertyConflictError when the path runs into a value or a
        structure of another kind.
        """
        path = split_path(key) if key else []

        if self._root is None:
            return []

        node: Optional[_Node] = self._root
        for i, segment in enumerate(path):
            if node is None or segment.type != node.type:
                raise PropertyConflictError(join_path(path[: i + 1]))
            if segment.elem not in node.data:
                return []
            node = node.data[segment.elem]

        if node is None:
            raise PropertyConflictError(key)
        return ordered_map_keys(node.data)

    def has(self, key: str) -> bool:
        """Whether ``key`` names a stored value or a stored structure."""
        if not key or self._root is None:
            return False
        if key in self._data:
            return True
        try:
            path = split_path(key)
        except ValueError:
            return False

        node: Optional[_Node] = self._root
        for segment in path:
            if node is None or segment.type != node.type:
                return False
            if segment.elem not in node.data:
                return False
            node = node.data[segment.elem]
        return True

    def get(self, key: str, *args: str) -> str:
        """The value stored at ``key``.

        If it is absent, the first extra argument is returned when given,
        otherwise ``""``.
        """
        info = self._data.get(key)
        if info is None:
            return args[0] if args else ""
        return info.value

    def set(self, key: str, val: str, file: int) -> None:
        """Store ``val`` at ``key`` with the given file index.

        Raises ValueError for an empty key, PathError for a malformed one
        and PropertyConflictError when the key clashes with the structure
        already stored.
        """
        if not key:
            raise ValueError("key is empty")

        path = split_path(key)

        if self._root is None:
            self._root = _Node(path[0].type)

        node: Optional[_Node] = self._root
        last = len(path) - 1
        for i, segment in enumerate(path):
            if node is None or segment.type != node.type:
                raise PropertyConflictError(join_path(path[: i + 1]))
            if segment.elem not in node.data:
                node.data[segment.elem] = _Node(path[i + 1].type) if i < last else None
            node = node.data[segment.elem]

        if node is not None:
            raise PropertyConflictError(key)

        self._data[key] = ValueInfo(file, val)