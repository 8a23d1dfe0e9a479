from __future__ import annotations

import time
import weakref
from collections.abc import Sequence

from ._typing import NodeKind

# Empty string can never be a path component, so the root is unreachable by name
ROOT_NAME = ""


# ---------------------------------------------------------------------------
#  Nodes
# ---------------------------------------------------------------------------


class DirNode:
    __slots__ = ("name", "_parent", "children", "created_at", "modified_at", "__weakref__")

    kind = NodeKind.DIRECTORY

    def __init__(self, name: str, parent: DirNode | None = None) -> None:
        self.name: str = name
        self._parent: weakref.ref[DirNode] | None = None
        self.children: dict[str, Node] = {}
        now = time.time()
        self.created_at: float = now
        self.modified_at: float = now
        self.set_parent(parent)

    @property
    def parent(self) -> DirNode | None:
        """Enclosing directory. A lookup relation only; the parent owns us, not the reverse."""
        return self._parent() if self._parent is not None else None

    def set_parent(self, parent: DirNode | None) -> None:
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def size(self) -> int:
        return 0

    def __repr__(self) -> str:
        return f"DirNode({self.name!r}, children={sorted(self.children)!r})"


class FileNode:
    __slots__ = ("name", "_parent", "content", "created_at", "modified_at", "__weakref__")

    kind = NodeKind.FILE

    def __init__(self, name: str, parent: DirNode | None = None, content: bytes = b"") -> None:
        self.name: str = name
        self._parent: weakref.ref[DirNode] | None = None
        self.content: bytes = content
        now = time.time()
        self.created_at: float = now
        self.modified_at: float = now
        self.set_parent(parent)

    @property
    def parent(self) -> DirNode | None:
        return self._parent() if self._parent is not None else None

    def set_parent(self, parent: DirNode | None) -> None:
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def size(self) -> int:
        return len(self.content)

    def replace_content(self, content: bytes) -> None:
        self.content = content
        self.modified_at = time.time()

    def __repr__(self) -> str:
        return f"FileNode({self.name!r}, size={self.size})"


Node = DirNode | FileNode


def resolve(node: Node, tokens: Sequence[str]) -> Node | None:
    """Walk *tokens* down from *node*; ``None`` when any step is missing.

    Resolution stops at a file: a file has no children, so any further
    component fails.  An empty token sequence resolves to *node* itself.
    """
    current = node
    for token in tokens:
        if not isinstance(current, DirNode):
            return None
        child = current.children.get(token)
        if child is None:
            return None
        current = child
    return current


# ---------------------------------------------------------------------------
#  Listing order
# ---------------------------------------------------------------------------


def name_key(name: str) -> bytes:
    """Sort key giving lexicographic byte order of the UTF-8 encoded name."""
    return name.encode("utf-8", "surrogatepass")


def sorted_children(node: DirNode) -> list[Node]:
    return sorted(node.children.values(), key=lambda child: name_key(child.name))
