from __future__ import annotations

import io
import logging
import os

from ._exceptions import (
    IMFSExistsError,
    IMFSInvalidPathError,
    IMFSIsADirectoryError,
    IMFSNotFoundError,
)
from ._handle import MemoryFileHandle
from ._node import DirNode, FileNode, Node
from ._path import join_tokens, normalize_path, tokenize
from ._tree import NamespaceTree
from ._typing import IMFSFileStatus, IMFSStatResult, IMFSStats, NodeKind

logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]


def _status(path: str, node: Node) -> IMFSFileStatus:
    return IMFSFileStatus(
        path=path,
        size=node.size,
        modified_at=node.modified_at,
        is_dir=isinstance(node, DirNode),
    )


class MemoryFileSystem:
    """File-system style front end over a :class:`NamespaceTree`.

    Accepts ``str`` or path-like arguments, resolves relative paths against a
    working directory, and translates between handles/status records and the
    tree's token-based operations.  Several instances may share one tree.
    """

    def __init__(self, working_dir: StrPath = "/", tree: NamespaceTree | None = None) -> None:
        wd = os.fspath(working_dir)
        if not isinstance(wd, str) or not wd.replace("\\", "/").startswith("/"):
            raise IMFSInvalidPathError(wd, "working directory must be absolute")
        self._tree = tree if tree is not None else NamespaceTree()
        self._working_dir: str = normalize_path(wd)

    @property
    def tree(self) -> NamespaceTree:
        return self._tree

    # -- path helpers --

    def _qualify(self, path: StrPath) -> str:
        if path is None:
            raise IMFSInvalidPathError(path, "path is None")
        raw = os.fspath(path)
        if not isinstance(raw, str):
            raise IMFSInvalidPathError(raw, f"expected str, got {type(raw).__name__}")
        return normalize_path(raw, self._working_dir)

    def _tokens(self, path: StrPath) -> tuple[str, ...]:
        return tokenize(self._qualify(path))

    def get_working_directory(self) -> str:
        return self._working_dir

    def set_working_directory(self, path: StrPath) -> None:
        self._working_dir = self._qualify(path)
        logger.debug("working directory set to %s", self._working_dir)

    # -- public API --

    def open(self, path: StrPath, mode: str = "rb") -> MemoryFileHandle:
        if mode == "ab":
            raise io.UnsupportedOperation("append is not supported")
        valid_modes = {"rb", "wb", "xb"}
        if mode not in valid_modes:
            raise ValueError(
                f"Invalid mode '{mode}'. Supported binary modes: {sorted(valid_modes)}"
            )
        tokens = self._tokens(path)
        npath = join_tokens(tokens)
        if mode == "rb":
            data = self._tree.read(tokens)
            return MemoryFileHandle(self._tree, tokens, npath, mode, data)

        # Fail early; the commit on close re-checks under the tree lock
        node = self._find(tokens)
        if isinstance(node, DirNode):
            raise IMFSIsADirectoryError(npath)
        if node is not None and mode == "xb":
            raise IMFSExistsError(npath)
        return MemoryFileHandle(self._tree, tokens, npath, mode)

    def read_bytes(self, path: StrPath) -> bytes:
        return self._tree.read(self._tokens(path))

    def write_bytes(self, path: StrPath, data: bytes, overwrite: bool = True) -> int:
        node = self._tree.create_file(self._tokens(path), data, overwrite=overwrite)
        return node.size

    def mkdirs(self, path: StrPath) -> None:
        self._tree.create(self._tokens(path))

    def delete(self, path: StrPath, recursive: bool = False) -> None:
        self._tree.remove(self._tokens(path), recursive=recursive)

    def rename(self, src: StrPath, dst: StrPath) -> None:
        self._tree.rename(self._tokens(src), self._tokens(dst))

    def list_status(self, path: StrPath) -> list[IMFSFileStatus]:
        """Status records for a directory's children, sorted by name.

        For a file the result is the file's own status.
        """
        tokens = self._tokens(path)
        kind, entries = self._tree.scan(tokens)
        # a file's single entry carries its own name
        base = tokens[:-1] if kind is NodeKind.FILE else tokens
        return [
            IMFSFileStatus(
                path=join_tokens(base + (entry.name,)),
                size=entry.size,
                modified_at=entry.modified_at,
                is_dir=entry.is_dir,
            )
            for entry in entries
        ]

    def get_file_status(self, path: StrPath) -> IMFSFileStatus:
        tokens = self._tokens(path)
        return _status(join_tokens(tokens), self._tree.get(tokens))

    def stat(self, path: StrPath) -> IMFSStatResult:
        node = self._tree.get(self._tokens(path))
        return IMFSStatResult(
            size=node.size,
            created_at=node.created_at,
            modified_at=node.modified_at,
            is_dir=isinstance(node, DirNode),
        )

    def exists(self, path: StrPath) -> bool:
        try:
            tokens = self._tokens(path)
        except IMFSInvalidPathError:
            return False
        return self._find(tokens) is not None

    def is_dir(self, path: StrPath) -> bool:
        try:
            tokens = self._tokens(path)
        except IMFSInvalidPathError:
            return False
        return isinstance(self._find(tokens), DirNode)

    def is_file(self, path: StrPath) -> bool:
        try:
            tokens = self._tokens(path)
        except IMFSInvalidPathError:
            return False
        return isinstance(self._find(tokens), FileNode)

    def stats(self) -> IMFSStats:
        return self._tree.stats()

    def _find(self, tokens: tuple[str, ...]) -> Node | None:
        try:
            return self._tree.get(tokens)
        except IMFSNotFoundError:
            return None
