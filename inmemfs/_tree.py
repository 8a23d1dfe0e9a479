from __future__ import annotations

import logging
from collections.abc import Sequence

from ._exceptions import (
    IMFSDirectoryNotEmptyError,
    IMFSExistsError,
    IMFSInvalidPathError,
    IMFSIsADirectoryError,
    IMFSNotADirectoryError,
    IMFSNotFoundError,
)
from ._lock import ReadWriteLock
from ._node import ROOT_NAME, DirNode, FileNode, Node, resolve, sorted_children
from ._path import join_tokens
from ._typing import IMFSEntry, IMFSStats, NodeKind

logger = logging.getLogger(__name__)

Tokens = Sequence[str]


def _describe(node: Node) -> IMFSEntry:
    return IMFSEntry(
        name=node.name,
        kind=node.kind,
        size=node.size,
        modified_at=node.modified_at,
    )


class NamespaceTree:
    """A mutable tree of directories and files addressed by token sequences.

    Every path argument is an already-tokenized absolute path (see
    :func:`inmemfs._path.tokenize`).

    Concurrency: ``create``, ``create_file``, ``remove`` and ``rename`` run
    entirely under the exclusive side of one tree-wide lock, so mutations
    are linearizable and no intermediate state (e.g. a rename half done) is
    ever visible.  ``get``, ``list``, ``read`` and ``stats`` take the shared
    side only long enough to copy what they return.  There is no per-subtree
    locking: at most one mutation is in progress at any time.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._root = DirNode(ROOT_NAME)

    @property
    def root(self) -> DirNode:
        return self._root

    # -- read operations --

    def get(self, tokens: Tokens) -> Node:
        with self._lock.read_locked():
            node = resolve(self._root, tokens)
        if node is None:
            raise IMFSNotFoundError(join_tokens(tokens))
        return node

    def list(self, tokens: Tokens) -> tuple[IMFSEntry, ...]:
        """Sorted snapshot of a directory's children.

        Listing a file yields a single entry describing the file itself.
        """
        return self.scan(tokens)[1]

    def scan(self, tokens: Tokens) -> tuple[NodeKind, tuple[IMFSEntry, ...]]:
        """Like :meth:`list`, but also reports the kind of the node listed.

        Both come from the same shared-lock hold, so a caller can tell a
        file's own entry from a directory's children even while another
        thread swaps one for the other.
        """
        with self._lock.read_locked():
            node = resolve(self._root, tokens)
            if node is None:
                raise IMFSNotFoundError(join_tokens(tokens))
            if isinstance(node, FileNode):
                return node.kind, (_describe(node),)
            return node.kind, tuple(_describe(child) for child in sorted_children(node))

    def read(self, tokens: Tokens) -> bytes:
        with self._lock.read_locked():
            node = resolve(self._root, tokens)
            if node is None:
                raise IMFSNotFoundError(join_tokens(tokens))
            if isinstance(node, DirNode):
                raise IMFSIsADirectoryError(join_tokens(tokens))
            # bytes are immutable: a later overwrite swaps the object, never edits it
            return node.content

    def stats(self) -> IMFSStats:
        file_count = 0
        dir_count = 0
        used_bytes = 0
        with self._lock.read_locked():
            pending: list[Node] = [self._root]
            while pending:
                node = pending.pop()
                if isinstance(node, DirNode):
                    dir_count += 1
                    pending.extend(node.children.values())
                else:
                    file_count += 1
                    used_bytes += node.size
        return IMFSStats(
            used_bytes=used_bytes,
            file_count=file_count,
            dir_count=dir_count,
        )

    # -- mutating operations --

    def create(self, tokens: Tokens) -> DirNode:
        """Ensure every component of *tokens* exists as a directory.

        Idempotent; the empty path returns the root.
        """
        with self._lock.write_locked():
            return self._create_dirs(tokens)

    def create_file(
        self, tokens: Tokens, content: bytes = b"", overwrite: bool = False
    ) -> FileNode:
        """Create (or, with *overwrite*, replace) a file holding *content*.

        Missing parent directories are created.  *content* is copied, so the
        caller may reuse its buffer afterwards.
        """
        data = memoryview(content).tobytes()
        with self._lock.write_locked():
            return self._create_file(tokens, data, overwrite)

    def remove(self, tokens: Tokens, recursive: bool = False) -> None:
        """Detach the node at *tokens*; a directory's whole subtree goes with it."""
        path = join_tokens(tokens)
        with self._lock.write_locked():
            node = resolve(self._root, tokens)
            if node is None:
                raise IMFSNotFoundError(path)
            if node is self._root:
                raise IMFSNotFoundError(path, "Cannot remove the root directory")
            if isinstance(node, DirNode) and node.children and not recursive:
                raise IMFSDirectoryNotEmptyError(path)
            self._detach(node)
        logger.debug("removed %s (recursive=%s)", path, recursive)

    def rename(self, src: Tokens, dst: Tokens) -> Node:
        """Move the node at *src* (with its subtree) to *dst*.

        A placeholder of the same kind is created at *dst* first (creating
        any missing ancestors of *dst*), the source's children or content are
        transferred onto it, and finally the source is detached.  Missing
        ancestors of *dst* stay created even if the rename itself fails
        later; with the checks below the placeholder step fails only before
        anything is created.
        """
        src_path = join_tokens(src)
        dst_path = join_tokens(dst)
        with self._lock.write_locked():
            source = resolve(self._root, src)
            if source is None:
                raise IMFSNotFoundError(src_path)
            if source is self._root:
                raise IMFSNotFoundError(src_path, "Cannot rename the root directory")
            if resolve(self._root, dst) is not None:
                raise IMFSExistsError(dst_path, "Destination already exists")
            if isinstance(source, DirNode) and tuple(dst[: len(src)]) == tuple(src):
                raise IMFSInvalidPathError(
                    dst_path, "cannot move a directory into itself"
                )

            target: Node
            if isinstance(source, DirNode):
                target = self._create_dirs(dst)
                target.children = source.children
                for child in target.children.values():
                    child.set_parent(target)
                source.children = {}
            else:
                target = self._create_file(dst, source.content, overwrite=False)
            target.created_at = source.created_at
            target.modified_at = source.modified_at
            self._detach(source)
        logger.debug("renamed %s -> %s", src_path, dst_path)
        return target

    # -- helpers; callers must hold the write lock --

    def _create_dirs(self, tokens: Tokens) -> DirNode:
        assert self._lock.is_write_locked
        current = self._root
        for depth, token in enumerate(tokens):
            child = current.children.get(token)
            if child is None:
                child = DirNode(token, current)
                current.children[token] = child
                logger.debug("created directory %s", join_tokens(tokens[: depth + 1]))
            elif isinstance(child, FileNode):
                raise IMFSNotADirectoryError(join_tokens(tokens[: depth + 1]))
            current = child
        return current

    def _create_file(self, tokens: Tokens, data: bytes, overwrite: bool) -> FileNode:
        if not tokens:
            raise IMFSInvalidPathError("/", "root cannot be a file")
        path = join_tokens(tokens)
        parent = self._create_dirs(tokens[:-1])
        name = tokens[-1]
        existing = parent.children.get(name)
        if existing is None:
            node = FileNode(name, parent, data)
            parent.children[name] = node
            logger.debug("created file %s (%d bytes)", path, len(data))
            return node
        if isinstance(existing, DirNode):
            raise IMFSExistsError(path, "A directory exists at this path")
        if not overwrite:
            raise IMFSExistsError(path)
        existing.replace_content(data)
        logger.debug("overwrote file %s (%d bytes)", path, len(data))
        return existing

    def _detach(self, node: Node) -> None:
        assert self._lock.is_write_locked
        parent = node.parent
        assert parent is not None
        del parent.children[node.name]
        node.set_parent(None)
