"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["inmemfs._pytest_plugin"]

This makes the ``imfs`` and ``namespace_tree`` fixtures available::

    def test_something(imfs):
        imfs.write_bytes("/a.txt", b"hello")
        assert imfs.read_bytes("/a.txt") == b"hello"
"""

import pytest

from ._fs import MemoryFileSystem
from ._tree import NamespaceTree


@pytest.fixture
def namespace_tree() -> NamespaceTree:
    """An empty :class:`NamespaceTree`, one per test (function scope)."""
    return NamespaceTree()


@pytest.fixture
def imfs(namespace_tree: NamespaceTree) -> MemoryFileSystem:
    """A :class:`MemoryFileSystem` rooted at ``/`` over ``namespace_tree``."""
    return MemoryFileSystem(tree=namespace_tree)
