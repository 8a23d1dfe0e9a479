import logging

from ._exceptions import (
    IMFSDirectoryNotEmptyError,
    IMFSError,
    IMFSExistsError,
    IMFSInvalidPathError,
    IMFSIsADirectoryError,
    IMFSNotADirectoryError,
    IMFSNotFoundError,
)
from ._fs import MemoryFileSystem
from ._handle import MemoryFileHandle
from ._node import DirNode, FileNode, Node
from ._path import join_tokens, normalize_path, tokenize
from ._tree import NamespaceTree
from ._typing import IMFSEntry, IMFSFileStatus, IMFSStatResult, IMFSStats, NodeKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "MemoryFileSystem",
    "MemoryFileHandle",
    "NamespaceTree",
    "DirNode",
    "FileNode",
    "Node",
    "NodeKind",
    "IMFSEntry",
    "IMFSFileStatus",
    "IMFSStatResult",
    "IMFSStats",
    "IMFSError",
    "IMFSInvalidPathError",
    "IMFSNotFoundError",
    "IMFSNotADirectoryError",
    "IMFSIsADirectoryError",
    "IMFSExistsError",
    "IMFSDirectoryNotEmptyError",
    "tokenize",
    "join_tokens",
    "normalize_path",
]
__version__ = "0.1.0"
