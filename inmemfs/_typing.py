from enum import Enum
from typing import NamedTuple, TypedDict


class NodeKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"


class IMFSEntry(NamedTuple):
    """One row of a directory listing. Immutable snapshot, never a live view."""

    name: str
    kind: NodeKind
    size: int
    modified_at: float

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


class IMFSStatResult(TypedDict):
    size: int
    created_at: float
    modified_at: float
    is_dir: bool


class IMFSFileStatus(TypedDict):
    path: str
    size: int
    modified_at: float
    is_dir: bool


class IMFSStats(TypedDict):
    used_bytes: int
    file_count: int
    dir_count: int
