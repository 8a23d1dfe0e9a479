from __future__ import annotations

import io
import warnings
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._tree import NamespaceTree


class MemoryFileHandle:
    """Binary handle returned by :meth:`MemoryFileSystem.open`.

    ``rb`` handles read from a snapshot of the file taken at open time, so a
    concurrent overwrite never changes what an in-flight read sees.  ``wb``
    and ``xb`` handles buffer everything locally and commit the whole buffer
    with a single ``create_file`` call on :meth:`close`; nothing is visible
    in the tree before that.
    """

    def __init__(
        self,
        tree: NamespaceTree,
        tokens: Sequence[str],
        path: str,
        mode: str,
        data: bytes = b"",
    ) -> None:
        self._tree = tree
        self._tokens = tuple(tokens)
        self._path = path
        self._mode = mode
        self._data: bytes = data
        self._buffer = bytearray()
        self._cursor: int = 0
        self._is_closed: bool = False

    @property
    def name(self) -> str:
        return self._path

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def closed(self) -> bool:
        return self._is_closed

    def _assert_readable(self) -> None:
        if self._mode != "rb":
            raise io.UnsupportedOperation(f"not readable in mode '{self._mode}'")

    def _assert_writable(self) -> None:
        if self._mode == "rb":
            raise io.UnsupportedOperation(f"not writable in mode '{self._mode}'")

    def _assert_open(self) -> None:
        if self._is_closed:
            raise ValueError("I/O operation on closed file.")

    def read(self, size: int = -1) -> bytes:
        self._assert_open()
        self._assert_readable()
        total = len(self._data)
        if self._cursor >= total:
            return b""
        end = total if size < 0 else min(total, self._cursor + size)
        data = self._data[self._cursor:end]
        self._cursor = end
        return data

    def read_at(self, position: int, size: int) -> bytes:
        """Positional read; the cursor is left where it was."""
        self._assert_open()
        self._assert_readable()
        if position < 0:
            raise ValueError("position must be >= 0")
        if size < 0:
            return self._data[position:]
        return self._data[position: position + size]

    def write(self, data: bytes) -> int:
        self._assert_open()
        self._assert_writable()
        chunk = memoryview(data)
        self._buffer.extend(chunk)
        self._cursor = len(self._buffer)
        return chunk.nbytes

    def seek(self, offset: int, whence: int = 0) -> int:
        self._assert_open()
        self._assert_readable()
        if whence == 0:
            if offset < 0:
                raise ValueError("seek offset must be >= 0 for SEEK_SET")
            new_pos = offset
        elif whence == 1:
            new_pos = self._cursor + offset
        elif whence == 2:
            new_pos = len(self._data) + offset
        else:
            raise ValueError(f"Invalid whence value: {whence}. Must be 0, 1, or 2.")
        if new_pos < 0:
            raise ValueError(f"Resulting cursor position {new_pos} is negative.")
        self._cursor = new_pos
        return self._cursor

    def tell(self) -> int:
        self._assert_open()
        return self._cursor

    def flush(self) -> None:
        self._assert_open()
        return None

    def readable(self) -> bool:
        self._assert_open()
        return self._mode == "rb"

    def writable(self) -> bool:
        self._assert_open()
        return self._mode != "rb"

    def seekable(self) -> bool:
        self._assert_open()
        return self._mode == "rb"

    def close(self) -> None:
        if self._is_closed:
            return
        self._is_closed = True
        if self._mode == "rb":
            self._data = b""
            return
        data = bytes(self._buffer)
        self._buffer = bytearray()
        self._tree.create_file(self._tokens, data, overwrite=self._mode == "wb")

    def __enter__(self) -> MemoryFileHandle:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __del__(self) -> None:
        if not self._is_closed:
            discarded = "" if self._mode == "rb" else "buffered writes were discarded. "
            warnings.warn(
                f"MemoryFileHandle for '{self._path}' was not closed; "
                f"{discarded}"
                "Always use 'with fs.open(...) as f:' to ensure cleanup.",
                ResourceWarning,
                stacklevel=1,
            )
            self._is_closed = True
