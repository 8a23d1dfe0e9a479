import posixpath
from collections.abc import Sequence

from ._exceptions import IMFSInvalidPathError


def tokenize(path: str | None) -> tuple[str, ...]:
    """Split an absolute path into its components.

    ``"/"`` tokenizes to ``()``.  Relative paths, empty components (``"//"``,
    a trailing ``"/"``) and ``"."``/``".."`` components are rejected; turning
    such input into an absolute path is the caller's job (see
    :func:`normalize_path`).
    """
    if path is None:
        raise IMFSInvalidPathError(path, "path is None")
    if not isinstance(path, str):
        raise IMFSInvalidPathError(path, f"expected str, got {type(path).__name__}")
    if not path.startswith("/"):
        raise IMFSInvalidPathError(path, "not absolute")
    if path == "/":
        return ()
    parts = path[1:].split("/")
    for part in parts:
        if not part:
            raise IMFSInvalidPathError(path, "empty path component")
        if part in (".", ".."):
            raise IMFSInvalidPathError(path, f"relative component {part!r}")
    return tuple(parts)


def join_tokens(tokens: Sequence[str]) -> str:
    return "/" + "/".join(tokens)


def normalize_path(path: str, cwd: str = "/") -> str:
    """Turn adaptor input into a canonical absolute path.

    Relative paths are resolved against *cwd*.  ``..`` may not climb above
    the root.
    """
    converted = path.replace("\\", "/")
    if not converted:
        raise IMFSInvalidPathError(path, "empty path")
    if not converted.startswith("/"):
        converted = cwd.rstrip("/") + "/" + converted

    # Walk from root (depth 0) so traversal is caught before normpath hides it
    depth = 0
    for part in converted.split("/"):
        if part == "..":
            depth -= 1
            if depth < 0:
                raise IMFSInvalidPathError(path, "traversal above root")
        elif part and part != ".":
            depth += 1

    normalized = posixpath.normpath(converted)
    # normpath keeps a leading "//" as-is (POSIX implementation-defined)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized
