import errno


class IMFSError(OSError):
    """Base class for all namespace errors. Subclass of OSError.

    Instances carry ``errno``, ``strerror`` and ``filename`` (the offending
    absolute path) exactly like the builtin OS errors.
    """


class IMFSInvalidPathError(IMFSError, ValueError):
    """Raised for a null, relative or malformed path."""
    def __init__(self, path: object, reason: str) -> None:
        self.reason = reason
        super().__init__(errno.EINVAL, f"Invalid path ({reason})", path)


class IMFSNotFoundError(IMFSError, FileNotFoundError):
    """Raised when a path does not resolve to any node."""
    def __init__(self, path: str, message: str = "No such file or directory") -> None:
        super().__init__(errno.ENOENT, message, path)


class IMFSNotADirectoryError(IMFSError, NotADirectoryError):
    def __init__(self, path: str, message: str = "Not a directory") -> None:
        super().__init__(errno.ENOTDIR, message, path)


class IMFSIsADirectoryError(IMFSError, IsADirectoryError):
    def __init__(self, path: str, message: str = "Is a directory") -> None:
        super().__init__(errno.EISDIR, message, path)


class IMFSExistsError(IMFSError, FileExistsError):
    """Raised when a create or rename target is already present."""
    def __init__(self, path: str, message: str = "File exists") -> None:
        super().__init__(errno.EEXIST, message, path)


class IMFSDirectoryNotEmptyError(IMFSError):
    """Raised on non-recursive removal of a populated directory."""
    def __init__(self, path: str, message: str = "Directory not empty") -> None:
        super().__init__(errno.ENOTEMPTY, message, path)
