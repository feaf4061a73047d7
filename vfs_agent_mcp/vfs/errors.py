"""Error taxonomy for the virtual file system."""


class VFSError(Exception):
    """Base class for every error raised by the virtual file system."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    @property
    def error_type(self) -> str:
        return type(self).__name__


class InvalidPath(VFSError):
    """The path cannot be normalized or refers to a protected location."""


class PathConflict(VFSError):
    """The target path is occupied by a node of an incompatible type."""


class NotFound(VFSError):
    """The node does not exist, or a replacement anchor is not unique."""


class OutOfRange(VFSError):
    """A line number lies outside of the file."""


class CorruptState(VFSError):
    """A stored snapshot cannot be turned back into a tree."""
