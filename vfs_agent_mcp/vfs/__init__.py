"""In-memory virtual file system, its snapshot codec and the preview contract."""

from .errors import CorruptState, InvalidPath, NotFound, OutOfRange, PathConflict, VFSError
from .file_system import VirtualFileSystem
from .paths import normalize
from .serializer import deserialize, dumps, loads, serialize

__all__ = [
    "CorruptState",
    "InvalidPath",
    "NotFound",
    "OutOfRange",
    "PathConflict",
    "VFSError",
    "VirtualFileSystem",
    "deserialize",
    "dumps",
    "loads",
    "normalize",
    "serialize",
]
