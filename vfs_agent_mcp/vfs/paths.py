"""Path normalization for the virtual file system.

All nodes are keyed by one canonical absolute spelling, so that ``a/b``,
``/a//b/`` and ``/a/./c/../b`` land on the same node.
"""

from vfs_agent_mcp.vfs.errors import InvalidPath

SEPARATOR = "/"
ROOT = "/"


def normalize(raw: str) -> str:
    """
    Canonicalize a raw path string into an absolute path.

    Repeated separators are collapsed, ``.`` and ``..`` segments are resolved,
    trailing separators are stripped and a leading separator is forced.

    Args:
        raw: The path as provided by the caller.

    Returns:
        The normalized absolute path.

    Raises:
        InvalidPath: If the path is empty, not a string, contains a NUL
            character, or resolves above the root.
    """
    if not isinstance(raw, str):
        raise InvalidPath(f"Path must be a string, got {type(raw).__name__}.")
    if not raw.strip():
        raise InvalidPath("Path must not be empty.", raw)
    if "\x00" in raw:
        raise InvalidPath("Path must not contain NUL characters.", raw)

    segments: list[str] = []
    for segment in raw.split(SEPARATOR):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                raise InvalidPath(f"Path '{raw}' escapes the root directory.", raw)
            segments.pop()
            continue
        segments.append(segment)

    return SEPARATOR + SEPARATOR.join(segments)


def is_root(path: str) -> bool:
    return path == ROOT


def parent_of(path: str) -> str:
    """Parent of an already normalized path. The root is its own parent."""
    if is_root(path):
        return ROOT
    head = path.rsplit(SEPARATOR, 1)[0]
    return head or ROOT


def basename(path: str) -> str:
    if is_root(path):
        return ""
    return path.rsplit(SEPARATOR, 1)[1]


def join(parent: str, name: str) -> str:
    if is_root(parent):
        return SEPARATOR + name
    return parent + SEPARATOR + name


def is_ancestor(ancestor: str, path: str) -> bool:
    """True if ``ancestor`` is a proper prefix directory of ``path``."""
    if ancestor == path:
        return False
    if is_root(ancestor):
        return True
    return path.startswith(ancestor + SEPARATOR)


def ancestors(path: str) -> list[str]:
    """Proper ancestors of a normalized path, root first."""
    result: list[str] = []
    current = path
    while not is_root(current):
        current = parent_of(current)
        result.append(current)
    result.reverse()
    return result
