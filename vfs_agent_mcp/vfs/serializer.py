"""
Conversion between a VirtualFileSystem and its flat persisted snapshot.

A snapshot maps absolute paths to ``{"type": ..., "content": ...}`` records,
ordered by path so that diffs are stable. ``deserialize(serialize(vfs))`` is
observably equivalent to ``vfs`` under every read operation.
"""

import json
import logging
from typing import Any, Mapping

from pydantic import ValidationError

from vfs_agent_mcp.models.file_node import SnapshotEntry
from vfs_agent_mcp.vfs import paths
from vfs_agent_mcp.vfs.errors import CorruptState, InvalidPath, VFSError
from vfs_agent_mcp.vfs.file_system import VirtualFileSystem

logger = logging.getLogger(__name__)

Snapshot = dict[str, dict[str, Any]]


def serialize(vfs: VirtualFileSystem) -> Snapshot:
    """Flatten a tree into a snapshot ordered by path."""
    return {
        path: SnapshotEntry(type=node.type, content=node.content).model_dump()
        for path, node in vfs.list_all().items()
    }


def deserialize(snapshot: Mapping[str, Any]) -> VirtualFileSystem:
    """
    Rebuild a tree from a snapshot.

    Directories implied by file paths are reconstructed even when the snapshot
    omits them. The returned instance starts at version 0.

    Raises:
        CorruptState: If an entry is malformed, a key fails normalization, or
            two entries disagree about the same path.
    """
    if not isinstance(snapshot, Mapping):
        raise CorruptState(f"Snapshot must be a mapping, got {type(snapshot).__name__}.")

    entries: dict[str, SnapshotEntry] = {}
    for raw_path, raw_entry in snapshot.items():
        try:
            path = paths.normalize(raw_path)
        except InvalidPath as e:
            raise CorruptState(f"Snapshot key {raw_path!r} is not a valid path: {e}", str(raw_path)) from e
        entry = _parse_entry(path, raw_entry)

        previous = entries.get(path)
        if previous is not None and previous != entry:
            raise CorruptState(f"Snapshot has conflicting records for {path}.", path)
        entries[path] = entry

    root = entries.get(paths.ROOT)
    if root is not None and root.type != "directory":
        raise CorruptState("Snapshot records the root as a file.", paths.ROOT)

    for path, entry in entries.items():
        for ancestor in paths.ancestors(path):
            recorded = entries.get(ancestor)
            if recorded is not None and recorded.type != "directory":
                raise CorruptState(
                    f"Snapshot records {ancestor} as a file but {path} lies below it.", ancestor
                )

    vfs = VirtualFileSystem()
    try:
        for path in sorted(entries):
            entry = entries[path]
            if entry.type == "directory":
                vfs.create_directory(path)
            else:
                vfs.create_file(path, entry.content or "")
    except VFSError as e:
        raise CorruptState(f"Snapshot could not be rebuilt: {e}", e.path) from e

    # A freshly loaded tree has not been mutated by anyone yet.
    vfs._version = 0
    logger.debug(f"Deserialized snapshot with {len(entries)} entries into {len(vfs)} nodes")
    return vfs


def dumps(vfs: VirtualFileSystem) -> str:
    """Encode a tree as the opaque JSON blob handed to storage."""
    return json.dumps(serialize(vfs))


def loads(blob: str | bytes) -> VirtualFileSystem:
    """Decode a JSON blob produced by ``dumps``."""
    try:
        snapshot = json.loads(blob)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CorruptState(f"Snapshot blob is not valid JSON: {e}") from e
    return deserialize(snapshot)


def _parse_entry(path: str, raw_entry: Any) -> SnapshotEntry:
    try:
        entry = SnapshotEntry.model_validate(raw_entry)
    except ValidationError as e:
        raise CorruptState(f"Snapshot entry for {path} is malformed: {e}", path) from e
    if entry.type == "directory" and entry.content is not None:
        raise CorruptState(f"Snapshot entry for directory {path} carries content.", path)
    if entry.type == "file" and entry.content is None:
        raise CorruptState(f"Snapshot entry for file {path} has no content.", path)
    return entry
