from typing import Literal

from pydantic import BaseModel, Field

NodeType = Literal["file", "directory"]


class FileNode(BaseModel):
    """A single file or directory entry of the virtual tree."""

    path: str
    type: NodeType
    content: str | None = None
    children: set[str] = Field(default_factory=set)  # immediate child paths, directories only

    @property
    def name(self) -> str:
        if self.path == "/":
            return ""
        return self.path.rsplit("/", 1)[1]

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def is_directory(self) -> bool:
        return self.type == "directory"


class SnapshotEntry(BaseModel):
    """One persisted record of a snapshot, keyed by its path in the snapshot map."""

    type: NodeType
    content: str | None = None
