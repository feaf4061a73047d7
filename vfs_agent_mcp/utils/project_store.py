import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from vfs_agent_mcp.models.transcript import TurnRecord

logger = logging.getLogger(__name__)


class ProjectStore(ABC):
    """
    Storage contract for projects: an opaque snapshot plus its transcript.

    A run must hold ``lock(project_id)`` from loading the snapshot until the
    new one is written, so no two runs mutate one project at the same time.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def lock(self, project_id: str) -> asyncio.Lock:
        if project_id not in self._locks:
            self._locks[project_id] = asyncio.Lock()
        return self._locks[project_id]

    @abstractmethod
    def get(self, project_id: str) -> dict[str, Any] | None:
        """Return the stored snapshot, or None for a new project."""

    @abstractmethod
    def get_transcript(self, project_id: str) -> list[TurnRecord]:
        pass

    @abstractmethod
    def put(self, project_id: str, snapshot: dict[str, Any], transcript: list[TurnRecord]) -> None:
        pass


class InMemoryProjectStore(ProjectStore):
    """Manages project blobs in process memory."""

    def __init__(self) -> None:
        super().__init__()
        # Simple dict as an in-process storage.
        # For a real application, this could be Redis or another persistent store.
        self._storage: dict[str, tuple[str, str]] = {}

    def get(self, project_id: str) -> dict[str, Any] | None:
        stored = self._storage.get(project_id)
        if stored is None:
            return None
        return json.loads(stored[0])

    def get_transcript(self, project_id: str) -> list[TurnRecord]:
        stored = self._storage.get(project_id)
        if stored is None:
            return []
        return [TurnRecord.model_validate(record) for record in json.loads(stored[1])]

    def put(self, project_id: str, snapshot: dict[str, Any], transcript: list[TurnRecord]) -> None:
        snapshot_blob = json.dumps(snapshot)
        transcript_blob = json.dumps([record.model_dump(mode="json") for record in transcript])
        self._storage[project_id] = (snapshot_blob, transcript_blob)
        logger.debug(f"Stored project {project_id}: {len(snapshot)} entries, {len(transcript)} turns")
