import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from vfs_agent_mcp.agent.loop import AgentLoop, LoopEvent, LoopResult, LoopState
from vfs_agent_mcp.agent.provider import ModelProvider, resolve_step_budget
from vfs_agent_mcp.models.transcript import TurnRecord
from vfs_agent_mcp.prompts import get_generation_prompt
from vfs_agent_mcp.tools import default_tools
from vfs_agent_mcp.tools.base import Tool, ToolExecutor
from vfs_agent_mcp.utils.config import ServiceConfig
from vfs_agent_mcp.utils.project_store import ProjectStore
from vfs_agent_mcp.vfs.file_system import VirtualFileSystem
from vfs_agent_mcp.vfs.serializer import deserialize, serialize

logger = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    """What the caller gets back from one run."""

    status: Literal["completed", "cancelled", "aborted"]
    loop: LoopResult
    snapshot: dict[str, Any] | None = None  # None when nothing was persisted
    transcript: list[TurnRecord] = field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return self.status == "aborted"


def load_project(store: ProjectStore, project_id: str) -> VirtualFileSystem:
    """
    Rebuild the tree of a project, or an empty one for a new project.

    Raises:
        CorruptState: If the stored snapshot cannot be deserialized.
    """
    snapshot = store.get(project_id)
    if snapshot is None:
        logger.info(f"Project {project_id} has no snapshot yet; starting from an empty tree")
        return VirtualFileSystem()
    return deserialize(snapshot)


async def run_project(
    project_id: str,
    prompt: str,
    *,
    store: ProjectStore,
    provider: ModelProvider,
    config: ServiceConfig,
    tools: list[Tool] | None = None,
    cancel_event: asyncio.Event | None = None,
    on_event: Callable[[LoopEvent], None] | None = None,
) -> RunOutcome:
    """
    Run the agent once against a project as a single transaction.

    The project lock is held from loading the snapshot until the new one is
    written. A completed or cancelled run persists the tree as it stands after
    the last finished round; a run whose model became unreachable persists
    nothing and leaves the previous snapshot in place.

    Raises:
        CorruptState: If the stored snapshot is corrupt. No run is started.
    """
    async with store.lock(project_id):
        vfs = load_project(store, project_id)
        transcript = store.get_transcript(project_id)
        transcript.append(TurnRecord(role="user", content=prompt))

        executor = ToolExecutor(tools if tools is not None else default_tools(), vfs)
        loop = AgentLoop(
            provider,
            executor,
            transcript,
            max_steps=resolve_step_budget(provider, config),
            system_prompt=get_generation_prompt(),
            cancel_event=cancel_event,
        )
        logger.info(f"Starting run for project {project_id} with provider {provider.get_name()}")
        result = await loop.run(on_event)

        if result.state is LoopState.FAILED:
            logger.warning(f"Run for project {project_id} aborted: {result.error}")
            return RunOutcome(status="aborted", loop=result, transcript=transcript)

        snapshot = serialize(vfs)
        store.put(project_id, snapshot, transcript)
        status = "cancelled" if result.state is LoopState.CANCELLED else "completed"
        logger.info(f"Run for project {project_id} {status}; tree version {vfs.version}")
        return RunOutcome(status=status, loop=result, snapshot=snapshot, transcript=transcript)
