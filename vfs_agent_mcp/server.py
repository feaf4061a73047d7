"""
MCP server definition for the VFS agent.
"""

import logging
from typing import Any, List, Optional

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from vfs_agent_mcp.agent.runner import load_project, run_project
from vfs_agent_mcp.prompts import get_generation_prompt
from vfs_agent_mcp.tools.base import VFS_ARGUMENT, Tool
from vfs_agent_mcp.utils.config import ServiceConfig
from vfs_agent_mcp.utils.dependencies import (
    get_base_config,
    get_file_editor_tool_provider,
    get_file_manager_tool_provider,
    get_model_provider,
    get_project_store,
)
from vfs_agent_mcp.vfs.errors import VFSError
from vfs_agent_mcp.vfs.preview import build_preview
from vfs_agent_mcp.vfs.serializer import serialize


# Get a module-level logger
logger = logging.getLogger(__name__)


class CustomFastMCP(FastMCP):
    """Custom FastMCP server with CORS middleware."""

    def _add_cors_middleware(self, app: Starlette) -> Starlette:
        """A helper to add CORS middleware to a Starlette app."""
        app.user_middleware.insert(
            0,
            Middleware(
                CORSMiddleware,
                allow_origin_regex=".*",  # Allow any origin
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        )
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        """Overrides the default sse_app to inject CORS middleware."""
        app = super().sse_app(mount_path)
        return self._add_cors_middleware(app)

    def streamable_http_app(self) -> Starlette:
        """Overrides the default streamable_http_app to inject CORS middleware."""
        app = super().streamable_http_app()
        return self._add_cors_middleware(app)


def build_server(config: ServiceConfig) -> CustomFastMCP:
    """Build and configure the FastMCP server instance.

    Args:
        config: The server's service configuration.

    Returns:
        A configured CustomFastMCP instance.
    """
    logger.info(
        "Initializing FastMCP server",
        extra={"host": config.MCP_HOST, "port": config.MCP_PORT},
    )
    return CustomFastMCP(
        "vfs-agent-mcp",
        host=config.MCP_HOST,
        port=config.MCP_PORT,
    )

# Get the base configuration for server initialization.
# This is also imported by main.py to run the server.
server_config = get_base_config()
mcp_app = build_server(server_config)


async def apply_tool(project_id: str, tool: Tool, args: dict[str, Any]) -> dict[str, Any]:
    """
    Apply one tool call to a project as its own load/mutate/save transaction.

    The snapshot is only written back when the call changed the tree.
    """
    # Filter out None values so we don't pass them to the tool
    args = {k: v for k, v in args.items() if v is not None}
    store = get_project_store()
    async with store.lock(project_id):
        vfs = load_project(store, project_id)
        version = vfs.version
        result = await tool.execute({**args, VFS_ARGUMENT: vfs})
        if vfs.version != version:
            store.put(project_id, serialize(vfs), store.get_transcript(project_id))

    if result.error:
        return {
            "status": "error",
            "error": result.error,
            "error_type": result.error_type,
            "exit_code": result.error_code,
        }
    return {"status": "success", "result": result.output, "exit_code": result.error_code}


# --- Prompt Handlers ---
@mcp_app.prompt(title="Agent System Prompt for Component Generation")
def get_system_prompt() -> str:
    """Provides the main system prompt for the agent."""
    return get_generation_prompt()

# --- Tool Definitions ---

@mcp_app.tool(name="file_editor")
async def file_editor_tool(
    context: Context,
    project_id: str,
    command: str,
    path: str,
    file_text: Optional[str] = None,
    old_str: Optional[str] = None,
    new_str: Optional[str] = None,
    insert_line: Optional[int] = None,
    view_range: Optional[List[int]] = None,
) -> dict[str, Any]:
    """
    View, create and edit files of a project (view, create, str_replace, insert).

    Args:
        project_id: The project whose file tree is edited.
        command: The type of operation. Can be 'view', 'create', 'str_replace', or 'insert'.
        path: The absolute path to the file or directory.
        file_text: The content for a 'create' operation.
        old_str: The string to search for in a 'str_replace' operation. Must be unique.
        new_str: The replacement string for 'str_replace' or the content for 'insert'.
        insert_line: The 0-indexed line boundary for an 'insert' operation.
        view_range: The line range to view (e.g., [10, 25]).

    Returns:
        A dictionary containing the result of the operation.
    """
    logger.info(f"Executing file_editor command '{command}' on path '{path}' of project '{project_id}'")
    try:
        args = {
            "command": command,
            "path": path,
            "file_text": file_text,
            "old_str": old_str,
            "new_str": new_str,
            "insert_line": insert_line,
            "view_range": view_range,
        }
        return await apply_tool(project_id, get_file_editor_tool_provider(), args)

    except VFSError as e:
        logger.error(f"Project {project_id} could not be loaded: {e}")
        return {"status": "error", "error": str(e), "error_type": e.error_type, "exit_code": 1}


@mcp_app.tool(name="file_manager")
async def file_manager_tool(
    context: Context,
    project_id: str,
    command: str,
    path: str,
    new_path: Optional[str] = None,
) -> dict[str, Any]:
    """
    Rename or delete files and directories of a project.

    Args:
        project_id: The project whose file tree is changed.
        command: The operation. Can be 'rename' or 'delete'.
        path: The absolute path of the file or directory.
        new_path: The destination path for 'rename'.

    Returns:
        A dictionary containing the result of the operation.
    """
    logger.info(f"Executing file_manager command '{command}' on path '{path}' of project '{project_id}'")
    try:
        args = {"command": command, "path": path, "new_path": new_path}
        return await apply_tool(project_id, get_file_manager_tool_provider(), args)

    except VFSError as e:
        logger.error(f"Project {project_id} could not be loaded: {e}")
        return {"status": "error", "error": str(e), "error_type": e.error_type, "exit_code": 1}


@mcp_app.tool()
async def project_snapshot(context: Context, project_id: str) -> dict[str, Any]:
    """
    Returns the persisted snapshot of a project.

    Args:
        project_id: The project to read.

    Returns:
        A dictionary with the path-ordered snapshot, empty for an unknown project.
    """
    snapshot = get_project_store().get(project_id)
    return {"status": "success", "project_id": project_id, "snapshot": snapshot or {}}


@mcp_app.tool()
async def project_preview(context: Context, project_id: str) -> dict[str, Any]:
    """
    Returns the files of a project together with its detected entry point.

    Args:
        project_id: The project to preview.

    Returns:
        A dictionary with a path->content map of files and the entry point,
        or null for the entry point when none of the candidates exists.
    """
    try:
        store = get_project_store()
        async with store.lock(project_id):
            vfs = load_project(store, project_id)
        bundle = build_preview(vfs)
        return {"status": "success", **bundle.model_dump()}

    except VFSError as e:
        logger.error(f"Project {project_id} could not be loaded: {e}")
        return {"status": "error", "error": str(e), "error_type": e.error_type, "exit_code": 1}


@mcp_app.tool()
async def generate(context: Context, project_id: str, prompt: str) -> dict[str, Any]:
    """
    Runs the code-generation agent on a project.

    Args:
        project_id: The project to work on. A new project starts from an empty tree.
        prompt: What the user wants built or changed.

    Returns:
        A dictionary with the run status, the reason it stopped and the new snapshot.
    """
    logger.info(f"Running generation for project '{project_id}'")
    try:
        outcome = await run_project(
            project_id,
            prompt,
            store=get_project_store(),
            provider=get_model_provider(),
            config=server_config,
        )
        return {
            "status": outcome.status,
            "reason": outcome.loop.reason.value,
            "steps": outcome.loop.steps,
            "error": outcome.loop.error,
            "snapshot": outcome.snapshot,
            "messages": [record.content for record in outcome.loop.new_records if record.content],
        }

    except VFSError as e:
        logger.error(f"Project {project_id} could not be loaded: {e}")
        return {"status": "error", "error": str(e), "error_type": e.error_type, "exit_code": 1}
