import logging
from typing_extensions import override

from pydantic import BaseModel

from vfs_agent_mcp.tools.base import ToolError, ToolExecResult, ToolParameter
from vfs_agent_mcp.tools.base_vfs_tool import BaseVFSTool
from vfs_agent_mcp.tools.schemas import (
    DeleteCommand,
    FileManagerSubCommands,
    RenameCommand,
    manager_command_adapter,
)
from vfs_agent_mcp.vfs import paths
from vfs_agent_mcp.vfs.file_system import VirtualFileSystem

logger = logging.getLogger(__name__)


class FileManagerTool(BaseVFSTool):
    """
    Tool for moving and removing files and directories of the virtual project.
    Content edits go through the text editor tool; this one only changes the
    shape of the tree.
    """

    command_adapter = manager_command_adapter

    def __init__(self, model_provider: str | None = None) -> None:
        super().__init__(model_provider)

    @override
    def get_name(self) -> str:
        return "file_manager"

    @override
    def get_description(self) -> str:
        return """Rename, move or delete files and directories of the project.
* `rename` moves `path` to `new_path`. Directories are moved together with everything inside them. The rename fails, without changing anything, if `new_path` or any path it would produce already exists.
* `delete` removes `path`. Deleting a directory removes everything inside it. The root directory cannot be deleted."""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="command",
                type="string",
                description=f"The command to run. Allowed options are: {', '.join(FileManagerSubCommands)}.",
                required=True,
                enum=FileManagerSubCommands,
            ),
            ToolParameter(
                name="path",
                type="string",
                description="Absolute path of the file or directory to rename or delete.",
                required=True,
            ),
            ToolParameter(
                name="new_path",
                type="string",
                description="Required parameter of `rename` command: the destination path.",
            ),
        ]

    @override
    def _execute_command(self, command: BaseModel, vfs: VirtualFileSystem) -> ToolExecResult:
        match command:
            case RenameCommand():
                return self._rename_handler(vfs, command)
            case DeleteCommand():
                return self._delete_handler(vfs, command)
            case _:
                raise ToolError(f"Unknown command: {command!r}")

    def _rename_handler(self, vfs: VirtualFileSystem, command: RenameCommand) -> ToolExecResult:
        source = paths.normalize(command.path)
        node = vfs.rename_node(source, command.new_path)
        if node.is_directory:
            return ToolExecResult(output=f"Renamed directory {source} to {node.path}.")
        return ToolExecResult(output=f"Renamed {source} to {node.path}.")

    def _delete_handler(self, vfs: VirtualFileSystem, command: DeleteCommand) -> ToolExecResult:
        removed = vfs.delete_node(command.path)
        logger.debug(f"Removed paths: {removed}")
        if len(removed) == 1:
            return ToolExecResult(output=f"Deleted {removed[0]}.")
        return ToolExecResult(output=f"Deleted {removed[0]} and {len(removed) - 1} item(s) inside it.")
