# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Base class for tools operating on the shared virtual file system."""

import logging
from abc import ABC, abstractmethod
from typing import Any
from typing_extensions import override

from pydantic import BaseModel, TypeAdapter, ValidationError

from vfs_agent_mcp.tools.base import VFS_ARGUMENT, Tool, ToolCallArguments, ToolError, ToolExecResult
from vfs_agent_mcp.vfs.errors import VFSError
from vfs_agent_mcp.vfs.file_system import VirtualFileSystem

logger = logging.getLogger(__name__)


class BaseVFSTool(Tool, ABC):
    """
    Base class for VFS tools with common validation and error handling.

    Subclasses declare a ``TypeAdapter`` for their tagged command union and
    implement ``_execute_command``. Any VirtualFileSystem error, validation
    error or ``ToolError`` raised while handling a command is turned into an
    error ``ToolExecResult`` here and never propagates to the caller.
    """

    command_adapter: TypeAdapter[Any]

    def __init__(self, model_provider: str | None = None) -> None:
        super().__init__(model_provider)

    def _validate_vfs(self, arguments: ToolCallArguments) -> VirtualFileSystem:
        """
        Extract the shared VirtualFileSystem from arguments.

        Raises:
            ToolError: If no VirtualFileSystem was supplied.
        """
        vfs = arguments.get(VFS_ARGUMENT)
        if not isinstance(vfs, VirtualFileSystem):
            logger.error("VirtualFileSystem not found in arguments")
            raise ToolError("VirtualFileSystem not found in arguments. This is an internal server error.")
        return vfs

    def _parse_command(self, arguments: ToolCallArguments) -> BaseModel:
        payload = {key: value for key, value in arguments.items() if key != VFS_ARGUMENT}
        return self.command_adapter.validate_python(payload)

    @abstractmethod
    def _execute_command(self, command: BaseModel, vfs: VirtualFileSystem) -> ToolExecResult:
        """
        Execute one validated command against the tree.

        Args:
            command: The validated command model
            vfs: The shared VirtualFileSystem

        Returns:
            The result of the operation
        """
        pass

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        """
        Execute the tool with common validation and error handling.

        Args:
            arguments: The tool call arguments, including the shared tree

        Returns:
            The result of the tool execution
        """
        try:
            vfs = self._validate_vfs(arguments)
            command = self._parse_command(arguments)
            logger.debug(f"{self.get_name()}: executing {command!r}")
            return self._execute_command(command, vfs)

        except ValidationError as e:
            logger.info(f"Invalid arguments for {self.get_name()}: {e.error_count()} error(s)")
            return ToolExecResult(
                error=f"Invalid arguments for {self.get_name()}: {_format_validation_error(e)}",
                error_code=-1,
                error_type="ValidationError",
            )
        except VFSError as e:
            logger.info(f"{e.error_type} in {self.get_name()}: {e.message}")
            return ToolExecResult(error=e.message, error_code=-1, error_type=e.error_type)
        except ToolError as e:
            logger.error(f"Tool error in {self.get_name()}: {e}")
            return ToolExecResult(error=str(e), error_code=-1, error_type=e.error_type)
        except Exception as e:
            logger.error(f"Unexpected error in {self.get_name()}: {e}", exc_info=True)
            return ToolExecResult(
                error=f"Unexpected error: {str(e)}", error_code=-1, error_type=type(e).__name__
            )


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors(include_url=False):
        location = ".".join(str(part) for part in detail["loc"]) or "arguments"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)
