# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Base classes shared by every tool exposed to the model."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from vfs_agent_mcp.models.transcript import ToolCall, ToolResult
from vfs_agent_mcp.vfs.file_system import VirtualFileSystem

logger = logging.getLogger(__name__)

ToolCallArguments = dict[str, Any]

# Key under which the shared VirtualFileSystem is handed to a tool.
VFS_ARGUMENT = "_vfs"


class ToolError(Exception):
    """Raised inside a tool when a command cannot be carried out."""

    def __init__(self, message: str, error_type: str = "ToolError") -> None:
        super().__init__(message)
        self.message: str = message
        self.error_type: str = error_type


@dataclass
class ToolExecResult:
    """Intermediate result of a tool execution."""

    output: str | None = None
    error: str | None = None
    error_code: int = 0
    error_type: str | None = None


@dataclass
class ToolParameter:
    """A single parameter of a tool's input schema."""

    name: str
    type: str | list[str]
    description: str
    enum: list[str] | None = None
    items: dict[str, object] | None = None
    required: bool = False


class Tool(ABC):
    """Base class for all tools."""

    def __init__(self, model_provider: str | None = None) -> None:
        self._model_provider = model_provider

    @cached_property
    def name(self) -> str:
        return self.get_name()

    @cached_property
    def description(self) -> str:
        return self.get_description()

    @cached_property
    def parameters(self) -> list[ToolParameter]:
        return self.get_parameters()

    def get_model_provider(self) -> str | None:
        return self._model_provider

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    @abstractmethod
    def get_parameters(self) -> list[ToolParameter]:
        pass

    @abstractmethod
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        pass

    def json_definition(self) -> dict[str, object]:
        """Tool definition in the shape the model collaborator expects."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.get_input_schema(),
        }

    def get_input_schema(self) -> dict[str, object]:
        schema: dict[str, object] = {"type": "object"}
        properties: dict[str, dict[str, object]] = {}
        required: list[str] = []

        for param in self.parameters:
            param_schema: dict[str, object] = {
                "type": param.type,
                "description": param.description,
            }
            if param.enum:
                param_schema["enum"] = param.enum
            if param.items:
                param_schema["items"] = param.items
            properties[param.name] = param_schema
            if param.required:
                required.append(param.name)

        schema["properties"] = properties
        if required:
            schema["required"] = required
        return schema


class ToolExecutor:
    """
    Applies tool calls against one shared VirtualFileSystem.

    Calls are applied strictly one after another in the order given; a later
    call may rely on files created by an earlier one.
    """

    def __init__(self, tools: list[Tool], vfs: VirtualFileSystem) -> None:
        self._tools = tools
        self._vfs = vfs
        self._tool_map: dict[str, Tool] | None = None

    @property
    def vfs(self) -> VirtualFileSystem:
        return self._vfs

    def _normalize_name(self, name: str) -> str:
        return name.lower().replace("_", "")

    @property
    def tools(self) -> dict[str, Tool]:
        if self._tool_map is None:
            self._tool_map = {self._normalize_name(tool.name): tool for tool in self._tools}
        return self._tool_map

    def definitions(self) -> list[dict[str, object]]:
        return [tool.json_definition() for tool in self._tools]

    async def execute_tool_call(self, tool_call: ToolCall) -> ToolResult:
        normalized_name = self._normalize_name(tool_call.name)
        if normalized_name not in self.tools:
            return ToolResult(
                name=tool_call.name,
                success=False,
                error=f"Tool '{tool_call.name}' not found. Available tools: {[tool.name for tool in self._tools]}",
                error_type="UnknownTool",
                call_id=tool_call.call_id,
            )

        tool = self.tools[normalized_name]
        arguments = dict(tool_call.arguments)
        arguments[VFS_ARGUMENT] = self._vfs
        tool_exec_result = await tool.execute(arguments)
        return ToolResult(
            name=tool_call.name,
            success=tool_exec_result.error_code == 0,
            result=tool_exec_result.output,
            error=tool_exec_result.error,
            error_type=tool_exec_result.error_type,
            call_id=tool_call.call_id,
        )

    async def sequential_tool_call(self, tool_calls: list[ToolCall]) -> list[ToolResult]:
        results: list[ToolResult] = []
        for tool_call in tool_calls:
            logger.debug(f"Applying tool call {tool_call.call_id} ({tool_call.name})")
            results.append(await self.execute_tool_call(tool_call))
        return results
