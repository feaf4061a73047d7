# Copyright (c) 2023 Anthropic
# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates.
# SPDX-License-Identifier: MIT
#
# This file has been modified by ByteDance Ltd. and/or its affiliates. on 13 June 2025
#
# Original file was released under MIT License, with the full license text
# available at https://github.com/anthropics/anthropic-quickstarts/blob/main/LICENSE
#
# This modified file is released under the same license.

import logging
from typing_extensions import override

from pydantic import BaseModel

from vfs_agent_mcp.tools.base import ToolError, ToolExecResult, ToolParameter
from vfs_agent_mcp.tools.base_vfs_tool import BaseVFSTool
from vfs_agent_mcp.tools.schemas import (
    CreateCommand,
    EditToolSubCommands,
    InsertCommand,
    StrReplaceCommand,
    ViewCommand,
    editor_command_adapter,
)
from vfs_agent_mcp.tools.utils.constants import CREATE_PREVIEW_CHARS, SNIPPET_LINES
from vfs_agent_mcp.tools.utils.formatting_utils import format_file_list, make_numbered_output
from vfs_agent_mcp.vfs import paths
from vfs_agent_mcp.vfs.errors import OutOfRange
from vfs_agent_mcp.vfs.file_system import VirtualFileSystem

# Настройка логирования
logger = logging.getLogger(__name__)


class TextEditorTool(BaseVFSTool):
    """Tool for viewing, creating and editing files of the virtual project."""

    command_adapter = editor_command_adapter

    def __init__(self, model_provider: str | None = None) -> None:
        super().__init__(model_provider)

    @override
    def get_name(self) -> str:
        return "str_replace_based_edit_tool"

    @override
    def get_description(self) -> str:
        return """Custom editing tool for viewing, creating and editing files of the project
* The project lives in a virtual file system rooted at `/`; all paths are absolute, e.g. '/components/Button.jsx'
* If `path` is a file, `view` displays the result of applying `cat -n`. If `path` is a directory, `view` lists its immediate children
* The `create` command writes the whole file. If the file already exists it is overwritten; missing parent directories are created
* If a `command` generates a long output, it will be truncated and marked with `<response clipped>`

Notes for using the `str_replace` command:
* The `old_str` parameter should match EXACTLY one or more consecutive lines from the original file. Be mindful of whitespaces!
* If the `old_str` parameter is not unique in the file, the replacement will not be performed. Make sure to include enough context in `old_str` to make it unique
* The `new_str` parameter should contain the edited lines that should replace the `old_str`
"""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        """Get the parameters for the str_replace_based_edit_tool."""
        return [
            ToolParameter(
                name="command",
                type="string",
                description=f"The commands to run. Allowed options are: {', '.join(EditToolSubCommands)}.",
                required=True,
                enum=EditToolSubCommands,
            ),
            ToolParameter(
                name="file_text",
                type="string",
                description="Required parameter of `create` command, with the content of the file to be created.",
            ),
            ToolParameter(
                name="insert_line",
                type="integer",
                description="Required parameter of `insert` command. The `new_str` is inserted as a new line at this 0-indexed line boundary: 0 inserts before the first line.",
            ),
            ToolParameter(
                name="new_str",
                type="string",
                description="Optional parameter of `str_replace` command containing the new string (if not given, the matched string is removed). Required parameter of `insert` command containing the string to insert.",
            ),
            ToolParameter(
                name="old_str",
                type="string",
                description="Required parameter of `str_replace` command containing the string in `path` to replace.",
            ),
            ToolParameter(
                name="path",
                type="string",
                description="Absolute path to file or directory, e.g. '/App.jsx'.",
                required=True,
            ),
            ToolParameter(
                name="view_range",
                type="array",
                description="Optional parameter of `view` command when `path` points to a file. If none is given, the full file is shown. If provided, the file will be shown in the indicated line number range, e.g. [11, 12] will show lines 11 and 12. Indexing at 1 to start. Setting `[start_line, -1]` shows all lines from `start_line` to the end of the file.",
                items={"type": "integer"},
            ),
        ]

    @override
    def _execute_command(self, command: BaseModel, vfs: VirtualFileSystem) -> ToolExecResult:
        """Execute the text editor operation."""
        match command:
            case ViewCommand():
                return self._view(vfs, command)
            case CreateCommand():
                return self._create(vfs, command)
            case StrReplaceCommand():
                return self._str_replace(vfs, command)
            case InsertCommand():
                return self._insert(vfs, command)
            case _:
                logger.error(f"Unrecognized command: {command!r}")
                raise ToolError(
                    f"Unrecognized command. The allowed commands for the {self.get_name()} tool are: {', '.join(EditToolSubCommands)}"
                )

    def _view(self, vfs: VirtualFileSystem, command: ViewCommand) -> ToolExecResult:
        """Implement the view command"""
        path = paths.normalize(command.path)
        if vfs.is_directory(path):
            if command.view_range:
                raise ToolError(
                    "The `view_range` parameter is not allowed when `path` points to a directory.",
                    error_type="ValidationError",
                )
            return ToolExecResult(output=format_file_list(path, vfs.list(path)))

        file_content = vfs.read_file(path)
        init_line = 1
        if command.view_range:
            file_lines = file_content.split("\n")
            n_lines_file = len(file_lines)
            init_line, final_line = command.view_range
            if init_line < 1 or init_line > n_lines_file:
                raise OutOfRange(
                    f"Invalid `view_range`: {command.view_range}. Its first element `{init_line}` should be within the range of lines of the file: {[1, n_lines_file]}",
                    path,
                )
            if final_line > n_lines_file:
                raise OutOfRange(
                    f"Invalid `view_range`: {command.view_range}. Its second element `{final_line}` should be smaller than the number of lines in the file: `{n_lines_file}`",
                    path,
                )
            if final_line != -1 and final_line < init_line:
                raise OutOfRange(
                    f"Invalid `view_range`: {command.view_range}. Its second element `{final_line}` should be larger or equal than its first `{init_line}`",
                    path,
                )

            if final_line == -1:
                file_content = "\n".join(file_lines[init_line - 1 :])
            else:
                file_content = "\n".join(file_lines[init_line - 1 : final_line])

        return ToolExecResult(output=make_numbered_output(file_content, path, init_line=init_line))

    def _create(self, vfs: VirtualFileSystem, command: CreateCommand) -> ToolExecResult:
        existed = vfs.is_file(command.path)
        node = vfs.create_file(command.path, command.file_text)
        logger.debug(f"File {'overwritten' if existed else 'created'} at {node.path}")

        output_msg = f"File {'overwritten' if existed else 'created'} successfully at: {node.path}"
        file_content = node.content or ""
        if len(file_content) > CREATE_PREVIEW_CHARS:
            file_content = file_content[:CREATE_PREVIEW_CHARS] + "\n... [truncated]"
        output_msg += f"\n\nFile content:\n```\n{file_content}\n```"
        return ToolExecResult(output=output_msg)

    def _str_replace(self, vfs: VirtualFileSystem, command: StrReplaceCommand) -> ToolExecResult:
        """Implement the str_replace command, which replaces old_str with new_str in the file content"""
        path = paths.normalize(command.path)
        new_str = command.new_str or ""
        file_content = vfs.read_file(path)
        new_file_content = vfs.replace_in_file(path, command.old_str, new_str)

        # Create a snippet of the edited section
        replacement_line = file_content.split(command.old_str)[0].count("\n")
        start_line = max(0, replacement_line - SNIPPET_LINES)
        end_line = replacement_line + SNIPPET_LINES + new_str.count("\n")
        snippet = "\n".join(new_file_content.split("\n")[start_line : end_line + 1])

        success_msg = f"The file {path} has been edited. "
        success_msg += make_numbered_output(snippet, f"a snippet of {path}", start_line + 1)
        success_msg += "Review the changes and make sure they are as expected. Edit the file again if necessary."
        return ToolExecResult(output=success_msg)

    def _insert(self, vfs: VirtualFileSystem, command: InsertCommand) -> ToolExecResult:
        """Implement the insert command, which inserts new_str at the specified line in the file content."""
        path = paths.normalize(command.path)
        insert_line = command.insert_line
        new_file_text = vfs.insert_at(path, insert_line, command.new_str)

        new_lines = new_file_text.split("\n")
        inserted = command.new_str.count("\n") + 1
        start_line = max(0, insert_line - SNIPPET_LINES)
        snippet = "\n".join(new_lines[start_line : insert_line + inserted + SNIPPET_LINES])

        success_msg = f"The file {path} has been edited. "
        success_msg += make_numbered_output(snippet, "a snippet of the edited file", start_line + 1)
        success_msg += "Review the changes and make sure they are as expected (correct indentation, no duplicate lines, etc). Edit the file again if necessary."
        return ToolExecResult(output=success_msg)
