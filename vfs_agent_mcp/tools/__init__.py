from .base import Tool, ToolError, ToolExecResult, ToolExecutor, ToolParameter
from .edit_tool import TextEditorTool
from .file_manager_tool import FileManagerTool


def default_tools() -> list[Tool]:
    """The tool set handed to the model for every run."""
    return [TextEditorTool(), FileManagerTool()]


__all__ = [
    "FileManagerTool",
    "TextEditorTool",
    "Tool",
    "ToolError",
    "ToolExecResult",
    "ToolExecutor",
    "ToolParameter",
    "default_tools",
]
