import json

from vfs_agent_mcp.models.file_node import FileNode

from .constants import MAX_RESPONSE_LEN, TRUNCATED_MESSAGE


def maybe_truncate(content: str, truncate_after: int | None = MAX_RESPONSE_LEN) -> str:
    """Truncate content and append a notice if it is longer than the limit."""
    if not truncate_after or len(content) <= truncate_after:
        return content
    return content[:truncate_after] + TRUNCATED_MESSAGE


def make_numbered_output(file_content: str, file_descriptor: str, init_line: int = 1) -> str:
    """Render file content the way `cat -n` does."""
    file_content = maybe_truncate(file_content)
    file_content = "\n".join(
        [f"{i + init_line:6}\t{line}" for i, line in enumerate(file_content.split("\n"))]
    )
    return f"Here's the result of running `cat -n` on {file_descriptor}:\n" + file_content + "\n"


def format_file_list(directory: str, nodes: list[FileNode]) -> str:
    """
    Format a directory listing as structured JSON for LLM consumption.

    Returns a JSON string with clear structure that LLMs can easily parse
    and understand, instead of hard-to-parse plain text.
    """
    if not nodes:
        return json.dumps({
            "status": "empty",
            "directory": directory,
            "message": "Directory is empty",
            "files": []
        }, indent=2)

    file_list = []
    for node in nodes:
        file_entry = {
            "name": node.name,
            "type": node.type,
            "path": node.path,
        }
        if node.is_file:
            file_entry["size"] = len(node.content or "")
        else:
            file_entry["children"] = len(node.children)
        file_list.append(file_entry)

    return json.dumps({
        "status": "success",
        "directory": directory,
        "count": len(file_list),
        "files": file_list
    }, indent=2)
