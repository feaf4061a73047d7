"""
Configuration and dependency management for the VFS agent MCP server.
"""

import logging
from functools import lru_cache

from vfs_agent_mcp.agent.mock_provider import MockModelProvider
from vfs_agent_mcp.agent.provider import ModelProvider
from vfs_agent_mcp.tools.edit_tool import TextEditorTool
from vfs_agent_mcp.tools.file_manager_tool import FileManagerTool
from vfs_agent_mcp.utils.config import ServiceConfig
from vfs_agent_mcp.utils.project_store import InMemoryProjectStore, ProjectStore

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base server configuration from environment variables.

    This function is cached to avoid repeatedly reading and parsing environment
    variables and .env files, which improves performance.

    Returns:
        A cached instance of the ServiceConfig.
    """
    return ServiceConfig()


@lru_cache
def get_project_store() -> ProjectStore:
    """Returns the process-wide project store."""
    logger.info("Initializing InMemoryProjectStore singleton.")
    return InMemoryProjectStore()


# --- Tool Providers ---
# Tools hold no state of their own; the tree is handed to them per call.


@lru_cache
def get_file_editor_tool_provider() -> TextEditorTool:
    """Returns a cached instance of the TextEditorTool."""
    logger.info("Initializing TextEditorTool singleton.")
    return TextEditorTool()


@lru_cache
def get_file_manager_tool_provider() -> FileManagerTool:
    """Returns a cached instance of the FileManagerTool."""
    logger.info("Initializing FileManagerTool singleton.")
    return FileManagerTool()


@lru_cache
def get_model_provider() -> ModelProvider:
    """
    Returns the model provider named by MODEL_PROVIDER.

    Only the deterministic stand-in ships with this package; live providers
    are registered by the host application.

    Raises:
        ValueError: If the configured provider is unknown.
    """
    name = get_base_config().MODEL_PROVIDER
    if name == "mock":
        logger.info("Initializing MockModelProvider singleton.")
        return MockModelProvider()
    raise ValueError(f"Unknown model provider: {name}")
