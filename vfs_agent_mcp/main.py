"""
Entry point for the VFS agent MCP server.

Loads the environment, configures logging and starts the server on the
configured transport.
"""

import logging
import os
import sys

from dotenv import load_dotenv


def setup_environment() -> None:
    """
    Loads .env and configures logging to stderr.

    stdout is reserved for the stdio transport, so nothing else may print there.
    """
    load_dotenv()

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def run_server() -> None:
    """Sets up the environment, checks the model provider and runs the server."""
    setup_environment()

    # The server module reads the configuration at import time.
    from vfs_agent_mcp.agent.provider import resolve_step_budget
    from vfs_agent_mcp.server import mcp_app, server_config
    from vfs_agent_mcp.utils.dependencies import get_model_provider

    logger = logging.getLogger(__name__)
    try:
        provider = get_model_provider()
    except ValueError as e:
        logger.critical(f"Cannot start: {e}")
        sys.exit(1)

    logger.info(
        f"Starting vfs-agent-mcp on {server_config.MCP_TRANSPORT} with provider "
        f"{provider.get_name()} (step budget {resolve_step_budget(provider, server_config)})"
    )
    if server_config.MCP_TRANSPORT != "stdio":
        logger.info(f"Listening on {server_config.MCP_HOST}:{server_config.MCP_PORT}")

    mcp_app.run(transport=server_config.MCP_TRANSPORT)


if __name__ == "__main__":
    run_server()
