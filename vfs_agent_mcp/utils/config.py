"""Service configuration definition."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceConfig(BaseSettings):
    """
    Defines the configuration for the MCP server and the agent loop, loaded
    from environment variables or a .env file.
    """

    # We do not specify env_file here.
    # Environment loading is handled explicitly in main.py via load_dotenv
    # to ensure the correct .env file is used.
    model_config = SettingsConfigDict(extra="ignore")

    # MCP Server transport mechanism (e.g., "stdio", "sse", "streamable-http")
    MCP_TRANSPORT: str = "stdio"
    # Host for the MCP server to bind to. Defaults to 0.0.0.0 for accessibility.
    MCP_HOST: str = "0.0.0.0"
    # Port for the MCP server to listen on.
    MCP_PORT: int = 8660

    # Name of the model provider driving `generate` ("mock" is the deterministic stand-in).
    MODEL_PROVIDER: str = "mock"
    # Maximum number of request/execute rounds per run.
    MAX_STEPS_LIVE: int = 40
    MAX_STEPS_MOCK: int = 4
