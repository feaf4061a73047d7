"""Interface to the model-call collaborator."""

from abc import ABC, abstractmethod

from vfs_agent_mcp.models.transcript import ModelTurn, TurnRecord
from vfs_agent_mcp.utils.config import ServiceConfig


class TransportFailure(Exception):
    """The model collaborator could not be reached. Fatal to the current run."""


class ModelProvider(ABC):
    """
    Submits the conversation plus tool definitions and returns one turn.

    Implementations must raise ``TransportFailure`` when the model cannot be
    reached; any other exception is treated the same way by the agent loop.
    """

    # Live models get the large step budget, deterministic stand-ins the small one.
    is_live: bool = True

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    async def next_turn(
        self,
        system_prompt: str,
        transcript: list[TurnRecord],
        tools: list[dict[str, object]],
    ) -> ModelTurn:
        pass


def resolve_step_budget(provider: ModelProvider, config: ServiceConfig) -> int:
    return config.MAX_STEPS_LIVE if provider.is_live else config.MAX_STEPS_MOCK
