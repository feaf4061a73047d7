"""
Общие фикстуры для тестов
"""

import pytest

from vfs_agent_mcp.agent.provider import ModelProvider, TransportFailure
from vfs_agent_mcp.models.transcript import ModelTurn, ToolCall
from vfs_agent_mcp.utils.project_store import InMemoryProjectStore
from vfs_agent_mcp.vfs.file_system import VirtualFileSystem


class ScriptedModelProvider(ModelProvider):
    """Returns prepared turns in order; an exception in the script is raised instead."""

    is_live = False

    def __init__(self, turns: list[ModelTurn | Exception]) -> None:
        self._turns = list(turns)
        self.calls = 0
        self.transcript_lengths: list[int] = []

    def get_name(self) -> str:
        return "scripted"

    async def next_turn(self, system_prompt, transcript, tools) -> ModelTurn:
        self.calls += 1
        self.transcript_lengths.append(len(transcript))
        turn = self._turns.pop(0) if self._turns else ModelTurn(text="Done.")
        if isinstance(turn, Exception):
            raise turn
        return turn


class AlwaysEditingProvider(ModelProvider):
    """Never stops on its own: every turn creates one more file."""

    is_live = False

    def __init__(self) -> None:
        self.calls = 0

    def get_name(self) -> str:
        return "always-editing"

    async def next_turn(self, system_prompt, transcript, tools) -> ModelTurn:
        self.calls += 1
        return ModelTurn(
            text=f"Step {self.calls}",
            tool_calls=[
                create_call(f"call_{self.calls}", f"/step_{self.calls}.txt", f"step {self.calls}"),
            ],
        )


def create_call(call_id: str, path: str, file_text: str) -> ToolCall:
    return ToolCall(
        call_id=call_id,
        name="str_replace_based_edit_tool",
        arguments={"command": "create", "path": path, "file_text": file_text},
    )


@pytest.fixture
def vfs():
    """Пустое виртуальное дерево"""
    return VirtualFileSystem()


@pytest.fixture
def store():
    """Хранилище проектов в памяти"""
    return InMemoryProjectStore()


@pytest.fixture
def scripted_provider():
    """Фабрика провайдеров с заранее заданными ответами"""
    return ScriptedModelProvider


@pytest.fixture
def always_editing_provider():
    """Провайдер, который всегда вызывает инструменты"""
    return AlwaysEditingProvider()


@pytest.fixture
def transport_failure():
    return TransportFailure("connection refused")


@pytest.fixture
def make_create_call():
    return create_call
