"""
Unit тесты для mock_provider.py
"""

import pytest

from vfs_agent_mcp.agent.mock_provider import MockModelProvider
from vfs_agent_mcp.agent.provider import resolve_step_budget
from vfs_agent_mcp.models.transcript import TurnRecord
from vfs_agent_mcp.utils.config import ServiceConfig


class TestMockModelProvider:
    """Тесты для MockModelProvider"""

    @pytest.fixture
    def provider(self):
        return MockModelProvider()

    @pytest.mark.asyncio
    async def test_first_turn_creates_the_component(self, provider):
        turn = await provider.next_turn("", [TurnRecord(role="user", content="a contact form")], [])

        assert len(turn.tool_calls) == 1
        call = turn.tool_calls[0]
        assert call.arguments["command"] == "create"
        assert call.arguments["path"] == "/components/ContactForm.jsx"

    @pytest.mark.asyncio
    async def test_final_turn_has_no_tool_calls(self, provider):
        transcript = [TurnRecord(role="user", content="a card")]
        transcript += [TurnRecord(role="assistant"), TurnRecord(role="tool")] * 3

        turn = await provider.next_turn("", transcript, [])

        assert turn.tool_calls == []
        assert "Card" in turn.text

    @pytest.mark.asyncio
    async def test_new_prompt_restarts_the_sequence(self, provider):
        transcript = [TurnRecord(role="user", content="a card")]
        transcript += [TurnRecord(role="assistant")] * 4
        transcript.append(TurnRecord(role="user", content="a counter"))

        turn = await provider.next_turn("", transcript, [])

        assert turn.tool_calls[0].arguments["path"] == "/components/Counter.jsx"

    def test_step_budget_follows_provider_kind(self, provider):
        config = ServiceConfig(MAX_STEPS_LIVE=40, MAX_STEPS_MOCK=4)
        assert resolve_step_budget(provider, config) == 4
