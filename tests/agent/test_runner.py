"""
Unit тесты для runner.py
"""

import asyncio

import pytest

from vfs_agent_mcp.agent.mock_provider import MockModelProvider
from vfs_agent_mcp.agent.loop import TerminalReason
from vfs_agent_mcp.agent.runner import run_project
from vfs_agent_mcp.models.transcript import ModelTurn
from vfs_agent_mcp.utils.config import ServiceConfig
from vfs_agent_mcp.vfs.errors import CorruptState
from vfs_agent_mcp.vfs.preview import build_preview
from vfs_agent_mcp.vfs.serializer import deserialize


@pytest.fixture
def config():
    return ServiceConfig(MAX_STEPS_LIVE=40, MAX_STEPS_MOCK=4)


class TestRunProject:
    """Тесты для run_project"""

    @pytest.mark.asyncio
    async def test_mock_run_scaffolds_a_previewable_project(self, store, config):
        """Полный прогон с детерминированной моделью"""
        outcome = await run_project("p1", "Make a counter", store=store, provider=MockModelProvider(), config=config)

        assert outcome.status == "completed"
        assert outcome.loop.reason is TerminalReason.NO_TOOL_CALLS
        assert outcome.loop.steps == 4
        assert store.get("p1") == outcome.snapshot

        vfs = deserialize(outcome.snapshot)
        assert "<h2>Simple Counter</h2>" in vfs.read_file("/components/Counter.jsx")
        assert build_preview(vfs).entry_point == "/App.jsx"

        transcript = store.get_transcript("p1")
        assert transcript[0].role == "user"
        assert transcript[0].content == "Make a counter"
        assert all(r.success for record in transcript for r in record.tool_results)

    @pytest.mark.asyncio
    async def test_step_budget_run_persists_snapshot(self, store, always_editing_provider):
        config = ServiceConfig(MAX_STEPS_MOCK=2)

        outcome = await run_project("p1", "go", store=store, provider=always_editing_provider, config=config)

        assert outcome.status == "completed"
        assert outcome.loop.reason is TerminalReason.STEP_BUDGET_EXHAUSTED
        assert always_editing_provider.calls == 2
        assert store.get("p1") is not None
        assert list(store.get("p1")) == ["/", "/step_1.txt", "/step_2.txt"]

    @pytest.mark.asyncio
    async def test_second_run_continues_from_stored_snapshot(self, store, config, scripted_provider, make_create_call):
        first = scripted_provider([ModelTurn(tool_calls=[make_create_call("1", "/a.txt", "a")])])
        await run_project("p1", "one", store=store, provider=first, config=config)

        second = scripted_provider([ModelTurn(tool_calls=[make_create_call("2", "/b.txt", "b")])])
        outcome = await run_project("p1", "two", store=store, provider=second, config=config)

        assert deserialize(outcome.snapshot).files() == {"/a.txt": "a", "/b.txt": "b"}
        assert [record.content for record in store.get_transcript("p1") if record.role == "user"] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_transport_failure_keeps_previous_snapshot(
        self, store, config, scripted_provider, make_create_call, transport_failure
    ):
        """При недоступности модели ничего не сохраняется"""
        store.put("p1", {"/old.txt": {"type": "file", "content": "old"}}, [])
        provider = scripted_provider([
            ModelTurn(tool_calls=[make_create_call("1", "/new.txt", "new")]),
            transport_failure,
        ])

        outcome = await run_project("p1", "go", store=store, provider=provider, config=config)

        assert outcome.aborted
        assert outcome.snapshot is None
        assert outcome.loop.reason is TerminalReason.TRANSPORT_FAILED
        assert store.get("p1") == {"/old.txt": {"type": "file", "content": "old"}}
        assert store.get_transcript("p1") == []

    @pytest.mark.asyncio
    async def test_cancellation_persists_last_completed_round(self, store, config, always_editing_provider):
        cancel_event = asyncio.Event()

        def on_event(event):
            if event.kind == "tool_result":
                cancel_event.set()

        outcome = await run_project(
            "p1", "go",
            store=store,
            provider=always_editing_provider,
            config=config,
            cancel_event=cancel_event,
            on_event=on_event,
        )

        assert outcome.status == "cancelled"
        assert list(store.get("p1")) == ["/", "/step_1.txt"]

    @pytest.mark.asyncio
    async def test_corrupt_snapshot_aborts_before_running(self, store, config, scripted_provider):
        store.put("p1", {"/a": {"type": "symlink", "content": None}}, [])
        provider = scripted_provider([])

        with pytest.raises(CorruptState):
            await run_project("p1", "go", store=store, provider=provider, config=config)
        assert provider.calls == 0
