"""
Unit тесты для project_store.py
"""

from vfs_agent_mcp.models.transcript import ToolCall, ToolResult, TurnRecord


class TestInMemoryProjectStore:
    """Тесты для InMemoryProjectStore"""

    def test_unknown_project(self, store):
        assert store.get("missing") is None
        assert store.get_transcript("missing") == []

    def test_put_then_get(self, store):
        snapshot = {
            "/": {"type": "directory", "content": None},
            "/App.jsx": {"type": "file", "content": "app"},
        }
        transcript = [
            TurnRecord(role="user", content="hi"),
            TurnRecord(
                role="assistant",
                tool_calls=[ToolCall(call_id="1", name="file_manager", arguments={"command": "delete", "path": "/x"})],
            ),
            TurnRecord(
                role="tool",
                tool_results=[ToolResult(call_id="1", name="file_manager", success=False, error="gone", error_type="NotFound")],
            ),
        ]

        store.put("p1", snapshot, transcript)

        assert store.get("p1") == snapshot
        assert list(store.get("p1")) == ["/", "/App.jsx"]
        assert store.get_transcript("p1") == transcript

    def test_stored_snapshot_is_detached_from_caller(self, store):
        snapshot = {"/a.txt": {"type": "file", "content": "a"}}
        store.put("p1", snapshot, [])
        snapshot["/a.txt"]["content"] = "changed"
        assert store.get("p1")["/a.txt"]["content"] == "a"

    def test_one_lock_per_project(self, store):
        assert store.lock("p1") is store.lock("p1")
        assert store.lock("p1") is not store.lock("p2")
