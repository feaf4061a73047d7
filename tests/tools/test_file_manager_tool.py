#!/usr/bin/env python3
"""
Unit тесты для file_manager_tool.py и ToolExecutor
"""

import pytest

from vfs_agent_mcp.models.transcript import ToolCall
from vfs_agent_mcp.tools import default_tools
from vfs_agent_mcp.tools.base import ToolExecutor
from vfs_agent_mcp.tools.file_manager_tool import FileManagerTool


class TestFileManagerTool:
    """Тесты для FileManagerTool"""

    @pytest.fixture
    def manager_tool(self):
        """Создает экземпляр FileManagerTool"""
        return FileManagerTool()

    @pytest.fixture
    def run(self, manager_tool, vfs):
        async def _run(**arguments):
            return await manager_tool.execute({**arguments, "_vfs": vfs})

        return _run

    @pytest.mark.asyncio
    async def test_rename_directory(self, run, vfs):
        """Тест rename для директории"""
        vfs.create_file("/a/x.txt", "x")

        result = await run(command="rename", path="/a", new_path="/b")

        assert result.error is None
        assert result.output == "Renamed directory /a to /b."
        assert vfs.read_file("/b/x.txt") == "x"
        assert not vfs.exists("/a")

    @pytest.mark.asyncio
    async def test_rename_conflict_leaves_tree_untouched(self, run, vfs):
        """Тест rename с конфликтом путей"""
        vfs.create_file("/a/x.txt", "a")
        vfs.create_file("/b/x.txt", "b")
        before = vfs.list_all()

        result = await run(command="rename", path="/a", new_path="/b")

        assert result.error_type == "PathConflict"
        assert vfs.list_all() == before

    @pytest.mark.asyncio
    async def test_rename_requires_new_path(self, run, vfs):
        vfs.create_file("/a.txt", "a")
        result = await run(command="rename", path="/a.txt")
        assert result.error_type == "ValidationError"

    @pytest.mark.asyncio
    async def test_delete(self, run, vfs):
        """Тест delete"""
        vfs.create_file("/a/x.txt", "x")
        vfs.create_file("/a/y.txt", "y")

        result = await run(command="delete", path="/a")

        assert result.output == "Deleted /a and 2 item(s) inside it."
        assert list(vfs.list_all()) == ["/"]

    @pytest.mark.asyncio
    async def test_delete_root_and_missing(self, run):
        result = await run(command="delete", path="/")
        assert result.error_type == "InvalidPath"

        result = await run(command="delete", path="/missing")
        assert result.error_type == "NotFound"


class TestToolExecutor:
    """Тесты для ToolExecutor"""

    @pytest.fixture
    def executor(self, vfs):
        return ToolExecutor(default_tools(), vfs)

    @pytest.mark.asyncio
    async def test_calls_apply_in_emission_order(self, executor, vfs, make_create_call):
        """Вызовы в одном ходе видят результаты предыдущих"""
        calls = [
            make_create_call("1", "/App.jsx", "hello"),
            ToolCall(
                call_id="2",
                name="str_replace_based_edit_tool",
                arguments={"command": "str_replace", "path": "/App.jsx", "old_str": "hello", "new_str": "bye"},
            ),
            ToolCall(
                call_id="3",
                name="file_manager",
                arguments={"command": "rename", "path": "/App.jsx", "new_path": "/src/App.jsx"},
            ),
        ]

        results = await executor.sequential_tool_call(calls)

        assert [result.success for result in results] == [True, True, True]
        assert [result.call_id for result in results] == ["1", "2", "3"]
        assert vfs.read_file("/src/App.jsx") == "bye"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, executor):
        result = await executor.execute_tool_call(ToolCall(call_id="1", name="bash", arguments={}))
        assert not result.success
        assert result.error_type == "UnknownTool"

    @pytest.mark.asyncio
    async def test_error_results_are_structured(self, executor):
        result = await executor.execute_tool_call(
            ToolCall(call_id="1", name="file_manager", arguments={"command": "delete", "path": "/nope"})
        )
        assert not result.success
        assert result.error_type == "NotFound"
        assert result.call_id == "1"

    def test_definitions(self, executor):
        assert [definition["name"] for definition in executor.definitions()] == [
            "str_replace_based_edit_tool",
            "file_manager",
        ]
