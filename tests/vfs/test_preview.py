"""
Unit тесты для preview.py
"""

import pytest

from vfs_agent_mcp.vfs.preview import PreviewSession, build_preview, detect_entry_point


class FakeHandle:
    def __init__(self, entry_point):
        self.entry_point = entry_point
        self.released = False

    def release(self):
        self.released = True


class TestEntryPoint:
    """Тесты определения точки входа"""

    def test_only_index_tsx(self, vfs):
        vfs.create_file("/index.tsx", "x")
        assert build_preview(vfs).entry_point == "/index.tsx"

    def test_no_entry_point(self, vfs):
        vfs.create_file("/components/Button.jsx", "x")
        bundle = build_preview(vfs)
        assert bundle.entry_point is None
        assert not bundle.has_entry_point

    def test_candidates_are_probed_in_order(self):
        files = {"/index.tsx": "", "/App.tsx": "", "/index.jsx": ""}
        assert detect_entry_point(files) == "/App.tsx"
        assert detect_entry_point({**files, "/App.jsx": ""}) == "/App.jsx"

    def test_bundle_contains_files_only(self, vfs):
        vfs.create_file("/App.jsx", "app")
        vfs.create_file("/components/Button.jsx", "btn")
        vfs.create_directory("/empty")

        assert build_preview(vfs).files == {
            "/App.jsx": "app",
            "/components/Button.jsx": "btn",
        }


class TestPreviewSession:
    """Тесты освобождения скомпилированных модулей"""

    @pytest.fixture
    def compiled(self):
        return []

    @pytest.fixture
    def session(self, compiled):
        def compiler(bundle):
            handle = FakeHandle(bundle.entry_point)
            compiled.append(handle)
            return handle

        return PreviewSession(compiler)

    def test_refresh_releases_superseded_handle(self, vfs, session, compiled):
        vfs.create_file("/App.jsx", "v1")
        first = session.refresh(vfs)
        vfs.create_file("/App.jsx", "v2")
        second = session.refresh(vfs)

        assert first.released
        assert not second.released
        assert session.current is second
        assert len(compiled) == 2

    def test_close_releases_current_handle(self, vfs, session):
        vfs.create_file("/App.jsx", "v1")
        with session:
            handle = session.refresh(vfs)
        assert handle.released
        assert session.current is None

        with pytest.raises(RuntimeError):
            session.refresh(vfs)

    def test_no_entry_point_skips_compilation(self, vfs, session, compiled):
        vfs.create_file("/App.jsx", "v1")
        first = session.refresh(vfs)
        vfs.delete_node("/App.jsx")

        assert session.refresh(vfs) is None
        assert first.released
        assert len(compiled) == 1
