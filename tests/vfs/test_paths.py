"""
Unit тесты для paths.py
"""

import pytest

from vfs_agent_mcp.vfs import paths
from vfs_agent_mcp.vfs.errors import InvalidPath


class TestNormalize:
    """Тесты для normalize"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("/", "/"),
            ("///", "/"),
            ("/a/b", "/a/b"),
            ("a/b", "/a/b"),
            ("/a//b/", "/a/b"),
            ("/a/./b", "/a/b"),
            ("/a/c/../b", "/a/b"),
            ("./App.jsx", "/App.jsx"),
            ("/a/..", "/"),
        ],
    )
    def test_spellings_collapse_to_one_key(self, raw, expected):
        assert paths.normalize(raw) == expected

    @pytest.mark.parametrize("raw", ["/..", "../x", "/a/../../b", "a/../.."])
    def test_escaping_the_root_is_rejected(self, raw):
        with pytest.raises(InvalidPath):
            paths.normalize(raw)

    @pytest.mark.parametrize("raw", ["", "   ", "/a\x00b", None, 42])
    def test_malformed_input_is_rejected(self, raw):
        with pytest.raises(InvalidPath):
            paths.normalize(raw)


class TestPathHelpers:
    """Тесты для вспомогательных функций"""

    def test_parent_of(self):
        assert paths.parent_of("/a/b/c.txt") == "/a/b"
        assert paths.parent_of("/a") == "/"
        assert paths.parent_of("/") == "/"

    def test_basename_and_join(self):
        assert paths.basename("/a/b.txt") == "b.txt"
        assert paths.basename("/") == ""
        assert paths.join("/", "a") == "/a"
        assert paths.join("/a", "b") == "/a/b"

    def test_ancestors_are_root_first(self):
        assert paths.ancestors("/a/b/c.txt") == ["/", "/a", "/a/b"]
        assert paths.ancestors("/") == []

    def test_is_ancestor(self):
        assert paths.is_ancestor("/", "/a")
        assert paths.is_ancestor("/a", "/a/b")
        assert not paths.is_ancestor("/a", "/a")
        assert not paths.is_ancestor("/a", "/ab")
