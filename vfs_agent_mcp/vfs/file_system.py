"""In-memory hierarchical file store used as the working set of one agent run."""

from __future__ import annotations

import logging

from vfs_agent_mcp.models.file_node import FileNode
from vfs_agent_mcp.vfs import paths
from vfs_agent_mcp.vfs.errors import InvalidPath, NotFound, OutOfRange, PathConflict

logger = logging.getLogger(__name__)


class VirtualFileSystem:
    """
    A tree of file and directory nodes addressed by normalized absolute path.

    Every public operation normalizes its path arguments before lookup. Each
    successful mutating call increments ``version`` exactly once, no matter how
    many nodes it touches, so consumers can detect a change by comparing
    versions. Failed calls leave both the tree and the version untouched.

    An instance belongs to exactly one run and must not be shared between
    concurrently executing runs.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, FileNode] = {
            paths.ROOT: FileNode(path=paths.ROOT, type="directory"),
        }
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._nodes)

    # --- Queries ---

    def exists(self, path: str) -> bool:
        return paths.normalize(path) in self._nodes

    def is_file(self, path: str) -> bool:
        node = self._nodes.get(paths.normalize(path))
        return node is not None and node.is_file

    def is_directory(self, path: str) -> bool:
        node = self._nodes.get(paths.normalize(path))
        return node is not None and node.is_directory

    def get_node(self, path: str) -> FileNode:
        """Return a copy of the node at ``path``. Raises NotFound if absent."""
        normalized = paths.normalize(path)
        node = self._nodes.get(normalized)
        if node is None:
            raise NotFound(f"No such file or directory: {normalized}", normalized)
        return node.model_copy(deep=True)

    def read_file(self, path: str) -> str:
        normalized = paths.normalize(path)
        return self._require_file(normalized).content or ""

    def list(self, path: str = paths.ROOT) -> list[FileNode]:
        """
        List the immediate children of a directory, sorted by name.

        Raises:
            NotFound: If ``path`` is absent or is not a directory.
        """
        normalized = paths.normalize(path)
        node = self._nodes.get(normalized)
        if node is None or not node.is_directory:
            raise NotFound(f"No such directory: {normalized}", normalized)
        children = [self._nodes[child].model_copy(deep=True) for child in node.children]
        return sorted(children, key=lambda child: child.name)

    def list_all(self) -> dict[str, FileNode]:
        """Full path→node snapshot ordered by path. Nodes are copies."""
        return {path: self._nodes[path].model_copy(deep=True) for path in sorted(self._nodes)}

    def files(self) -> dict[str, str]:
        """Path→content map restricted to files, ordered by path."""
        return {
            path: node.content or ""
            for path, node in sorted(self._nodes.items())
            if node.is_file
        }

    # --- Mutations ---

    def create_file(self, path: str, content: str) -> FileNode:
        """
        Create or overwrite a file, materializing any missing ancestors.

        Overwriting an existing file is allowed so that a retried tool call is
        harmless.

        Raises:
            PathConflict: If a directory occupies ``path`` or a file occupies
                one of its ancestors.
            InvalidPath: If ``path`` is the root.
        """
        normalized = paths.normalize(path)
        if paths.is_root(normalized):
            raise InvalidPath("Cannot write file content to the root directory.", normalized)

        existing = self._nodes.get(normalized)
        if existing is not None and existing.is_directory:
            raise PathConflict(f"A directory already exists at {normalized}.", normalized)
        self._check_ancestors_free(normalized)

        self._materialize_ancestors(normalized)
        if existing is not None:
            existing.content = content
            logger.debug(f"Overwrote file {normalized}, content length: {len(content)}")
        else:
            self._attach(FileNode(path=normalized, type="file", content=content))
            logger.debug(f"Created file {normalized}, content length: {len(content)}")
        self._bump()
        return self._nodes[normalized].model_copy(deep=True)

    def create_directory(self, path: str) -> FileNode:
        """Create a directory and its ancestors. Existing directories are kept as-is."""
        normalized = paths.normalize(path)
        existing = self._nodes.get(normalized)
        if existing is not None:
            if existing.is_file:
                raise PathConflict(f"A file already exists at {normalized}.", normalized)
            return existing.model_copy(deep=True)
        self._check_ancestors_free(normalized)

        self._materialize_ancestors(normalized)
        self._attach(FileNode(path=normalized, type="directory"))
        self._bump()
        return self._nodes[normalized].model_copy(deep=True)

    def replace_in_file(self, path: str, old_text: str, new_text: str) -> str:
        """
        Replace the single occurrence of ``old_text`` in a file.

        Returns:
            The new file content.

        Raises:
            NotFound: If the file is absent, or ``old_text`` occurs zero times
                or more than once. The content is left untouched.
        """
        normalized = paths.normalize(path)
        node = self._require_file(normalized)
        content = node.content or ""

        occurrences = content.count(old_text) if old_text else 0
        if occurrences == 0:
            raise NotFound(f"The text to replace was not found in {normalized}.", normalized)
        if occurrences > 1:
            raise NotFound(
                f"The text to replace occurs {occurrences} times in {normalized}; it must be unique.",
                normalized,
            )

        node.content = content.replace(old_text, new_text, 1)
        self._bump()
        return node.content

    def insert_at(self, path: str, line_number: int, text: str) -> str:
        """
        Insert ``text`` as a new line at a 0-indexed line boundary.

        Returns:
            The new file content.

        Raises:
            NotFound: If the file is absent.
            OutOfRange: If ``line_number`` is negative or past the last boundary.
        """
        normalized = paths.normalize(path)
        node = self._require_file(normalized)
        lines = (node.content or "").split("\n")
        line_count = len(lines) - 1

        if line_number < 0 or line_number > line_count + 1:
            raise OutOfRange(
                f"Line {line_number} is outside of {normalized}; valid range is [0, {line_count + 1}].",
                normalized,
            )

        lines[line_number:line_number] = [text]
        node.content = "\n".join(lines)
        self._bump()
        return node.content

    def delete_node(self, path: str) -> list[str]:
        """
        Delete a file, or a directory together with everything below it.

        Returns:
            The removed paths, sorted.

        Raises:
            NotFound: If nothing exists at ``path``.
            InvalidPath: If ``path`` is the root.
        """
        normalized = paths.normalize(path)
        if paths.is_root(normalized):
            raise InvalidPath("The root directory cannot be deleted.", normalized)
        if normalized not in self._nodes:
            raise NotFound(f"No such file or directory: {normalized}", normalized)

        removed = self._subtree(normalized)
        parent = self._nodes[paths.parent_of(normalized)]
        parent.children.discard(normalized)
        for removed_path in removed:
            del self._nodes[removed_path]
        self._bump()
        logger.debug(f"Deleted {len(removed)} node(s) under {normalized}")
        return removed

    def rename_node(self, old_path: str, new_path: str) -> FileNode:
        """
        Move a node, and for directories its whole subtree, to a new path.

        All target paths are computed and checked before anything is touched,
        so a collision aborts the rename with zero mutation.

        Raises:
            NotFound: If ``old_path`` is absent.
            PathConflict: If ``new_path`` or any rewritten descendant path is
                occupied, or an ancestor of ``new_path`` is a file.
            InvalidPath: If either path is the root, or a directory would be
                moved into its own subtree.
        """
        source = paths.normalize(old_path)
        target = paths.normalize(new_path)
        if paths.is_root(source) or paths.is_root(target):
            raise InvalidPath("The root directory cannot be renamed.", source)
        if source not in self._nodes:
            raise NotFound(f"No such file or directory: {source}", source)
        if target in self._nodes:
            raise PathConflict(f"Target path {target} already exists.", target)
        if paths.is_ancestor(source, target):
            raise InvalidPath(f"Cannot move {source} into its own subtree {target}.", source)
        self._check_ancestors_free(target)

        moves = {old: target + old[len(source):] for old in self._subtree(source)}
        collisions = sorted(new for new in moves.values() if new in self._nodes)
        if collisions:
            raise PathConflict(
                f"Renaming {source} to {target} would overwrite {', '.join(collisions)}.",
                target,
            )

        self._materialize_ancestors(target)
        self._nodes[paths.parent_of(source)].children.discard(source)
        moved = {old: self._nodes.pop(old) for old in moves}
        for old, node in moved.items():
            node.path = moves[old]
            node.children = {moves[child] for child in node.children}
            self._nodes[node.path] = node
        self._nodes[paths.parent_of(target)].children.add(target)
        self._bump()
        logger.debug(f"Renamed {source} to {target} ({len(moves)} node(s))")
        return self._nodes[target].model_copy(deep=True)

    # --- Internals ---

    def _bump(self) -> None:
        self._version += 1

    def _require_file(self, normalized: str) -> FileNode:
        node = self._nodes.get(normalized)
        if node is None:
            raise NotFound(f"No such file: {normalized}", normalized)
        if not node.is_file:
            raise NotFound(f"{normalized} is a directory, not a file.", normalized)
        return node

    def _check_ancestors_free(self, normalized: str) -> None:
        for ancestor in paths.ancestors(normalized):
            node = self._nodes.get(ancestor)
            if node is not None and node.is_file:
                raise PathConflict(
                    f"Cannot place {normalized} below the file {ancestor}.", normalized
                )

    def _materialize_ancestors(self, normalized: str) -> None:
        for ancestor in paths.ancestors(normalized):
            if ancestor not in self._nodes:
                self._attach(FileNode(path=ancestor, type="directory"))

    def _attach(self, node: FileNode) -> None:
        self._nodes[node.path] = node
        if not paths.is_root(node.path):
            self._nodes[paths.parent_of(node.path)].children.add(node.path)

    def _subtree(self, normalized: str) -> list[str]:
        """The node itself and all of its descendants, sorted."""
        result = []
        pending = [normalized]
        while pending:
            current = pending.pop()
            result.append(current)
            pending.extend(self._nodes[current].children)
        return sorted(result)
