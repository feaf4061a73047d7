"""Preview contract: the files-only snapshot plus a detected entry point."""

import logging
from typing import Any, Callable, Protocol

from pydantic import BaseModel

from vfs_agent_mcp.vfs.file_system import VirtualFileSystem

logger = logging.getLogger(__name__)

ENTRY_POINT_CANDIDATES: tuple[str, ...] = (
    "/App.jsx",
    "/App.tsx",
    "/index.jsx",
    "/index.tsx",
)


class PreviewBundle(BaseModel):
    """Everything the preview compiler needs to render the project."""

    files: dict[str, str]
    entry_point: str | None = None

    @property
    def has_entry_point(self) -> bool:
        return self.entry_point is not None


def detect_entry_point(files: dict[str, str]) -> str | None:
    """Return the first candidate present in ``files``, or None."""
    for candidate in ENTRY_POINT_CANDIDATES:
        if candidate in files:
            return candidate
    return None


def build_preview(vfs: VirtualFileSystem) -> PreviewBundle:
    files = vfs.files()
    entry_point = detect_entry_point(files)
    if entry_point is None:
        logger.info("No entry point found among %d file(s)", len(files))
    return PreviewBundle(files=files, entry_point=entry_point)


class CompiledHandle(Protocol):
    """A resource created by the preview compiler for one refresh."""

    def release(self) -> None: ...


class PreviewSession:
    """
    Tracks the compiled handle of the current preview.

    Each refresh releases the handle it supersedes, and ``close`` releases
    whatever is still alive, so repeated refreshes do not accumulate
    compiled modules.
    """

    def __init__(self, compiler: Callable[[PreviewBundle], CompiledHandle]) -> None:
        self._compiler = compiler
        self._current: CompiledHandle | None = None
        self._closed = False

    @property
    def current(self) -> CompiledHandle | None:
        return self._current

    def refresh(self, vfs: VirtualFileSystem) -> CompiledHandle | None:
        """Compile the current tree, replacing the previous handle."""
        if self._closed:
            raise RuntimeError("Preview session is closed.")

        bundle = build_preview(vfs)
        handle = self._compiler(bundle) if bundle.has_entry_point else None
        previous, self._current = self._current, handle
        if previous is not None:
            previous.release()
            logger.debug("Released superseded preview handle")
        return handle

    def close(self) -> None:
        if self._current is not None:
            self._current.release()
            self._current = None
        self._closed = True

    def __enter__(self) -> "PreviewSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
