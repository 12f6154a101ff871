"""Stateful handle over one filesystem path.

A ``FileHandle`` caches the metadata of the path it designates. Mutators keep
that cache in step with the file system: ``rename``/``move`` re-stat and swap
state in place, ``remove`` kills the handle. A dead handle holds no state;
accessors then return zero-values and every mutator raises
``InvalidatedError``.

Handles are meant for one owner at a time. Nothing here locks: concurrent
mutators on the same handle race, and which one wins is undefined.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from ..errors import (
    FileHandleError,
    InvalidatedError,
    NotADirError,
    NotAFileError,
    StaleHandleError,
    wrap_os_error,
)
from ..paths import join_path, normalize_path, parent_path, split_name, validate_leaf_name, validate_relative_subpath
from .fs import list_child_states, stat_state
from .paste import DEFAULT_DIR_MODE, paste_file, paste_tree
from .types import CopyReport, FileKind, HandleState

logger = logging.getLogger(__name__)


class FileHandle:
    """Handle over one file or directory path.

    Build handles with ``FileHandle.open``; the path must exist. ``rename``
    and ``move`` update the same object, so every holder of a reference sees
    the new location.
    """

    __slots__ = ("_state",)

    def __init__(self, state: HandleState | None) -> None:
        self._state = state

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> FileHandle:
        """Resolve ``path`` on disk and return a live handle.

        Raises ``NotFoundError`` when the path does not exist.
        """
        return cls(stat_state(normalize_path(path)))

    def __repr__(self) -> str:
        state = self._state
        if state is None:
            return "<FileHandle dead>"
        return f"<FileHandle {state.kind.value} {state.path!r}>"

    def __fspath__(self) -> str:
        return self._live().path

    def _live(self) -> HandleState:
        state = self._state
        if state is None:
            raise InvalidatedError()
        return state

    # Accessors: never raise, zero-values once dead.

    @property
    def alive(self) -> bool:
        return self._state is not None

    @property
    def path(self) -> str:
        return self._state.path if self._state is not None else ""

    @property
    def name(self) -> str:
        return self._state.name if self._state is not None else ""

    @property
    def prefix(self) -> str:
        """Name without its suffix, e.g. ``test`` for ``test.abc``."""
        if self._state is None:
            return ""
        return split_name(self._state.name)[0]

    @property
    def suffix(self) -> str:
        """Extension including the dot, e.g. ``.abc`` for ``test.abc``."""
        if self._state is None:
            return ""
        return split_name(self._state.name)[1]

    @property
    def size(self) -> int:
        return self._state.size if self._state is not None else 0

    @property
    def is_dir(self) -> bool:
        return self._state is not None and self._state.is_dir

    @property
    def kind(self) -> FileKind | None:
        return self._state.kind if self._state is not None else None

    # State transitions.

    def invalidate(self) -> None:
        """Drop all cached state. Safe to call repeatedly."""
        self._state = None

    def replace(self, other: FileHandle) -> None:
        """Take over ``other``'s full state, dead or alive."""
        self._state = other._state

    def refresh(self) -> None:
        """Re-stat the current path in place.

        If the path vanished the handle is invalidated and ``NotFoundError``
        propagates.
        """
        state = self._live()
        try:
            fresh = stat_state(state.path)
        except FileHandleError:
            self.invalidate()
            raise
        self._state = fresh

    # Operations.

    def read(self) -> bytes:
        """Return the whole file content."""
        state = self._live()
        if state.is_dir:
            raise NotAFileError(f"{state.path} is a directory", state.path)
        try:
            return Path(state.path).read_bytes()
        except OSError as exc:
            raise wrap_os_error(exc, "read", state.path) from exc

    def mkdir_all(self, name: str, mode: int = DEFAULT_DIR_MODE) -> FileHandle:
        """Create ``name`` (possibly nested) under this directory.

        Existing directories are reused. Returns a new handle for the deepest
        directory; this handle is left untouched.
        """
        state = self._live()
        if not state.is_dir:
            raise NotADirError(f"{state.path} is not a directory", state.path)
        target = join_path(state.path, validate_relative_subpath(name))
        try:
            os.makedirs(target, mode, exist_ok=True)
        except OSError as exc:
            raise wrap_os_error(exc, "mkdir", target) from exc
        logger.debug("mkdir %s", target)
        return FileHandle.open(target)

    def remove(self) -> None:
        """Delete the file, or the directory with everything below it.

        The handle is invalidated on success and stays alive on failure.
        """
        state = self._live()
        try:
            if state.is_dir and not os.path.islink(state.path):
                shutil.rmtree(state.path)
            else:
                os.remove(state.path)
        except OSError as exc:
            raise wrap_os_error(exc, "remove", state.path) from exc
        logger.debug("removed %s", state.path)
        self.invalidate()

    def rename(self, new_name: str) -> None:
        """Rename within the current parent directory to leaf ``new_name``."""
        state = self._live()
        leaf = validate_leaf_name(new_name)
        self._relocate(state, join_path(parent_path(state.path), leaf), "rename")

    def move(self, destination: str | os.PathLike[str]) -> None:
        """Move to an arbitrary ``destination`` path.

        Relies on the OS rename: moving across file systems raises
        ``CrossDeviceError``.
        """
        state = self._live()
        self._relocate(state, normalize_path(destination), "move")

    def _relocate(self, state: HandleState, target: str, action: str) -> None:
        try:
            os.rename(state.path, target)
        except OSError as exc:
            raise wrap_os_error(exc, action, state.path) from exc
        try:
            moved = FileHandle.open(target)
        except FileHandleError as exc:
            self.invalidate()
            raise StaleHandleError(
                f"{action} of {state.path} to {target} succeeded but the new location could not be read: {exc}",
                target,
            ) from exc
        logger.debug("%s %s -> %s", action, state.path, target)
        self.replace(moved)

    def paste(self, destination: str | os.PathLike[str], *, dir_mode: int = DEFAULT_DIR_MODE) -> CopyReport:
        """Copy this file or directory tree to ``destination``.

        This handle is never modified. For directories, failures on single
        files are reported in the returned ``CopyReport`` instead of raised.
        """
        state = self._live()
        target = normalize_path(destination)
        if state.is_dir:
            return paste_tree(state.path, target, dir_mode)
        return paste_file(state.path, target)

    def children(self) -> list[FileHandle]:
        """Return one new handle per immediate entry.

        Order is unspecified; sort explicitly when it matters.
        """
        state = self._live()
        if not state.is_dir:
            raise NotADirError(f"{state.path} is not a directory", state.path)
        return [FileHandle(child) for child in list_child_states(state.path)]


def open_handle(path: str | os.PathLike[str]) -> FileHandle:
    """Module-level shorthand for ``FileHandle.open``."""
    return FileHandle.open(path)


__all__ = [
    "FileHandle",
    "open_handle",
]
