"""Stat and directory-listing primitives that produce handle state."""

from __future__ import annotations

import os

from ..errors import NotFoundError, wrap_os_error
from ..paths import join_path
from .types import HandleState


def stat_state(path: str) -> HandleState:
    """Stat normalized ``path`` and return fresh state.

    Raises ``NotFoundError`` when nothing exists there and ``HandleIOError``
    for any other stat failure.
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise NotFoundError(f"no such file or directory: {path}", path) from exc
    except OSError as exc:
        raise wrap_os_error(exc, "stat", path) from exc
    return HandleState.from_stat(path, st)


def list_child_states(directory: str) -> list[HandleState]:
    """Return state for each immediate entry of ``directory``.

    Metadata comes from the ``os.scandir`` entries themselves. Dangling
    symlinks are described by their own link metadata. Order is whatever the
    OS yields.
    """
    states: list[HandleState] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    st = entry.stat()
                except FileNotFoundError:
                    st = entry.stat(follow_symlinks=False)
                states.append(HandleState.from_stat(join_path(directory, entry.name), st, name=entry.name))
    except OSError as exc:
        raise wrap_os_error(exc, "list", directory) from exc
    return states


__all__ = [
    "stat_state",
    "list_child_states",
]
