"""Stateful file handles and the copy engine behind them.

This package contains:
- handle state and copy-report datatypes
- stat/listing primitives that build handle state
- the best-effort recursive copy used by ``paste``
- ``FileHandle`` itself
"""

from __future__ import annotations

from .types import CopyOutcome, CopyReport, FileKind, HandleState
from .fs import list_child_states, stat_state
from .paste import DEFAULT_DIR_MODE, ensure_directories, paste_file, paste_tree
from .handle import FileHandle, open_handle

__all__ = [
    "CopyOutcome",
    "CopyReport",
    "FileKind",
    "HandleState",
    "list_child_states",
    "stat_state",
    "DEFAULT_DIR_MODE",
    "ensure_directories",
    "paste_file",
    "paste_tree",
    "FileHandle",
    "open_handle",
]
