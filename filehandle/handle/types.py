"""Domain datatypes for handle state and copy results."""

from __future__ import annotations

import enum
import os
import stat as stat_codes
from dataclasses import dataclass, field

from ..paths import leaf_name


class FileKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class HandleState:
    """Metadata cached by a live handle.

    ``size`` is ``0`` for directories. A dead handle holds no state at all.
    """

    path: str
    kind: FileKind
    size: int
    name: str

    @property
    def is_dir(self) -> bool:
        return self.kind is FileKind.DIRECTORY

    @classmethod
    def from_stat(cls, path: str, st: os.stat_result, name: str | None = None) -> HandleState:
        """Build state for normalized ``path`` from a stat result."""
        if stat_codes.S_ISDIR(st.st_mode):
            kind = FileKind.DIRECTORY
            size = 0
        else:
            kind = FileKind.FILE
            size = int(st.st_size)
        return cls(path=path, kind=kind, size=size, name=name if name is not None else leaf_name(path))


@dataclass(frozen=True)
class CopyOutcome:
    """Result of copying one file, keyed by its path relative to the paste root."""

    relative_path: str
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CopyReport:
    """Outcomes of a paste.

    Directories that could not be listed come first, then one entry per file
    in traversal order.
    """

    source: str
    destination: str
    outcomes: list[CopyOutcome] = field(default_factory=list)

    @property
    def copied(self) -> list[str]:
        return [outcome.relative_path for outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> list[CopyOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


__all__ = [
    "FileKind",
    "HandleState",
    "CopyOutcome",
    "CopyReport",
]
