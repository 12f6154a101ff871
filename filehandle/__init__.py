"""Public package surface for filehandle.

Exports ``FileHandle`` and its error types. ``main`` runs the CLI.
"""

from __future__ import annotations

from .errors import (
    CrossDeviceError,
    DestinationNotDirectoryError,
    FileHandleError,
    HandleIOError,
    InvalidatedError,
    InvalidNameError,
    NotADirError,
    NotAFileError,
    NotFoundError,
    StaleHandleError,
)
from .handle import CopyOutcome, CopyReport, FileHandle, FileKind, open_handle


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = [
    "FileHandle",
    "FileKind",
    "CopyOutcome",
    "CopyReport",
    "open_handle",
    "FileHandleError",
    "NotFoundError",
    "InvalidatedError",
    "NotAFileError",
    "NotADirError",
    "DestinationNotDirectoryError",
    "InvalidNameError",
    "StaleHandleError",
    "HandleIOError",
    "CrossDeviceError",
    "main",
]
