"""Exception hierarchy for file-handle operations.

Every mutator raises a ``FileHandleError`` subclass; accessors never raise.
OS failures are translated in one place, ``wrap_os_error``.
"""

from __future__ import annotations

import errno as errno_codes


class FileHandleError(Exception):
    """Base class for all handle errors. ``path`` names the offending path."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(FileHandleError):
    """Path did not exist when a handle was opened or refreshed."""


class InvalidatedError(FileHandleError):
    """Operation attempted on a handle that was removed or invalidated."""

    def __init__(self, message: str = "handle has been invalidated and cannot be used", path: str = "") -> None:
        super().__init__(message, path)


class NotAFileError(FileHandleError):
    """Operation needs a regular file but the handle is a directory."""


class NotADirError(FileHandleError):
    """Operation needs a directory but the handle is a file."""


class DestinationNotDirectoryError(FileHandleError):
    """Directory paste target already exists and is not a directory."""


class InvalidNameError(FileHandleError, ValueError):
    """Rejected leaf name or relative sub-path."""


class StaleHandleError(FileHandleError):
    """Rename/move took effect on disk but the new location could not be stat'ed.

    The handle that attempted the operation is invalidated; ``path`` is the
    location the entry was moved to.
    """


class HandleIOError(FileHandleError):
    """Underlying read/write/rename/mkdir/remove failure.

    The OS error is kept as ``__cause__``.
    """

    @property
    def errno(self) -> int | None:
        cause = self.__cause__
        if isinstance(cause, OSError):
            return cause.errno
        return None


class CrossDeviceError(HandleIOError):
    """Rename across file systems, surfaced from the OS as ``EXDEV``."""


def wrap_os_error(exc: OSError, action: str, path: str) -> FileHandleError:
    """Translate an ``OSError`` into the matching handle error.

    The caller raises the result ``from exc`` so the OS error stays attached.
    """
    detail = exc.strerror or str(exc)
    message = f"{action} {path}: {detail}"
    if exc.errno == errno_codes.EXDEV:
        return CrossDeviceError(message, path)
    return HandleIOError(message, path)


__all__ = [
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
    "wrap_os_error",
]
