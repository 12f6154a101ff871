"""Copy engine behind ``FileHandle.paste``.

Files are copied whole. Directory trees are copied best-effort: a failure on
one file is logged and recorded in the ``CopyReport`` while the walk goes on.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat as stat_codes
from pathlib import Path

from ..errors import DestinationNotDirectoryError, wrap_os_error
from ..paths import join_path, normalize_path, parent_path, relative_to_root
from .types import CopyOutcome, CopyReport

logger = logging.getLogger(__name__)

DEFAULT_DIR_MODE = 0o777


def paste_file(source: str, destination: str) -> CopyReport:
    """Write the full contents of ``source`` to ``destination``, overwriting it."""
    try:
        data = Path(source).read_bytes()
    except OSError as exc:
        raise wrap_os_error(exc, "read", source) from exc
    try:
        Path(destination).write_bytes(data)
    except OSError as exc:
        raise wrap_os_error(exc, "write", destination) from exc
    logger.debug("copied %s -> %s (%d bytes)", source, destination, len(data))
    return CopyReport(source=source, destination=destination, outcomes=[CopyOutcome(relative_path="")])


def _segment_prefixes(path: str) -> list[str]:
    """Every ancestor-or-self of ``path`` from the top down."""
    prefixes: list[str] = []
    current = ""
    for index, part in enumerate(path.split("/")):
        if index == 0:
            current = part or "/"
        elif not part:
            continue
        else:
            current = join_path(current, part)
        prefixes.append(current)
    return prefixes


def ensure_directories(path: str, mode: int = DEFAULT_DIR_MODE) -> None:
    """Create each missing directory along ``path`` one segment at a time.

    Existing directories are fine; anything else that blocks creation raises
    the ``OSError``.
    """
    if not path:
        return
    for prefix in _segment_prefixes(path):
        if os.path.isdir(prefix):
            continue
        try:
            os.mkdir(prefix, mode)
        except FileExistsError:
            if not os.path.isdir(prefix):
                raise


def _prepare_destination_root(destination: str, mode: int) -> None:
    try:
        st = os.stat(destination)
    except FileNotFoundError:
        try:
            os.makedirs(destination, mode, exist_ok=True)
        except OSError as exc:
            raise wrap_os_error(exc, "mkdir", destination) from exc
        return
    except OSError as exc:
        raise wrap_os_error(exc, "stat", destination) from exc
    if not stat_codes.S_ISDIR(st.st_mode):
        raise DestinationNotDirectoryError(f"destination exists and is not a directory: {destination}", destination)


def _collect_files(source: str, destination: str) -> tuple[list[str], list[OSError]]:
    """List every file under ``source`` depth-first, in name order.

    The destination directory is pruned from the walk so pasting into the
    source's own subtree terminates.
    """
    files: list[str] = []
    walk_errors: list[OSError] = []
    resolved_destination = os.path.realpath(destination)
    for dirpath, dirnames, filenames in os.walk(source, onerror=walk_errors.append):
        dirnames[:] = sorted(
            name for name in dirnames if os.path.realpath(os.path.join(dirpath, name)) != resolved_destination
        )
        normalized_dir = normalize_path(dirpath)
        for name in sorted(filenames):
            files.append(join_path(normalized_dir, name))
    return files, walk_errors


def _relative_or_raw(path: str, root: str) -> str:
    try:
        return relative_to_root(path, root)
    except ValueError:
        return path


def paste_tree(source: str, destination: str, dir_mode: int = DEFAULT_DIR_MODE) -> CopyReport:
    """Copy every file under ``source`` to the same relative path under ``destination``.

    Raises only for the destination root itself (``DestinationNotDirectoryError``
    or ``HandleIOError``). Per-file and per-directory failures land in the
    returned report.
    """
    _prepare_destination_root(destination, dir_mode)
    files, walk_errors = _collect_files(source, destination)
    report = CopyReport(source=source, destination=destination)

    for exc in walk_errors:
        failed_dir = normalize_path(exc.filename) if exc.filename else source
        relative = _relative_or_raw(failed_dir, source)
        logger.warning("could not list %s while copying to %s: %s", failed_dir, destination, exc)
        report.outcomes.append(CopyOutcome(relative_path=relative, error=exc))

    for file_path in files:
        relative = _relative_or_raw(file_path, source)
        target = join_path(destination, relative)
        try:
            ensure_directories(parent_path(target), dir_mode)
            shutil.copyfile(file_path, target)
        except OSError as exc:
            logger.warning("failed to copy %s -> %s: %s", file_path, target, exc)
            report.outcomes.append(CopyOutcome(relative_path=relative, error=exc))
            continue
        report.outcomes.append(CopyOutcome(relative_path=relative))

    logger.debug(
        "pasted %s -> %s: %d copied, %d failed",
        source,
        destination,
        len(report.copied),
        len(report.failed),
    )
    return report


__all__ = [
    "DEFAULT_DIR_MODE",
    "paste_file",
    "paste_tree",
    "ensure_directories",
]
