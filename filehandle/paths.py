"""Slash-normalized path string helpers.

Handles keep paths as plain strings with ``/`` separators regardless of the
host convention; these helpers are the only place that string shape is built.
"""

from __future__ import annotations

import os

from .errors import InvalidNameError


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Rewrite backslashes to ``/`` and drop trailing separators (root excepted)."""
    text = os.fspath(path).replace("\\", "/")
    stripped = text.rstrip("/")
    if not stripped and text:
        return "/"
    return stripped


def join_path(base: str, name: str) -> str:
    """Join ``name`` under ``base`` without doubling separators."""
    if not base:
        return name
    if base.endswith("/"):
        return base + name
    return f"{base}/{name}"


def parent_path(path: str) -> str:
    """Return everything before the last separator.

    ``""`` for bare names and ``"/"`` for entries directly under the root.
    """
    index = path.rfind("/")
    if index < 0:
        return ""
    if index == 0:
        return "/"
    return path[:index]


def leaf_name(path: str) -> str:
    """Return the final path segment (``"/"`` for the root itself)."""
    if path == "/":
        return path
    return path.rsplit("/", 1)[-1]


def split_name(name: str) -> tuple[str, str]:
    """Split a leaf name into ``(prefix, suffix)``.

    ``suffix`` runs from the last ``.`` to the end. A dot at position 0 does
    not start a suffix, so ``.env`` yields ``(".env", "")``. An empty prefix
    falls back to the whole name.
    """
    index = name.rfind(".")
    suffix = name[index:] if index > 0 else ""
    prefix = name[: len(name) - len(suffix)]
    return (prefix or name), suffix


def validate_leaf_name(name: str) -> str:
    """Return normalized ``name`` or raise ``InvalidNameError`` if it is not a single segment."""
    normalized = str(name).replace("\\", "/")
    if not normalized or "/" in normalized or normalized in (".", ".."):
        raise InvalidNameError(f"invalid file name: {name!r}", normalized)
    return normalized


def validate_relative_subpath(name: str) -> str:
    """Return normalized relative ``name`` or raise if it is absolute or climbs with ``..``."""
    normalized = normalize_path(str(name))
    if not normalized or normalized.startswith("/"):
        raise InvalidNameError(f"expected a relative sub-path: {name!r}", normalized)
    if any(segment == ".." for segment in normalized.split("/")):
        raise InvalidNameError(f"sub-path may not contain '..': {name!r}", normalized)
    return normalized


def relative_to_root(path: str, root: str) -> str:
    """Strip ``root`` from the front of ``path`` (both normalized).

    Only the leading occurrence is substituted; the remainder never starts with
    ``/``. Returns ``""`` when ``path`` is ``root`` itself.
    """
    if path == root:
        return ""
    prefix = root if root.endswith("/") else root + "/"
    if not path.startswith(prefix):
        raise ValueError(f"{path!r} is not under {root!r}")
    return path[len(prefix):]


def is_within(path: str, root: str) -> bool:
    """Return whether normalized ``path`` is ``root`` or lies beneath it."""
    if path == root:
        return True
    prefix = root if root.endswith("/") else root + "/"
    return path.startswith(prefix)


__all__ = [
    "normalize_path",
    "join_path",
    "parent_path",
    "leaf_name",
    "split_name",
    "validate_leaf_name",
    "validate_relative_subpath",
    "relative_to_root",
    "is_within",
]
