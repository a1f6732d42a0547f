"""Path matching against ignore patterns and ignored repositories."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path


def canonicalize(path: str | os.PathLike) -> str | None:
    """Resolve symlinks in path; None if it does not exist or cannot be resolved."""
    try:
        return str(Path(path).resolve(strict=True))
    except (OSError, RuntimeError):
        return None


def matches_pattern(path: str, patterns: Iterable[str]) -> bool:
    """Return True if any non-empty pattern is a substring of path."""
    return any(pattern and pattern in path for pattern in patterns)


def _under(path: str, entry: str) -> bool:
    if path == entry:
        return True
    prefix = entry if entry.endswith(os.sep) else entry + os.sep
    return path.startswith(prefix)


def matches_ignored(path: str, ignored_paths: Iterable[str]) -> bool:
    """Return True if path is, or lies inside, an ignored repository.

    Both the literal path and its symlink-resolved form are checked, so a
    symlink pointing into an ignored tree is ignored too. Paths that cannot
    be resolved are only compared literally.
    """
    ignored = [entry for entry in ignored_paths if entry]
    if not ignored:
        return False
    if any(_under(path, entry) for entry in ignored):
        return True
    real = canonicalize(path)
    if real is None or real == path:
        return False
    return any(_under(real, entry) for entry in ignored)


def is_excluded(path: str, ignore_patterns: Iterable[str], ignored_paths: Iterable[str]) -> bool:
    """Return True if path matches an ignore pattern or an ignored repository."""
    return matches_pattern(path, ignore_patterns) or matches_ignored(path, ignored_paths)
