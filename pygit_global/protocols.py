"""Protocols for dependency injection."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pygit_global.models import StatusScope


class RepositoryHandle(Protocol):
    """Protocol for the read-only git queries git-global runs per repository"""

    def status_lines(self, scope: StatusScope = StatusScope.BOTH,
                     include_untracked: bool = True) -> list[str]: ...
    def stash_entries(self) -> list[str]: ...
    def is_ahead_of_remote(self) -> bool: ...
    def close(self) -> None: ...

    @property
    def path(self) -> Path: ...


class OutputHandler(Protocol):
    """Protocol for handling output"""

    def info(self, message: str, indent: int = 0) -> None: ...
    def warning(self, message: str, indent: int = 0) -> None: ...
    def error(self, message: str, indent: int = 0) -> None: ...
    def debug(self, message: str) -> None: ...
