"""Domain models: repositories, configuration, and status scopes."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields
from enum import Enum, auto
from pathlib import Path

APP_NAME = 'git-global'
CACHE_FILENAME = 'repos.txt'
IGNORE_FILENAME = 'ignored.txt'


class StatusScope(Enum):
    """Which side of the short status to report"""
    INDEX = auto()
    WORKDIR = auto()
    BOTH = auto()


@dataclass(frozen=True, order=True)
class Repository:
    """A git repository, identified by the full path to its working tree"""
    path: str

    @property
    def name(self) -> str:
        """Final component of the repository path."""
        return os.path.basename(self.path.rstrip(os.sep)) or self.path

    def __str__(self) -> str:
        return self.path


def default_cache_dir() -> Path:
    """Return the per-user cache directory for git-global on this platform."""
    if sys.platform == 'win32':
        base = os.environ.get('LOCALAPPDATA')
        root = Path(base) if base else Path.home() / 'AppData' / 'Local'
    elif sys.platform == 'darwin':
        root = Path.home() / 'Library' / 'Caches'
    else:
        base = os.environ.get('XDG_CACHE_HOME')
        root = Path(base) if base else Path.home() / '.cache'
    return root / APP_NAME


@dataclass(frozen=True)
class GlobalConfig:
    """Settings for one invocation; every field feeds the cache fingerprint"""
    basedir: Path = field(default_factory=Path.home)
    follow_symlinks: bool = True
    same_filesystem: bool = True
    ignored_patterns: tuple[str, ...] = ()
    default_cmd: str = 'status'
    verbose: bool = False
    show_untracked: bool = True
    cache_file: Path | None = None
    ignore_file: Path | None = None

    @property
    def cache_path(self) -> Path:
        """Effective location of the repository cache file."""
        if self.cache_file is not None:
            return Path(self.cache_file)
        return default_cache_dir() / CACHE_FILENAME

    @property
    def ignore_path(self) -> Path:
        """Effective location of the ignore-list file, next to the cache by default."""
        if self.ignore_file is not None:
            return Path(self.ignore_file)
        return self.cache_path.parent / IGNORE_FILENAME

    def with_updates(self, **kwargs) -> GlobalConfig:
        """Return a new GlobalConfig with the given fields replaced."""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current.update(kwargs)
        return GlobalConfig(**current)
