"""Inventory: the list of known repositories, backed by the cache."""

from __future__ import annotations

from pathlib import Path

from pygit_global.cache import CacheStore
from pygit_global.ignores import IgnoreList
from pygit_global.models import GlobalConfig, Repository
from pygit_global.output import NullOutputHandler
from pygit_global.protocols import OutputHandler
from pygit_global.scanner import RepositoryScanner


class Inventory:
    """Entry point for finding repositories; rescans only when the cache is stale"""

    def __init__(self, config: GlobalConfig, output: OutputHandler = None):
        """Create an inventory for config; scan progress goes to output."""
        self.config = config
        self.output = output or NullOutputHandler()
        self.cache = CacheStore(config.cache_path)
        self.ignore_list = IgnoreList(config.ignore_path)
        self.scanner = RepositoryScanner(config, self.output)

    def get_repositories(self) -> list[Repository]:
        """Return all known repositories, rebuilding the cache first if needed.

        The result always comes from reading the cache back, so missing and
        ignored repositories are filtered the same way whether or not a scan
        just happened.
        """
        ignored = self.ignore_list.load()
        if not self.cache.is_valid(self.config):
            repos = self.scanner.find_repositories(ignored)
            self.cache.write(self.config, repos)
        return self.cache.read(ignored)

    def clear_cache(self) -> None:
        """Forget the cached repositories; the next lookup rescans."""
        self.cache.clear()

    def rescan(self) -> list[Repository]:
        """Clear the cache and scan again."""
        self.clear_cache()
        return self.get_repositories()

    def ignore_repository(self, path: str | Path) -> str:
        """Add path to the ignore list and return its canonical form."""
        return self.ignore_list.add(path)

    def ignored_repositories(self) -> list[str]:
        """Return the canonical paths currently ignored."""
        return self.ignore_list.load()
