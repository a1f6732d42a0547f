"""Repository scanner: finds git repos under the configured base directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from tqdm import tqdm

from pygit_global.matcher import is_excluded
from pygit_global.models import GlobalConfig, Repository
from pygit_global.output import NullOutputHandler
from pygit_global.protocols import OutputHandler
from pygit_global.repository import is_valid_repository

GIT_DIR = '.git'

logger = logging.getLogger(__name__)


def _is_representable(path: str) -> bool:
    """Return True if path can be written to the UTF-8 cache file."""
    try:
        path.encode('utf-8')
    except UnicodeEncodeError:
        return False
    return True


class RepositoryScanner:
    """Responsible for finding git repositories"""

    def __init__(self, config: GlobalConfig, output: OutputHandler = None):
        """Create a scanner for the given config; progress goes to output."""
        self.config = config
        self.output = output or NullOutputHandler()

    @property
    def root(self) -> str:
        """Absolute, user-expanded scan root."""
        return os.path.abspath(os.path.expanduser(str(self.config.basedir)))

    def find_repositories(self, ignored_paths: Iterable[str] = ()) -> list[Repository]:
        """Walk the scan root and return every repository found, by canonical path, sorted."""
        ignored = list(ignored_paths)
        root = self.root
        self.output.info(f"Scanning for git repos under {root}; this may take a while...")

        repos: list[Repository] = []
        if self._should_exclude(root, ignored):
            return repos
        try:
            root_dev = os.stat(root).st_dev
        except OSError:
            logger.debug("Scan root %s is not accessible", root)
            return repos

        seen_real_paths: set[str] = {os.path.realpath(root)}
        found: set[str] = set()
        with tqdm(desc="Scanning", unit=" repos", disable=not self.config.verbose,
                  dynamic_ncols=True, leave=False) as pbar:
            for dirpath, dirnames, _filenames in os.walk(root, followlinks=self.config.follow_symlinks):
                if GIT_DIR in dirnames:
                    dirnames.remove(GIT_DIR)
                    canonical = os.path.realpath(dirpath)
                    if canonical not in found and self._is_repository(canonical):
                        found.add(canonical)
                        repos.append(Repository(canonical))
                        pbar.update(1)
                if self.config.verbose:
                    pbar.set_postfix_str(dirpath, refresh=False)

                # sort before filtering; the first alias of a real directory claims it
                dirnames[:] = [
                    name for name in sorted(dirnames)
                    if self._should_descend(os.path.join(dirpath, name), ignored, root_dev, seen_real_paths)
                ]

        repos.sort()
        logger.debug("Found %d repositories under %s", len(repos), root)
        return repos

    def _is_repository(self, dirpath: str) -> bool:
        """Return True if dirpath/.git is a real metadata directory of a usable repository."""
        if not _is_representable(dirpath):
            return False
        if not os.path.isdir(os.path.join(dirpath, GIT_DIR)):
            return False
        return is_valid_repository(dirpath)

    def _should_descend(self, path: str, ignored: list[str], root_dev: int,
                        seen_real_paths: set[str]) -> bool:
        """Decide whether the walk enters path; unreadable entries are skipped."""
        if not _is_representable(path) or self._should_exclude(path, ignored):
            return False
        try:
            st = os.stat(path) if self.config.follow_symlinks else os.lstat(path)
        except OSError:
            return False
        if self.config.same_filesystem and st.st_dev != root_dev:
            return False
        if self.config.follow_symlinks:
            real_path = os.path.realpath(path)
            if real_path in seen_real_paths:
                return False
            seen_real_paths.add(real_path)
        return True

    def _should_exclude(self, path: str, ignored: list[str]) -> bool:
        """Return True if the path matches an ignore pattern or an ignored repository."""
        return is_excluded(path, self.config.ignored_patterns, ignored)
