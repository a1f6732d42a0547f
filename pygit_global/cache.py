"""Repository cache: a flat text file tagged with a configuration fingerprint.

The first line of the cache file is the fingerprint of the configuration
that produced it; every following line is one repository path, in sorted
order. A cache written under different settings is rebuilt, and entries
that have disappeared or become ignored are dropped when read.
"""

from __future__ import annotations

import contextlib
import dataclasses
import hashlib
import json
import logging
import os
import tempfile
import time
from collections.abc import Iterable
from datetime import timedelta
from pathlib import Path

from pygit_global.errors import CacheError
from pygit_global.matcher import matches_ignored
from pygit_global.models import GlobalConfig, Repository

logger = logging.getLogger(__name__)


def fingerprint(config: GlobalConfig) -> int:
    """Return a deterministic 64-bit hash over every field of config.

    Stable across processes, but not promised to be stable across
    releases of git-global.
    """
    payload = json.dumps(dataclasses.asdict(config), sort_keys=True, default=str)
    digest = hashlib.sha256(payload.encode('utf-8')).digest()
    return int.from_bytes(digest[:8], 'big')


class CacheStore:
    """Reads and writes the list of known repositories"""

    def __init__(self, cache_file: Path):
        """Create a store backed by cache_file (which need not exist yet)."""
        self.cache_file = Path(cache_file)

    def exists(self) -> bool:
        """Return True if the cache file is present."""
        return self.cache_file.is_file()

    def is_valid(self, config: GlobalConfig) -> bool:
        """Return True if the cache exists and was written under this exact config."""
        try:
            with open(self.cache_file, 'rb') as f:
                first_line = f.readline().decode('utf-8').strip()
        except (OSError, UnicodeDecodeError):
            return False
        try:
            return int(first_line) == fingerprint(config)
        except ValueError:
            return False

    def write(self, config: GlobalConfig, repos: Iterable[Repository]) -> None:
        """Replace the cache with the fingerprint of config and the given repositories.

        The file is written to a temporary sibling first and moved into
        place, so readers never observe a partial cache. Raises CacheError
        on any I/O failure.
        """
        directory = self.cache_file.parent
        lines = [str(fingerprint(config))] + [repo.path for repo in repos]
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix='.repos-', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write('\n'.join(lines) + '\n')
                os.replace(tmp_name, self.cache_file)
            except OSError:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise CacheError(f"Could not write cache file {self.cache_file}: {e}") from e
        logger.debug("Wrote %d repositories to %s", len(lines) - 1, self.cache_file)

    def read(self, ignored_paths: Iterable[str] = ()) -> list[Repository]:
        """Return cached repositories that still exist and are not ignored.

        Lines that are not valid UTF-8 are dropped like missing entries.
        """
        ignored = list(ignored_paths)
        repos = []
        try:
            with open(self.cache_file, 'rb') as f:
                f.readline()  # fingerprint
                for raw in f:
                    try:
                        path = raw.decode('utf-8').rstrip('\r\n')
                    except UnicodeDecodeError:
                        logger.debug("Dropping undecodable cache entry %r", raw)
                        continue
                    if not path:
                        continue
                    if not os.path.exists(path):
                        logger.debug("Dropping missing repository %s", path)
                        continue
                    if matches_ignored(path, ignored):
                        logger.debug("Dropping ignored repository %s", path)
                        continue
                    repos.append(Repository(path))
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.debug("Could not read cache file %s: %s", self.cache_file, e)
            return []
        return repos

    def clear(self) -> None:
        """Delete the cache file so the next lookup rescans."""
        try:
            self.cache_file.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CacheError(f"Could not remove cache file {self.cache_file}: {e}") from e

    def age(self) -> timedelta | None:
        """Time since the cache was last written, or None if there is no cache."""
        try:
            mtime = self.cache_file.stat().st_mtime
        except OSError:
            return None
        return timedelta(seconds=max(0.0, time.time() - mtime))

