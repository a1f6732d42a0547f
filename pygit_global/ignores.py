"""Ignore list: canonical paths of repositories the user asked to skip."""

from __future__ import annotations

import logging
from pathlib import Path

from pygit_global.errors import AlreadyIgnoredError, CacheError

logger = logging.getLogger(__name__)


class IgnoreList:
    """Append-only list of ignored repository paths, one per line"""

    def __init__(self, ignore_file: Path):
        """Create a list backed by ignore_file (which need not exist yet)."""
        self.ignore_file = Path(ignore_file)

    def load(self) -> list[str]:
        """Return ignored paths in file order, without blanks or duplicates."""
        try:
            text = self.ignore_file.read_text(encoding='utf-8')
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning("Could not read ignore file %s: %s", self.ignore_file, e)
            return []
        return list(dict.fromkeys(line.strip() for line in text.splitlines() if line.strip()))

    def add(self, path: str | Path) -> str:
        """Canonicalize path and append it; returns the stored form.

        Raises AlreadyIgnoredError if it is already on the list.
        """
        canonical = str(Path(path).expanduser().resolve())
        if canonical in self.load():
            raise AlreadyIgnoredError(canonical)
        try:
            self.ignore_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.ignore_file, 'ab+') as f:
                # a hand-edited file may lack its final newline
                end = f.seek(0, 2)
                if end > 0:
                    f.seek(end - 1)
                    if f.read(1) != b'\n':
                        f.write(b'\n')
                f.write((canonical + '\n').encode('utf-8'))
        except OSError as e:
            raise CacheError(f"Could not write ignore file {self.ignore_file}: {e}") from e
        logger.debug("Ignoring %s", canonical)
        return canonical
