"""Concrete GitPython-based repository queries."""

from __future__ import annotations

import logging
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from pygit_global.models import Repository, StatusScope

logger = logging.getLogger(__name__)

# Porcelain status codes that carry a second path (the rename/copy source).
_TWO_PATH_CODES = frozenset('RC')


class GitPythonRepository:
    """Read-only queries against one repository, implemented with GitPython"""

    def __init__(self, repo_path: Path):
        """Open a git repository at the given path."""
        self._path = Path(repo_path)
        self._repo = Repo(repo_path)

    def close(self) -> None:
        """Release underlying git resources."""
        self._repo.close()

    @property
    def path(self) -> Path:
        """Absolute path to the repository root."""
        return self._path

    def _porcelain_entries(self, include_untracked: bool) -> list[tuple[str, str]]:
        """Return (XY, path) pairs from `git status --porcelain=v1 -z`."""
        untracked = '--untracked-files=normal' if include_untracked else '--untracked-files=no'
        raw = self._repo.git.status('--porcelain=v1', '-z', '--ignored=no', untracked)
        tokens = raw.split('\0')
        entries = []
        i = 0
        while i < len(tokens):
            token = tokens[i]
            i += 1
            if len(token) < 4:
                continue
            code, path = token[:2], token[3:]
            if code[0] in _TWO_PATH_CODES or code[1] in _TWO_PATH_CODES:
                i += 1  # skip the rename/copy source
            entries.append((code, path))
        return entries

    def status_lines(self, scope: StatusScope = StatusScope.BOTH,
                     include_untracked: bool = True) -> list[str]:
        """Return short-format status lines ("XY path") for the given scope."""
        lines = []
        for code, path in self._porcelain_entries(include_untracked):
            index, worktree = code[0], code[1]
            if scope is StatusScope.INDEX:
                if index in ' ?!':
                    continue
                lines.append(f"{index}  {path}")
            elif scope is StatusScope.WORKDIR:
                if worktree == ' ':
                    continue
                if code == '??':
                    lines.append(f"?? {path}")
                else:
                    lines.append(f" {worktree} {path}")
            else:
                lines.append(f"{code} {path}")
        return lines

    def stash_entries(self) -> list[str]:
        """Return `git stash list` lines, newest first."""
        output = self._repo.git.stash('list')
        return [line for line in output.splitlines() if line]

    def is_ahead_of_remote(self) -> bool:
        """Return True if some local branch tip is not reachable from any remote branch."""
        if not self._repo.heads:
            return False
        count = self._repo.git.rev_list('--count', '--branches', '--not', '--remotes')
        return int(count or 0) > 0


def open_repository(path: str | Path) -> GitPythonRepository | None:
    """Open the repository at path, or return None if it is not a usable git repository."""
    try:
        return GitPythonRepository(Path(path))
    except (InvalidGitRepositoryError, NoSuchPathError):
        return None


def is_valid_repository(path: str | Path) -> bool:
    """Return True if GitPython can open path as a repository."""
    handle = open_repository(path)
    if handle is None:
        return False
    handle.close()
    return True


def get_status_lines(repo: Repository, scope: StatusScope = StatusScope.BOTH,
                     include_untracked: bool = True) -> list[str] | None:
    """Status lines for repo, or None if it cannot be opened or queried."""
    handle = open_repository(repo.path)
    if handle is None:
        return None
    try:
        return handle.status_lines(scope, include_untracked)
    except GitCommandError as e:
        logger.debug("git status failed in %s: %s", repo, e)
        return None
    finally:
        handle.close()


def get_stash_list(repo: Repository) -> list[str] | None:
    """Stash entries for repo, or None if it cannot be opened or queried."""
    handle = open_repository(repo.path)
    if handle is None:
        return None
    try:
        return handle.stash_entries()
    except GitCommandError as e:
        logger.debug("git stash list failed in %s: %s", repo, e)
        return None
    finally:
        handle.close()


def is_ahead(repo: Repository) -> bool | None:
    """Whether repo has unpushed commits, or None if it cannot be opened or queried."""
    handle = open_repository(repo.path)
    if handle is None:
        return None
    try:
        return handle.is_ahead_of_remote()
    except GitCommandError as e:
        logger.debug("git rev-list failed in %s: %s", repo, e)
        return None
    finally:
        handle.close()
