"""Shared fixtures: real git repositories created with the git CLI."""

import subprocess
from pathlib import Path

import pytest

from pygit_global import GlobalConfig


def _git(cwd: Path, *args: str) -> str:
    """Run a git command and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def _init_repo(path: Path) -> Path:
    """git init a working tree at path with a local identity."""
    path.mkdir(parents=True, exist_ok=True)
    _git(path, "init", "-q", "-b", "main")
    _git(path, "config", "user.email", "test@test.com")
    _git(path, "config", "user.name", "Test")
    _git(path, "config", "commit.gpgsign", "false")
    return path


def _commit_file(repo: Path, filename: str, content: str, message: str) -> str:
    """Create/overwrite a file and commit it. Returns the commit hash."""
    filepath = repo / filename
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(content)
    _git(repo, "add", filename)
    _git(repo, "commit", "-q", "-m", message)
    return _git(repo, "rev-parse", "HEAD")


@pytest.fixture
def git():
    """The git CLI helper: git(cwd, *args) -> stdout."""
    return _git


@pytest.fixture
def init_repo():
    """Helper that initializes an empty repository at a path."""
    return _init_repo


@pytest.fixture
def commit_file():
    """Helper that writes and commits a file."""
    return _commit_file


@pytest.fixture
def make_config(tmp_path: Path):
    """Build a GlobalConfig whose cache and ignore files live under tmp_path."""
    def _make(basedir: Path, **overrides) -> GlobalConfig:
        settings = dict(
            basedir=basedir,
            cache_file=tmp_path / "cache" / "repos.txt",
            ignore_file=tmp_path / "cache" / "ignored.txt",
        )
        settings.update(overrides)
        return GlobalConfig(**settings)
    return _make


@pytest.fixture
def three_repos(tmp_path: Path, make_config) -> tuple[Path, GlobalConfig]:
    """A base directory holding three empty repositories a, b and c."""
    base = tmp_path / "base"
    for name in ("a", "b", "c"):
        _init_repo(base / name)
    return base, make_config(base)
