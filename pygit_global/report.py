"""Report: overall and per-repository messages produced by a subcommand."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from typing import Any, TextIO

from pygit_global.models import Repository


class Report:
    """Collects messages about the whole run and about individual repositories"""

    def __init__(self, repos: Iterable[Repository] = ()):
        """Create an empty report covering the given repositories (in display order)."""
        self.repos = list(repos)
        self.messages: list[str] = []
        self.repo_messages: dict[str, list[str]] = {repo.path: [] for repo in self.repos}
        self._pad_repo_output = False

    def pad_repo_output(self) -> None:
        """Print a blank line after each repository's messages."""
        self._pad_repo_output = True

    def add_message(self, message: str) -> None:
        """Add a message that applies to the overall operation."""
        self.messages.append(message)

    def add_repo_message(self, repo: Repository | str, line: str) -> None:
        """Add a message for a repository; repositories not in the report are ignored.

        An empty line marks the repository as reported without adding text.
        """
        path = repo.path if isinstance(repo, Repository) else repo
        if path in self.repo_messages:
            self.repo_messages[path].append(line)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            'error': False,
            'messages': list(self.messages),
            'repo_messages': {
                repo.path: [line for line in self.repo_messages[repo.path] if line]
                for repo in self.repos
                if self.repo_messages[repo.path]
            },
        }

    def print(self, stream: TextIO | None = None) -> None:
        """Write the report as text."""
        out = stream or sys.stdout
        for message in self.messages:
            out.write(f"{message}\n")
        for repo in self.repos:
            lines = self.repo_messages[repo.path]
            if not lines:
                continue
            out.write(f"{repo.path}\n")
            for line in lines:
                if line:
                    out.write(f"{line}\n")
            if self._pad_repo_output:
                out.write("\n")

    def print_json(self, stream: TextIO | None = None) -> None:
        """Write the report as indented JSON."""
        out = stream or sys.stdout
        out.write(json.dumps(self.to_dict(), indent=2) + "\n")
