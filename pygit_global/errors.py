"""Error types raised by git-global."""

from __future__ import annotations

from typing import Any


class GitGlobalError(Exception):
    """Base class for every error the CLI reports to the user."""


class BadSubcommandError(GitGlobalError):
    """The requested subcommand does not exist."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Unknown subcommand, {command}.")


class MissingArgumentError(GitGlobalError):
    """A subcommand was run without its required argument."""

    def __init__(self, command: str, argument: str):
        self.command = command
        self.argument = argument
        super().__init__(f"{command} requires a {argument} argument.")


class UnexpectedArgumentError(GitGlobalError):
    """A subcommand that takes no argument was given one."""

    def __init__(self, command: str, argument: str):
        self.command = command
        self.argument = argument
        super().__init__(f"{command} does not take an argument (got '{argument}').")


class AlreadyIgnoredError(GitGlobalError):
    """The path is already on the ignore list."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"'{path}' is already ignored.")


class CacheError(GitGlobalError):
    """The cache directory or file could not be created, written or removed."""


class ParallelExecutionError(GitGlobalError):
    """One or more per-repository operations raised instead of returning a result."""

    def __init__(self, results: list[tuple[str, Any]], failures: list[tuple[str, BaseException]]):
        self.results = results
        self.failures = failures
        paths = ', '.join(path for path, _ in failures)
        super().__init__(f"{len(failures)} repository operation(s) failed: {paths}")
