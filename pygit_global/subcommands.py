"""Subcommand implementations and the dispatch function run()."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from functools import partial

from pygit_global.errors import BadSubcommandError, MissingArgumentError, UnexpectedArgumentError
from pygit_global.inventory import Inventory
from pygit_global.models import GlobalConfig, StatusScope
from pygit_global.output import NullOutputHandler
from pygit_global.parallel import default_parallelism, run_parallel
from pygit_global.protocols import OutputHandler
from pygit_global.report import Report
from pygit_global.repository import get_stash_list, get_status_lines, is_ahead

RESCAN_HINT = "Perhaps you should run `git global scan` again."


def _warn_unopenable(output: OutputHandler, path: str) -> None:
    output.warning(f"Could not open {path} as a git repo. {RESCAN_HINT}")


def _collect_lines(inventory: Inventory, output: OutputHandler, operation: Callable) -> Report:
    """Run a line-producing operation on every repo and gather its lines per repo."""
    repos = inventory.get_repositories()
    report = Report(repos)
    report.pad_repo_output()
    for path, lines in run_parallel(repos, default_parallelism(), operation):
        if lines is None:
            _warn_unopenable(output, path)
            continue
        for line in lines:
            report.add_repo_message(path, line)
    return report


def status(inventory: Inventory, output: OutputHandler) -> Report:
    """Shows status (`git status -s`) for repos with any changes."""
    operation = partial(get_status_lines, scope=StatusScope.BOTH,
                        include_untracked=inventory.config.show_untracked)
    return _collect_lines(inventory, output, operation)


def staged(inventory: Inventory, output: OutputHandler) -> Report:
    """Shows git index status for repos with staged changes."""
    operation = partial(get_status_lines, scope=StatusScope.INDEX,
                        include_untracked=inventory.config.show_untracked)
    return _collect_lines(inventory, output, operation)


def unstaged(inventory: Inventory, output: OutputHandler) -> Report:
    """Shows working dir status for repos with unstaged changes."""
    operation = partial(get_status_lines, scope=StatusScope.WORKDIR,
                        include_untracked=inventory.config.show_untracked)
    return _collect_lines(inventory, output, operation)


def stashed(inventory: Inventory, output: OutputHandler) -> Report:
    """Shows repos with stashed changes."""
    return _collect_lines(inventory, output, get_stash_list)


def ahead(inventory: Inventory, output: OutputHandler) -> Report:
    """Shows repos with changes that are not pushed to a remote."""
    repos = inventory.get_repositories()
    report = Report(repos)
    for path, result in run_parallel(repos, default_parallelism(), is_ahead):
        if result is None:
            _warn_unopenable(output, path)
        elif result:
            report.add_repo_message(path, "")
    return report


def list_repos(inventory: Inventory, output: OutputHandler) -> Report:
    """Lists all known repos."""
    repos = inventory.get_repositories()
    report = Report(repos)
    for repo in repos:
        report.add_message(repo.path)
    return report


def scan(inventory: Inventory, output: OutputHandler) -> Report:
    """Updates cache of known repos."""
    repos = inventory.rescan()
    report = Report(repos)
    report.add_message(f"Found {len(repos)} repos. Use `git global list` to show them.")
    return report


def format_age(age: timedelta) -> str:
    """Render a duration as days, hours, minutes and seconds."""
    total = int(age.total_seconds())
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    mins, secs = divmod(rem, 60)
    return f"{days}d, {hours}h, {mins}m, {secs}s"


def info(inventory: Inventory, output: OutputHandler) -> Report:
    """Shows meta-information about git-global."""
    from pygit_global import __version__

    config = inventory.config
    repos = inventory.get_repositories()
    report = Report(repos)
    title = f"git-global {__version__}"
    report.add_message(title)
    report.add_message("=" * len(title))
    report.add_message(f"Number of repos: {len(repos)}")
    report.add_message(f"Base directory: {config.basedir}")
    report.add_message(f"Cache file: {config.cache_path}")
    age = inventory.cache.age()
    if age is not None:
        report.add_message(f"Cache file age: {format_age(age)}")
    report.add_message(f"Ignore file: {config.ignore_path}")
    report.add_message(f"Ignored repos: {len(inventory.ignored_repositories())}")
    report.add_message("Ignored patterns:")
    for pattern in config.ignored_patterns:
        report.add_message(f"  {pattern}")
    report.add_message(f"Follow symlinks: {str(config.follow_symlinks).lower()}")
    report.add_message(f"Same filesystem: {str(config.same_filesystem).lower()}")
    report.add_message(f"Default command: {config.default_cmd}")
    report.add_message(f"Show untracked: {str(config.show_untracked).lower()}")
    return report


def ignored(inventory: Inventory, output: OutputHandler) -> Report:
    """Lists all ignored repos."""
    paths = inventory.ignored_repositories()
    report = Report()
    if not paths:
        report.add_message("No repos are currently ignored.")
    else:
        report.add_message(f"Ignored repos ({len(paths)}):")
        for path in paths:
            report.add_message(f"  {path}")
    return report


def ignore(inventory: Inventory, output: OutputHandler, path: str) -> Report:
    """Ignores a repo, removing it from the list."""
    canonical = inventory.ignore_repository(path)
    report = Report()
    report.add_message(f"Ignoring {canonical}; it will no longer be listed.")
    return report


SUBCOMMANDS: dict[str, Callable[..., Report]] = {
    'ahead': ahead,
    'ignore': ignore,
    'ignored': ignored,
    'info': info,
    'list': list_repos,
    'scan': scan,
    'staged': staged,
    'stashed': stashed,
    'status': status,
    'unstaged': unstaged,
}

# Subcommands that take one positional argument, and its name.
ARGUMENTS = {'ignore': 'path'}


def get_subcommands() -> list[tuple[str, str]]:
    """Return (name, description) for every subcommand, sorted by name."""
    return [(name, func.__doc__.strip()) for name, func in sorted(SUBCOMMANDS.items())]


def run(command: str | None, config: GlobalConfig, arg: str | None = None,
        output: OutputHandler = None) -> Report:
    """Run a subcommand and return its Report.

    If command is None, config.default_cmd runs instead.
    """
    output = output or NullOutputHandler()
    command = command or config.default_cmd
    func = SUBCOMMANDS.get(command)
    if func is None:
        raise BadSubcommandError(command)

    inventory = Inventory(config, output)
    if command in ARGUMENTS:
        if not arg:
            raise MissingArgumentError(command, ARGUMENTS[command])
        return func(inventory, output, arg)
    if arg:
        raise UnexpectedArgumentError(command, arg)
    return func(inventory, output)
