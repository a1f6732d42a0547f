"""Configuration: argument parser, settings sources, and config assembly."""

from __future__ import annotations

import argparse
import configparser
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from git import GitConfigParser
from git.config import get_config_path

from pygit_global.models import GlobalConfig

try:
    import tomllib
except ModuleNotFoundError:
    try:
        import tomli as tomllib  # type: ignore[no-redef]
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_CONFIG_FILENAME = '.pygitglobal.toml'
GITCONFIG_SECTION = 'global'

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all git-global flags."""
    # Lazy import to avoid circular dependency with __init__.py
    from pygit_global import __version__
    from pygit_global.subcommands import get_subcommands

    commands = "\n".join(f"  {name:<10} {desc}" for name, desc in get_subcommands())
    parser = argparse.ArgumentParser(
        prog='git-global',
        description="Keep track of all the git repositories on your machine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Subcommands:
{commands}

Examples:
  %(prog)s                      # status of every repo with changes
  %(prog)s scan                 # rebuild the list of known repos
  %(prog)s ignore ~/src/vendor  # stop reporting a repo
        """
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('command', nargs='?', default=None,
                        help='Subcommand to run (default: default-cmd setting, usually status)')
    parser.add_argument('path', nargs='?', default=None,
                        help='Repository path, for the ignore subcommand')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose mode')
    parser.add_argument('-j', '--json', dest='json_output', action='store_true',
                        help='Output subcommand results in JSON')
    untracked = parser.add_mutually_exclusive_group()
    untracked.add_argument('-u', '--untracked', dest='show_untracked', action='store_true',
                           default=None, help='Show untracked files in output')
    untracked.add_argument('-t', '--nountracked', dest='show_untracked', action='store_false',
                           default=None, help="Don't show untracked files in output")
    parser.add_argument('--config', type=str, default=None,
                        help=f'Path to settings file (default: ~/{DEFAULT_CONFIG_FILENAME})')

    return parser


def load_config_file(config_path: str | None = None) -> dict[str, Any]:
    """Load settings from an explicit TOML file or ~/.pygitglobal.toml.

    Returns empty dict if not found or tomllib is unavailable.
    """
    path = Path(config_path).expanduser() if config_path else Path.home() / DEFAULT_CONFIG_FILENAME
    if not path.is_file():
        if config_path:
            logger.warning("Config file '%s' not found. Ignoring.", config_path)
        return {}
    if tomllib is None:
        logger.warning("Found %s but tomllib/tomli not available (Python 3.11+ or pip install tomli). "
                       "Ignoring.", path)
        return {}
    try:
        with open(path, 'rb') as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", path, e)
        return {}


def load_gitconfig_settings(paths: list[str] | None = None) -> dict[str, str]:
    """Read the [global] section of the user's git configuration.

    By default both ~/.gitconfig and $XDG_CONFIG_HOME/git/config are read.
    """
    if paths is None:
        paths = [get_config_path('user'), get_config_path('global')]
    existing = [p for p in paths if os.path.isfile(p)]
    if not existing:
        return {}
    try:
        with GitConfigParser(existing, read_only=True) as reader:
            if not reader.has_section(GITCONFIG_SECTION):
                return {}
            return {name.lower(): value for name, value in reader.items(GITCONFIG_SECTION)}
    except (OSError, configparser.Error) as e:
        logger.warning("Failed to read git config %s: %s", ', '.join(existing), e)
        return {}


def _as_bool(key: str, value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    logger.warning("Ignoring setting %s: expected a boolean, got %r", key, value)
    return None


def _as_patterns(value: Any) -> tuple[str, ...]:
    items = value.split(',') if isinstance(value, str) else list(value)
    return tuple(p for p in (str(item).strip() for item in items) if p)


def _as_path(value: Any) -> Path:
    return Path(os.path.expanduser(str(value)))


def apply_settings(config: GlobalConfig, settings: Mapping[str, Any]) -> GlobalConfig:
    """Return config with the recognized keys of settings applied.

    Keys may use dashes or underscores (follow-symlinks / follow_symlinks).
    """
    normalized = {str(k).strip().lower().replace('_', '-'): v for k, v in settings.items()}
    updates: dict[str, Any] = {}

    if 'basedir' in normalized:
        updates['basedir'] = _as_path(normalized['basedir'])
    if 'ignore' in normalized:
        updates['ignored_patterns'] = _as_patterns(normalized['ignore'])
    if 'default-cmd' in normalized:
        updates['default_cmd'] = str(normalized['default-cmd']).strip()
    if 'cache-file' in normalized:
        updates['cache_file'] = _as_path(normalized['cache-file'])
    if 'ignore-file' in normalized:
        updates['ignore_file'] = _as_path(normalized['ignore-file'])
    for key, attr in (('follow-symlinks', 'follow_symlinks'),
                      ('same-filesystem', 'same_filesystem'),
                      ('show-untracked', 'show_untracked'),
                      ('verbose', 'verbose')):
        if key in normalized:
            value = _as_bool(key, normalized[key])
            if value is not None:
                updates[attr] = value

    return config.with_updates(**updates) if updates else config


def build_config(args: argparse.Namespace, gitconfig: Mapping[str, Any] | None = None,
                 file_settings: Mapping[str, Any] | None = None) -> GlobalConfig:
    """Merge defaults, git config, settings file and command-line flags, in that order."""
    config = GlobalConfig()
    config = apply_settings(config, gitconfig or {})
    config = apply_settings(config, file_settings or {})
    if args.verbose:
        config = config.with_updates(verbose=True)
    if args.show_untracked is not None:
        config = config.with_updates(show_untracked=args.show_untracked)
    return config
