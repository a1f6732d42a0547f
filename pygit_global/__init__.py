"""
pygit-global: keep track of all the git repositories on your machine.

Discovers git repositories under a base directory, caches the list, and
runs status-style queries across all of them in parallel.
"""

from colorama import init as colorama_init

colorama_init(autoreset=True)

__version__ = "0.1.0"

# Re-export public API so `from pygit_global import X` keeps working.
from pygit_global.cache import CacheStore, fingerprint  # noqa: E402
from pygit_global.cli import main, run_from_command_line  # noqa: E402
from pygit_global.config import (  # noqa: E402
    apply_settings,
    build_config,
    create_argument_parser,
    load_config_file,
    load_gitconfig_settings,
)
from pygit_global.errors import (  # noqa: E402
    AlreadyIgnoredError,
    BadSubcommandError,
    CacheError,
    GitGlobalError,
    MissingArgumentError,
    ParallelExecutionError,
    UnexpectedArgumentError,
)
from pygit_global.ignores import IgnoreList  # noqa: E402
from pygit_global.inventory import Inventory  # noqa: E402
from pygit_global.matcher import (  # noqa: E402
    canonicalize,
    is_excluded,
    matches_ignored,
    matches_pattern,
)
from pygit_global.models import GlobalConfig, Repository, StatusScope, default_cache_dir  # noqa: E402
from pygit_global.output import ConsoleOutputHandler, NullOutputHandler  # noqa: E402
from pygit_global.parallel import default_parallelism, run_parallel  # noqa: E402
from pygit_global.protocols import OutputHandler, RepositoryHandle  # noqa: E402
from pygit_global.report import Report  # noqa: E402
from pygit_global.repository import (  # noqa: E402
    GitPythonRepository,
    get_stash_list,
    get_status_lines,
    is_ahead,
    is_valid_repository,
    open_repository,
)
from pygit_global.scanner import RepositoryScanner  # noqa: E402

__all__ = [
    "__version__",
    # Models
    "GlobalConfig",
    "Repository",
    "StatusScope",
    "default_cache_dir",
    # Errors
    "AlreadyIgnoredError",
    "BadSubcommandError",
    "CacheError",
    "GitGlobalError",
    "MissingArgumentError",
    "ParallelExecutionError",
    "UnexpectedArgumentError",
    # Protocols
    "OutputHandler",
    "RepositoryHandle",
    # Implementations
    "GitPythonRepository",
    "ConsoleOutputHandler",
    "NullOutputHandler",
    # Path matching
    "canonicalize",
    "is_excluded",
    "matches_ignored",
    "matches_pattern",
    # Services
    "CacheStore",
    "IgnoreList",
    "Inventory",
    "Report",
    "RepositoryScanner",
    "fingerprint",
    # Repository operations
    "get_stash_list",
    "get_status_lines",
    "is_ahead",
    "is_valid_repository",
    "open_repository",
    # Parallel execution
    "default_parallelism",
    "run_parallel",
    # Config / CLI
    "apply_settings",
    "build_config",
    "create_argument_parser",
    "load_config_file",
    "load_gitconfig_settings",
    "main",
    "run_from_command_line",
]
