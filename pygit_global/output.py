"""Output handler implementations: console and null."""

from __future__ import annotations

import sys

from colorama import Fore, Style
from tqdm import tqdm


class ConsoleOutputHandler:
    """Console output with colors. Warnings and errors go to stderr."""

    def __init__(self, verbose: bool = False):
        """Create a console handler. Set verbose=True to enable debug output."""
        self.verbose = verbose

    def info(self, message: str, indent: int = 0) -> None:
        """Print an informational message."""
        tqdm.write("  " * indent + message)

    def warning(self, message: str, indent: int = 0) -> None:
        """Print a yellow warning message to stderr."""
        tqdm.write("  " * indent + f"{Fore.YELLOW}{message}{Style.RESET_ALL}", file=sys.stderr)

    def error(self, message: str, indent: int = 0) -> None:
        """Print a red error message to stderr."""
        tqdm.write("  " * indent + f"{Fore.RED}{message}{Style.RESET_ALL}", file=sys.stderr)

    def debug(self, message: str) -> None:
        """Print a cyan debug message (only when verbose is enabled)."""
        if self.verbose:
            tqdm.write(f"{Fore.CYAN}[DEBUG] {message}{Style.RESET_ALL}", file=sys.stderr)


class NullOutputHandler:
    """Silent output handler for testing and JSON mode."""

    def info(self, message: str, indent: int = 0) -> None:
        """No-op."""
        pass

    def warning(self, message: str, indent: int = 0) -> None:
        """No-op."""
        pass

    def error(self, message: str, indent: int = 0) -> None:
        """No-op."""
        pass

    def debug(self, message: str) -> None:
        """No-op."""
        pass
