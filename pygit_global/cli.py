"""CLI entry point: run_from_command_line() and main()."""

from __future__ import annotations

import json
import logging
import sys

from pygit_global import subcommands
from pygit_global.config import (
    build_config,
    create_argument_parser,
    load_config_file,
    load_gitconfig_settings,
)
from pygit_global.errors import GitGlobalError
from pygit_global.output import ConsoleOutputHandler, NullOutputHandler


def _report_error(message: str, json_output: bool) -> None:
    """Print an error to stderr as text or JSON."""
    if json_output:
        print(json.dumps({'error': True, 'message': message}, indent=2), file=sys.stderr)
    else:
        ConsoleOutputHandler().error(message)


def run_from_command_line(argv: list[str] | None = None) -> int:
    """Run the requested subcommand, print its report, and return the exit code."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = build_config(args, load_gitconfig_settings(), load_config_file(args.config))
    output = NullOutputHandler() if args.json_output else ConsoleOutputHandler(verbose=config.verbose)

    try:
        report = subcommands.run(args.command, config, args.path, output)
    except KeyboardInterrupt:
        if not args.json_output:
            output.warning("\nInterrupted by user")
        return 130
    except GitGlobalError as e:
        _report_error(str(e), args.json_output)
        return 1
    except Exception as e:
        _report_error(f"Unexpected error: {e}", args.json_output)
        if config.verbose:
            import traceback
            traceback.print_exc()
        return 1

    if args.json_output:
        report.print_json()
    else:
        report.print()
    return 0


def main():
    """Main entry point"""
    sys.exit(run_from_command_line())
