"""
Command-line interface for task-mon.

This module provides the ``task-mon`` entry point: it parses arguments,
configures logging, assembles the run configuration and hands over to the
``TaskMonitor`` orchestrator. task-mon never writes to stdout; diagnostics go
to stderr, and only in verbose mode unless something is fatal.

Usage:
    task-mon --uuid UUID [options] -- command [args...]

Example:
    task-mon --uuid 1bb3d1d6-0cc4-4ac4-9d5e-d7a0b6a1a2b0 --time -- backup.sh --full
"""

import argparse
import logging
import os
import sys
import tomllib
from typing import List, Mapping, Optional, Sequence, Tuple

from .. import __version__
from ..config import (
    BASE_URL_ENV_VAR,
    CONFIG_ENV_VAR,
    PING_KEY_ENV_VAR,
    build_run_configuration,
    load_settings_data,
    validate_settings,
)
from ..models.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from ..reporting import Reporter
from ..validation import ValidationError, handle_cli_error
from .orchestrator import TaskMonitor

logger = logging.getLogger(__name__)

COMMAND_SEPARATOR = "--"
LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool) -> None:
    """
    Send log output to stderr; debug detail in verbose mode, errors otherwise.

    stdout is left untouched so task-mon stays silent for cron. The package
    logger gets its own stderr handler, so this holds even when the root
    logger was configured elsewhere; calling again replaces that handler.
    """
    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    package_logger = logging.getLogger("taskmon")
    for old_handler in list(package_logger.handlers):
        package_logger.removeHandler(old_handler)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.ERROR)
    package_logger.propagate = False


def split_command(argv: Sequence[str]) -> Tuple[List[str], Optional[List[str]]]:
    """
    Split argv at the first ``--`` into task-mon options and the command.

    Returns:
        Tuple of (options, command); command is None when there is no separator
    """
    argv = list(argv)
    if COMMAND_SEPARATOR not in argv:
        return argv, None
    index = argv.index(COMMAND_SEPARATOR)
    return argv[:index], argv[index + 1:]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-mon",
        usage="%(prog)s (--uuid UUID | --slug SLUG) [options] -- command [args ...]",
        description="Execute a command and report its outcome to a Healthchecks.io check.",
    )
    label = parser.add_mutually_exclusive_group(required=True)
    label.add_argument(
        "-k",
        "--uuid",
        metavar="UUID",
        help="Check's UUID to ping.",
    )
    label.add_argument(
        "-s",
        "--slug",
        metavar="SLUG",
        help="Check's slug name to ping; requires a ping key.",
    )
    parser.add_argument(
        "--ping-key",
        metavar="PING_KEY",
        help=f"Check's project ping key, required with --slug. Defaults to ${PING_KEY_ENV_VAR}.",
    )
    parser.add_argument(
        "-t",
        "--time",
        action="store_true",
        help="Ping when the command starts as well as when it completes.",
    )
    parser.add_argument(
        "--head",
        action="store_true",
        help="POST the first 10k bytes of output instead of the last.",
    )
    parser.add_argument(
        "--ping-only",
        action="store_true",
        help="Don't POST any output from the command.",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help="Log the invocation without signalling success or failure; does not update the check's status.",
    )
    parser.add_argument(
        "--detailed",
        action="store_true",
        help="Include execution details in the POST body (by default just the command's output).",
    )
    parser.add_argument(
        "--env",
        action="store_true",
        help="Also POST the process environment; requires --detailed.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Write debugging details to stderr.",
    )
    parser.add_argument(
        "--user-agent",
        metavar="USER_AGENT",
        help="Customize the user-agent string sent to the ping service.",
    )
    parser.add_argument(
        "--base-url",
        metavar="URL",
        help=f"Base URL of the ping service. Defaults to ${BASE_URL_ENV_VAR} or {DEFAULT_BASE_URL}.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        help=f"Timeout for each ping request. Defaults to {DEFAULT_TIMEOUT_SECONDS:g}.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help=f"Settings file to read. Defaults to ${CONFIG_ENV_VAR} or ~/.config/task-mon/config.toml if present.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None,
            environ: Optional[Mapping[str, str]] = None,
            reporter_factory=Reporter.create) -> int:
    """
    Run task-mon for the given arguments.

    Args:
        argv: Arguments without the program name; defaults to sys.argv[1:]
        environ: Environment for variable fallbacks; defaults to os.environ
        reporter_factory: Builds the Reporter from the run configuration

    Returns:
        The exit status: the command's own status, 128+N if it was killed by
        signal N, or 127 if it could not be launched

    Raises:
        SystemExit: With status 2 on usage or configuration errors
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    environ = os.environ if environ is None else environ
    parser = build_parser()

    if not argv:
        parser.print_help(sys.stderr)
        return 2

    options, command = split_command(argv)
    args = parser.parse_args(options)
    args.command = command
    configure_logging(args.verbose)

    try:
        settings = validate_settings(load_settings_data(args.config, environ))
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        handle_cli_error(
            error=e,
            context="settings file loading",
            exit_code=2,
            logger=logger
        )

    try:
        config = build_run_configuration(args, environ, settings)
    except ValidationError as e:
        parser.error(str(e))

    with reporter_factory(config) as reporter:
        return TaskMonitor(config, reporter).run()


def main_cli() -> None:
    """Console script entry point."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main_cli()
