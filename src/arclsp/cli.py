"""Command-line interface for arclsp."""

from __future__ import annotations

import argparse
import dataclasses
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from arclsp.config import LintConfig, MalformedLinePolicy
from arclsp.logging import configure_logging, get_logger
from arclsp.lsp.server import create_server


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    transport: Literal["stdio", "tcp"]
    host: str
    port: int
    log_level: str
    log_file: Path | None
    debug: bool
    lint: LintConfig


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    defaults = LintConfig()
    parser = argparse.ArgumentParser(
        prog="arclsp",
        description="Language server publishing arc lint results as diagnostics",
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "tcp"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for TCP transport (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=4390,
        help="Port for TCP transport (default: 4390)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: INFO, or DEBUG if --debug is set)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: stderr)",
    )

    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug mode (sets log level to DEBUG unless --log-level is specified)",
    )

    parser.add_argument(
        "--arc-path",
        default=defaults.executable,
        help=f"arc executable (default: {defaults.executable})",
    )

    parser.add_argument(
        "--lint-timeout",
        type=_positive_float,
        default=defaults.lint_timeout,
        help=f"Seconds before arc lint is killed (default: {defaults.lint_timeout:g})",
    )

    parser.add_argument(
        "--git-path",
        default=defaults.vcs_executable,
        help=f"git executable used to find the project root (default: {defaults.vcs_executable})",
    )

    parser.add_argument(
        "--git-timeout",
        type=_positive_float,
        default=defaults.vcs_timeout,
        help=f"Seconds before the root lookup is killed (default: {defaults.vcs_timeout:g})",
    )

    parser.add_argument(
        "--malformed-lines",
        choices=[policy.value for policy in MalformedLinePolicy],
        default=defaults.malformed_lines.value,
        help="Skip or abort on unparseable lint output lines (default: skip)",
    )

    args = parser.parse_args(argv)

    # Determine log level: explicit --log-level wins, otherwise --debug sets DEBUG
    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    return CliArgs(
        transport=args.transport,
        host=args.host,
        port=args.port,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
        lint=LintConfig(
            executable=args.arc_path,
            lint_timeout=args.lint_timeout,
            vcs_executable=args.git_path,
            vcs_timeout=args.git_timeout,
            malformed_lines=MalformedLinePolicy(args.malformed_lines),
        ),
    )


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the LSP server.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")

    logger.info("Starting arclsp server")
    logger.debug("Configuration: %s", args)

    try:
        server = create_server(config=args.lint)

        if args.transport == "stdio":
            logger.info("Starting in stdio mode")
            server.start_io()
        else:
            logger.info("Starting in TCP mode on %s:%d", args.host, args.port)
            server.start_tcp(args.host, args.port)

        return 0

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0

    except Exception:
        logger.critical("Fatal error in server", exc_info=True)
        return 1
