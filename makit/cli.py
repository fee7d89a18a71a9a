"""Command-line front door for makit.

Parses CLI options, configures logging and tracing, resolves the mode
and timestamp once and runs the materializer over the given paths.
"""

from __future__ import annotations

import argparse
import sys

from makit import __version__
from makit.core.config import ALLOWED_LOG_LEVELS
from makit.core.config import Config
from makit.core.config import Options
from makit.core.error import ValidationError
from makit.core.materializer import Materializer
from makit.utils.logging import configure
from makit.utils.logging import get_logger
from makit.utils.opentelemetry import get_provider

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the `makit` command."""
    parser = argparse.ArgumentParser(
        prog="makit",
        description=(
            "Create files and directories with optional mode and timestamp. "
            "Paths whose last segment contains a '.' are created as files, "
            "all others as directories."
        ),
    )
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="Files or directories to create.",
    )
    parser.add_argument(
        "-m",
        "--mode",
        default="",
        metavar="OCTAL",
        help="Set file/directory mode (e.g. 755).",
    )
    parser.add_argument(
        "-d",
        "--date",
        default="",
        metavar="YYYYMMDDhhmm",
        help="Set access and modification time in UTC (e.g. 202504181200).",
    )
    parser.add_argument(
        "-c",
        "--no-create",
        action="store_true",
        help="Do not create paths that do not exist.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress messages.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=ALLOWED_LOG_LEVELS,
        help="Diagnostic log level on standard error (default: WARNING).",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Write diagnostic logs as JSON.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        metavar="PATH",
        help="Also write diagnostic logs to a rotating log file.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Export OpenTelemetry spans for this run.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def build_config(args: argparse.Namespace) -> Config:
    """Translate parsed arguments into the process configuration."""
    config = Config()
    config.debug = args.log_level == "DEBUG"
    config.logger.level = args.log_level
    config.logger.as_json = args.log_json
    config.logger.tty.level = args.log_level
    if args.log_file:
        config.logger.file.enable = True
        config.logger.file.path = args.log_file
    config.telemetry.enabled = args.trace
    return config


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and materialize the given paths.

    :param argv: Arguments without the program name, defaults to
        `sys.argv[1:]`.
    :return: Process exit status. `0` once every path was processed,
        even if some of them could not be created, `1` for an invalid
        mode or timestamp.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = build_config(args)
    configure(config.logger)
    try:
        options = Options.parse(
            args.mode,
            args.date,
            no_create=args.no_create,
            verbose=args.verbose,
        )
    except ValidationError as error:
        logger.debug(f"Rejected {error.attribute} spec", exc_info=True)
        print(f"{parser.prog}: {error}", file=sys.stderr)
        return 1
    provider = get_provider(config)
    try:
        materializer = Materializer(
            options,
            out=sys.stdout,
            tracer=provider.get_tracer(__name__),
        )
        materializer.run(args.paths)
    finally:
        provider.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
