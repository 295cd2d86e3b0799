"""gelf-pretty — render GELF JSON log streams as human-readable text."""

import logging
import os
import sys
from argparse import ArgumentParser

from gelf_pretty.colors import Colorizer
from gelf_pretty.config import load_config, load_yaml_config, resolve_timezone
from gelf_pretty.errors import ConfigError, ParseError
from gelf_pretty.processor import PrettyPrinter
from gelf_pretty.reader import expand_paths, read_multiple, tail_file
from gelf_pretty.record import ZERO_LEVEL_POLICIES
from gelf_pretty.version import version_info

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="gelf-pretty",
        description="Pretty-print GELF JSON log lines read from files or stdin.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="GELF log file path(s) or glob pattern(s); stdin when omitted or '-'",
    )
    parser.add_argument(
        "-f", "--follow",
        action="store_true",
        help="Follow a log file for new records (like tail -f)",
    )
    colors = parser.add_mutually_exclusive_group()
    colors.add_argument(
        "--no-color",
        action="store_true",
        help="Disable color output",
    )
    colors.add_argument(
        "--force-color",
        action="store_true",
        help="Color output even when stdout is not a terminal",
    )
    parser.add_argument(
        "--timezone",
        help="Time zone for timestamps: IANA name, UTC, or local (default: local)",
    )
    parser.add_argument(
        "--zero-level",
        choices=ZERO_LEVEL_POLICIES,
        help="How to read a level of 0 (default: alert)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first line that is not a GELF record",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information",
    )
    return parser


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )


def run_pipeline(args) -> int:
    """Resolve config, pick the input source, and drive the printer."""
    if args.version:
        sys.stdout.write(version_info())
        return 0

    try:
        config = load_config(args, load_yaml_config(args.config))
        tz = resolve_timezone(config.timezone)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    logging.getLogger().setLevel(config.log_level)

    try:
        paths = expand_paths(args.files)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.follow:
        if len(paths) != 1 or paths[0] == "-":
            print("Error: --follow requires a single file", file=sys.stderr)
            return 1
        lines = tail_file(paths[0])
    else:
        lines = read_multiple(paths)

    color = args.force_color or (config.color and sys.stdout.isatty())
    printer = PrettyPrinter(
        sys.stdout.buffer,
        tz=tz,
        colorizer=Colorizer(enabled=color),
        zero_level=config.zero_level,
        strict=config.strict,
    )

    try:
        stats = printer.run(lines)
    except ParseError:
        # already logged with its line number
        return 1
    except OSError as exc:
        logger.error("I/O error: %s", exc)
        if isinstance(exc, BrokenPipeError):
            _detach_stdout()
        return 1

    logger.info("Done: %d rendered, %d passed through, %d blank",
                stats.rendered, stats.passed_through, stats.skipped)
    return 0


def _detach_stdout() -> None:
    """Point stdout at devnull so the exit-time flush can't fail on a closed pipe."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    return run_pipeline(args)


def cli() -> None:
    """Console-script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        _detach_stdout()
        sys.exit(1)


if __name__ == "__main__":
    cli()
