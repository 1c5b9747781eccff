#!/usr/bin/env python3
"""
blink(1) command line encoder.

Encodes one command into a 9-byte report and writes it to standard
output (or a device node), ready for the blink(1) hidraw interface.

Usage:
    python -m blink_control.cli.blink n red > /dev/hidraw0
    python -m blink_control.cli.blink --device /dev/hidraw0 P green .5s 2
    python -m blink_control.cli.blink -c
"""

import argparse
import logging
import sys
from typing import BinaryIO, List, Optional

from blink_control.colors import color_names
from blink_control.config import BlinkConfig, create_default_config, load_config
from blink_control.errors import BlinkError, OutputError, UsageError
from blink_control.output import ReportWriter
from blink_control.protocol import COMMANDS, encode_argv

logger = logging.getLogger(__name__)

PLAIN_FORMAT = '%(message)s'
DEBUG_FORMAT = '%(levelname)s %(funcName)s:%(lineno)d: %(message)s'


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports bad options as usage errors."""

    def error(self, message: str):
        raise UsageError(f"{message}\n{self.format_usage().rstrip()}")


def _commands_epilog() -> str:
    lines = ["Commands:"]
    for command in COMMANDS:
        lines.append(f"  {command.letter}\t{command.description}")
    return "\n".join(lines)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = _ArgumentParser(
        prog="blink",
        description="Send a command to a blink(1) notification light",
        epilog=_commands_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-c", "--colors",
        action="store_true",
        help="list defined colors",
    )
    parser.add_argument(
        "--device",
        type=str,
        default=None,
        metavar="PATH",
        help="write the report to a device node instead of standard output",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="path to configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--create-config",
        type=str,
        default=None,
        metavar="PATH",
        help="create a default config file and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging",
    )

    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        help="command letter, see below",
    )
    # REMAINDER keeps tokens such as "-1" as fields
    parser.add_argument(
        "fields",
        nargs=argparse.REMAINDER,
        metavar="FIELD",
        help="command fields",
    )

    return parser.parse_args(argv)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=DEBUG_FORMAT if debug else PLAIN_FORMAT,
        stream=sys.stderr,
    )


def _resolve_config(args: argparse.Namespace) -> BlinkConfig:
    """Load the config file, if any, and apply command line overrides."""
    config = load_config(args.config) if args.config else BlinkConfig()
    if args.device:
        config.device = args.device
    if args.debug:
        config.log_level = "DEBUG"
    return config


def send(tokens: List[str], writer: ReportWriter) -> None:
    """
    Encode a command line and write the report.

    Raises:
        BlinkError: On any validation failure, or OutputError if the
            report could not be fully written.
    """
    report = encode_argv(tokens)
    try:
        if not writer.write(report):
            raise OutputError("failed to write report")
    finally:
        writer.close()


def main(
    argv: Optional[List[str]] = None,
    output: Optional[BinaryIO] = None
) -> int:
    """Main entry point for the blink CLI."""
    try:
        args = parse_args(argv)
    except UsageError as e:
        _configure_logging(False)
        logger.error(str(e))
        return 1

    _configure_logging(args.debug)

    if args.colors:
        for name in color_names():
            print(name)
        return 0

    if args.create_config:
        try:
            create_default_config(args.create_config)
        except OSError as e:
            logger.error(f"Failed to create config at {args.create_config}: {e}")
            return 1
        print(f"Created default config at: {args.create_config}")
        return 0

    try:
        config = _resolve_config(args)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    # errors must always reach stderr
    level = min(getattr(logging, config.log_level), logging.ERROR)
    logging.getLogger().setLevel(level)

    tokens = [args.command] + args.fields if args.command is not None else []
    writer = ReportWriter(device=config.device, stream=output)

    try:
        send(tokens, writer)
    except BlinkError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
