"""
blink(1) command protocol encoder and decoder.

This module turns a command letter plus its field tokens into the 9-byte
report consumed by the blink(1) hidraw interface.

Report layout:
    byte 0      report id (always 1)
    byte 1      command letter (ASCII)
    bytes 2-4   R, G, B  |  play, position  |  play, duration hi/lo
    bytes 5-6   duration hi/lo (fade and pattern commands)
    byte 7      pattern position (0-11)
    byte 8      reserved, always 0

Commands share byte layout, so each one is described as an ordered list
of encoding stages. A stage reads one field token and writes only the
bytes it owns.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from blink_control.colors import resolve_color, split_rgb
from blink_control.duration import parse_duration, split_duration
from blink_control.errors import (
    InvalidDurationError,
    InvalidPositionError,
    UnknownCommandError,
    UsageError,
)


logger = logging.getLogger(__name__)

REPORT_SIZE = 9
REPORT_ID = 1
MAX_POSITION = 11

_ATOI_PATTERN = re.compile(r"\s*([+-]?\d+)", re.ASCII)

Stage = Callable[[bytearray, str], None]


def parse_int(token: str) -> int:
    """
    Parse the leading integer of a token, ignoring anything after it.

    Leading whitespace and a sign are accepted, parsing stops at the first
    non-digit, and a token without any leading digits yields 0.
    """
    match = _ATOI_PATTERN.match(token)
    if match is None:
        return 0
    return int(match.group(1))


def _non_negative_duration(token: str) -> int:
    duration = parse_duration(token)
    if duration < 0:
        raise InvalidDurationError(token)
    return duration


# Encoding stages

def color_stage(report: bytearray, token: str) -> None:
    """Bytes 2-4: RGB channels."""
    report[2], report[3], report[4] = split_rgb(resolve_color(token))


def fade_stage(report: bytearray, token: str) -> None:
    """Bytes 5-6: fade duration, big-endian."""
    report[5], report[6] = split_duration(_non_negative_duration(token))


def pattern_position_stage(report: bytearray, token: str) -> None:
    """Byte 7: pattern position, rejected outside [0, 11]."""
    position = parse_int(token)
    if position < 0 or position > MAX_POSITION:
        raise InvalidPositionError(position)
    report[7] = position


def play_stage(report: bytearray, token: str) -> None:
    """Byte 2: play flag, any nonzero integer means on."""
    report[2] = 1 if parse_int(token) else 0


def play_position_stage(report: bytearray, token: str) -> None:
    """Byte 3: start position, clamped to [0, 11]."""
    report[3] = max(0, min(MAX_POSITION, parse_int(token)))


def tickle_duration_stage(report: bytearray, token: str) -> None:
    """Bytes 3-4: serverdown timeout, big-endian."""
    report[3], report[4] = split_duration(_non_negative_duration(token))


@dataclass(frozen=True)
class CommandDescriptor:
    """Static description of one blink(1) command."""

    letter: str
    argc: int
    usage: str
    description: str
    # (stage, index of the field it consumes), applied in order
    stages: Tuple[Tuple[Stage, int], ...]


COMMANDS: Tuple[CommandDescriptor, ...] = (
    CommandDescriptor(
        letter="c",
        argc=2,
        usage=(
            "Usage: blink c COLOR FADE\n"
            "Example: blink c red 50"
        ),
        description="Fade to RGB color",
        stages=((fade_stage, 1), (color_stage, 0)),
    ),
    CommandDescriptor(
        letter="D",
        argc=2,
        usage=(
            "Usage: blink D 0|1 DURATION\n"
            "Example: blink D 0 0 # stop server tickle mode\n"
            "         blink D 1 2000ms # start server tickle mode with 2s time"
        ),
        description="Serverdown tickle/off",
        stages=((play_stage, 0), (tickle_duration_stage, 1)),
    ),
    CommandDescriptor(
        letter="n",
        argc=1,
        usage=(
            "Usage: blink n COLOR\n"
            "Example: blink n 454545"
        ),
        description="Set RGB color now",
        stages=((color_stage, 0),),
    ),
    CommandDescriptor(
        letter="p",
        argc=2,
        usage=(
            "Usage: blink p 0|1 POSITION\n"
            "Example: blink p 0 0 # Pause\n"
            "         blink p 1 4 # Play from 5th position"
        ),
        description="Play/Pause",
        stages=((play_stage, 0), (play_position_stage, 1)),
    ),
    CommandDescriptor(
        letter="P",
        argc=3,
        usage=(
            "Usage: blink P COLOR FADE POSITION\n"
            "Example: blink P green .5s 2 # 3rd pattern green with 500ms fade time"
        ),
        description="Set pattern entry",
        stages=((pattern_position_stage, 2), (fade_stage, 1), (color_stage, 0)),
    ),
)

_COMMANDS_BY_LETTER: Dict[str, CommandDescriptor] = {
    command.letter: command for command in COMMANDS
}


def get_command(letter: str) -> CommandDescriptor:
    """
    Look up a command descriptor.

    Raises:
        UnknownCommandError: If the letter is not a known command.
    """
    try:
        return _COMMANDS_BY_LETTER[letter]
    except KeyError:
        raise UnknownCommandError(letter) from None


def new_report(letter: str) -> bytearray:
    """Allocate a zeroed report with the id and command bytes set."""
    report = bytearray(REPORT_SIZE)
    report[0] = REPORT_ID
    report[1] = ord(letter)
    return report


def encode(letter: str, fields: Sequence[str]) -> bytes:
    """
    Encode one command into a report.

    Args:
        letter: Single command letter, one of c, D, n, p, P.
        fields: Field tokens following the command letter.

    Returns:
        The 9-byte report.

    Raises:
        UnknownCommandError: If the letter is not a known command.
        UsageError: If the number of fields does not match the command.
        InvalidColorError, InvalidDurationError, InvalidPositionError:
            On the first field that fails validation.
    """
    command = get_command(letter)
    if len(fields) != command.argc:
        raise UsageError(f"{command.description}\n{command.usage}")

    report = new_report(letter)
    for stage, index in command.stages:
        stage(report, fields[index])

    logger.debug(f"message: {format_report(report)}")
    return bytes(report)


def encode_argv(tokens: Sequence[str]) -> bytes:
    """
    Encode a command line of the form COMMAND [FIELD...].

    Raises:
        UsageError: If the command letter is missing or longer than one
            character, or on an arity mismatch.
    """
    if not tokens or len(tokens[0]) != 1:
        raise UsageError("Put colors! Try 'blink -h' for more information.")

    letter = tokens[0]
    logger.debug(f"command '{letter}'")
    return encode(letter, list(tokens[1:]))


def format_report(report: bytes) -> str:
    """Render a report as "1 P 00 ff 00 00 32 02 00" for logs."""
    head = f"{report[0]} {chr(report[1])}"
    return " ".join([head] + [f"{byte:02x}" for byte in report[2:]])


def decode(report: bytes) -> Optional[Dict[str, Any]]:
    """
    Decode a report back into its fields.

    Args:
        report: Raw 9-byte report.

    Returns:
        Dictionary with the command letter under "command" and the
        fields that command defines, or None if the report is not a
        valid blink(1) command report.
    """
    if len(report) != REPORT_SIZE or report[0] != REPORT_ID:
        return None

    letter = chr(report[1])
    if letter not in _COMMANDS_BY_LETTER:
        return None

    fields: Dict[str, Any] = {"command": letter}
    if letter in ("c", "n", "P"):
        fields["rgb"] = (report[2] << 16) | (report[3] << 8) | report[4]
    if letter in ("c", "P"):
        fields["duration"] = (report[5] << 8) | report[6]
    if letter == "P":
        fields["position"] = report[7]
    if letter == "p":
        fields["play"] = report[2]
        fields["position"] = report[3]
    if letter == "D":
        fields["play"] = report[2]
        fields["duration"] = (report[3] << 8) | report[4]

    return fields
