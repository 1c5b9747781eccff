"""
blink(1) Control Package

Command encoder for the ThingM blink(1) USB notification light.
"""

__version__ = "0.1.0"

from blink_control.colors import COLORS, color_names, resolve_color
from blink_control.duration import parse_duration
from blink_control.errors import (
    BlinkError,
    UsageError,
    UnknownCommandError,
    InvalidColorError,
    InvalidDurationError,
    InvalidPositionError,
    OutputError,
)
from blink_control.protocol import COMMANDS, decode, encode, encode_argv
from blink_control.output import ReportWriter
from blink_control.config import BlinkConfig, load_config, save_config

__all__ = [
    "COLORS",
    "color_names",
    "resolve_color",
    "parse_duration",
    "BlinkError",
    "UsageError",
    "UnknownCommandError",
    "InvalidColorError",
    "InvalidDurationError",
    "InvalidPositionError",
    "OutputError",
    "COMMANDS",
    "decode",
    "encode",
    "encode_argv",
    "ReportWriter",
    "BlinkConfig",
    "load_config",
    "save_config",
]
