"""
CLI subpackage for command-line interface tools.

Available CLI scripts:
- blink: Encode a blink(1) command and write the report

Usage:
    python -m blink_control.cli.blink --help
"""

__all__ = ["blink"]
