"""
Exception hierarchy for blink(1) command encoding.

Every failure during an invocation is one of these; the CLI maps all of
them to exit status 1.
"""


class BlinkError(Exception):
    """Base class for all blink command errors."""


class UsageError(BlinkError):
    """Missing or malformed command, or wrong number of fields."""


class UnknownCommandError(BlinkError):
    """Command letter is not in the command table."""

    def __init__(self, letter: str):
        super().__init__(f"unknown command '{letter}'. Try 'blink -h' for help.")
        self.letter = letter


class InvalidColorError(BlinkError, ValueError):
    """Token is neither a named color nor a hex value <= 0xFFFFFF."""

    def __init__(self, token: str):
        super().__init__(f"invalid color '{token}'")
        self.token = token


class InvalidDurationError(BlinkError, ValueError):
    """Duration token cannot be parsed, or is negative where not allowed."""

    def __init__(self, token: str):
        super().__init__(f"invalid duration '{token}'")
        self.token = token


class InvalidPositionError(BlinkError, ValueError):
    """Pattern position outside [0, 11]."""

    def __init__(self, position: int):
        super().__init__(f"invalid position {position}")
        self.position = position


class OutputError(BlinkError):
    """The report was not fully written to the output."""
