"""
Exceptions raised by the tap tempo package.
"""


class TapTempoError(Exception):
    """Base class for errors reported at the process boundary."""

    pass


class ConfigurationError(TapTempoError):
    """Invalid or unreadable configuration."""

    pass


class TerminalError(TapTempoError):
    """The terminal could not be put into or out of tap mode."""

    pass


class InputFormatError(TapTempoError):
    """Recorded tap timestamps could not be read."""

    pass
