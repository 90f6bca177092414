"""
Error types raised by the ranking core.

Errors are raised synchronously to the immediate caller. The core never
logs-and-swallows; translating these into user-facing responses is the job
of whatever service layer sits on top.
"""


class MatchingError(Exception):
    """Base class for all errors raised by matchfeed."""


class MalformedInputError(MatchingError, ValueError):
    """
    A record is missing a field that a computation requires.

    Raised instead of treating the missing value as zero, which would
    silently misclassify the candidate.
    """

    def __init__(self, message: str, field: str = None, user_id: str = None):
        super().__init__(message)
        self.field = field
        self.user_id = user_id


class ConfigError(MatchingError, ValueError):
    """Configuration values are out of range or inconsistent."""
