"""
Custom exception classes for better error handling.
Provides specific error types instead of generic exceptions.
"""


class AlarmBotError(Exception):
    """Base exception for the alarm bot."""

    pass


class ConfigurationError(AlarmBotError):
    """Raised when required settings are missing or invalid."""

    pass


class TimerError(AlarmBotError):
    """Raised when a timer is used outside of its lifecycle."""

    pass


class DurationTooLongError(TimerError):
    """Raised when a requested duration exceeds the configured ceiling."""

    def __init__(self, total_seconds: int, max_seconds: int):
        self.total_seconds = total_seconds
        self.max_seconds = max_seconds
        super().__init__(
            f"Duration {total_seconds}s exceeds maximum of {max_seconds}s"
        )
