from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels, numerically aligned with the standard library."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100

    def __str__(self) -> str:
        return self.name
