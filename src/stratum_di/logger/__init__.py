"""
Logger library built on the composition engine.

``provide_logger`` is a provider factory: it merges a partial configuration
over defaults, validates features and returns a bundle to apply to a scope.
"""

from .appenders import MemoryAppender, StdlibAppender, StreamAppender
from .config import LoggerConfig
from .features import with_categories, with_memory_sink, with_stdlib_bridge, with_timestamps, without_output
from .formatters import TemplateFormatter, default_formatter
from .levels import LogLevel
from .provider import provide_logger
from .records import LogRecord
from .service import Logger
from .tokens import LOG_APPENDER, LOG_CLOCK, LOG_FORMATTER, LOG_MEMORY, LOG_SILENT, LOGGER, LOGGER_CONFIG

__all__ = [
    # Provider and features
    "provide_logger",
    "with_categories",
    "with_timestamps",
    "with_memory_sink",
    "with_stdlib_bridge",
    "without_output",
    # Service and models
    "Logger",
    "LoggerConfig",
    "LogRecord",
    "LogLevel",
    # Built-ins
    "default_formatter",
    "TemplateFormatter",
    "MemoryAppender",
    "StreamAppender",
    "StdlibAppender",
    # Tokens
    "LOGGER",
    "LOGGER_CONFIG",
    "LOG_FORMATTER",
    "LOG_APPENDER",
    "LOG_CLOCK",
    "LOG_MEMORY",
    "LOG_SILENT",
]
