"""Provider factory of the logger library.

Call as ``provide_logger(config=None, *features)``. Recognized options are the
fields of :class:`LoggerConfig`; unknown options raise ConfigurationError.

Example:
    >>> root = create_scope(None, provide_logger({"level": "DEBUG"}, with_timestamps()))
    >>> root.resolve(LOGGER).debug("ready")
"""

from typing import List

from stratum_di.application import ProviderFactory
from stratum_di.domain import Binding
from stratum_di.logger.config import LoggerConfig
from stratum_di.logger.service import Logger
from stratum_di.logger.tokens import LOG_APPENDER, LOG_FORMATTER, LOGGER, LOGGER_CONFIG

FEATURE_LIMITS = {
    "categories": 1,
    "timestamps": 1,
    "memory": 1,
    "bridge": 1,
    "silent": 1,
}

EXCLUSIVE_KINDS = [
    {"silent", "memory"},
    {"silent", "bridge"},
]


def _logger_bindings(config: LoggerConfig) -> List[Binding]:
    bindings = [
        Binding.value(LOGGER_CONFIG, config),
        Binding.capability(LOG_FORMATTER, config.formatter, "format"),
    ]
    bindings.extend(Binding.capability(LOG_APPENDER, appender, "append") for appender in config.appenders)
    bindings.append(Binding.factory(LOGGER, Logger.from_scope))
    return bindings


provide_logger: ProviderFactory[LoggerConfig] = ProviderFactory(
    "logger",
    LoggerConfig,
    _logger_bindings,
    feature_limits=FEATURE_LIMITS,
    exclusive_kinds=EXCLUSIVE_KINDS,
)
