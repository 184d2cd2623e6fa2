import logging
from typing import Any, Callable, Dict, List, Optional

from stratum_di.domain import Capability, IScope, MissingBindingError
from stratum_di.logger.config import LoggerConfig
from stratum_di.logger.levels import LogLevel
from stratum_di.logger.records import LogRecord
from stratum_di.logger.tokens import (
    LOG_APPENDER,
    LOG_CLOCK,
    LOG_FORMATTER,
    LOG_SILENT,
    LOGGER,
    LOGGER_CONFIG,
)

logger = logging.getLogger(__name__)


class Logger:
    """Scope-aware logger service.

    A logger belongs to the nearest scope that binds a logger configuration.
    It writes to the appenders bound in that scope and, when ``chaining`` is
    enabled, forwards every accepted record to the logger of the nearest
    ancestor scope.

    Attributes:
        config: The merged configuration.
        parent: The ancestor logger records are forwarded to, if chaining.
        _formatter: Capability turning a record into text.
        _appenders: Capabilities receiving ``(record, text)``.
        _categories: Category handlers receiving the record.
        _clock: Optional timestamp source.
        _silent: Drop output while still forwarding.
    """

    def __init__(
        self,
        config: LoggerConfig,
        formatter: Capability,
        appenders: List[Capability],
        parent: Optional["Logger"] = None,
        clock: Optional[Callable[[], float]] = None,
        silent: bool = False,
    ) -> None:
        self.config = config
        self.parent = parent
        self._formatter = formatter
        self._appenders = list(appenders)
        self._categories: Dict[str, Capability] = {}
        self._clock = clock
        self._silent = silent

    @classmethod
    def from_scope(cls, scope: IScope) -> "Logger":
        """Build the logger for ``scope``.

        A scope without its own logger configuration shares the logger of
        the nearest ancestor that has one. Appenders, the clock and the silent
        flag are read from the owning scope only.

        Raises:
            MissingBindingError: If no scope on the chain binds a logger
                configuration.
        """
        owner = _config_owner(scope)
        if owner is None:
            raise MissingBindingError(LOGGER_CONFIG, scope.name)
        if owner is not scope:
            return owner.resolve(LOGGER)

        config: LoggerConfig = scope.resolve(LOGGER_CONFIG)
        parent = scope.resolve(LOGGER, optional=True, skip_self=True) if config.chaining else None
        instance = cls(
            config=config,
            formatter=scope.resolve(LOG_FORMATTER),
            appenders=scope.resolve_all(LOG_APPENDER, optional=True, self_only=True),
            parent=parent,
            clock=scope.resolve(LOG_CLOCK, optional=True, self_only=True),
            silent=bool(scope.resolve(LOG_SILENT, optional=True, self_only=True)),
        )
        logger.debug("Built logger %s for scope %s (chained=%s)", config.name, scope.name, parent is not None)
        return instance

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    def register_category(self, category: str, handler: Any) -> None:
        """Attach a handler called with every accepted record of ``category``.

        Args:
            category: Category name.
            handler: Callable ``(record)`` or object with ``handle(record)``.
        """
        self._categories[category] = Capability.of(handler, "handle")

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.config.level

    def log(self, level: LogLevel, message: str, category: Optional[str] = None, **context: Any) -> bool:
        """Create a record and handle it.

        Returns:
            True if the record passed this logger's level.
        """
        record = LogRecord(
            logger_name=self.config.name,
            level=level,
            message=message,
            category=category,
            context=context,
            timestamp=self._clock() if self._clock is not None else None,
        )
        return self.handle(record)

    def handle(self, record: LogRecord) -> bool:
        """Dispatch a record to appenders and category handlers, then forward it.

        Records below the configured level are dropped and not forwarded.
        """
        if not self.is_enabled_for(record.level):
            return False

        if not self._silent:
            text = self._formatter.invoke(record)
            for appender in self._appenders:
                appender.invoke(record, text)

        handler = self._categories.get(record.category) if record.category is not None else None
        if handler is not None:
            handler.invoke(record)

        if self.parent is not None:
            self.parent.handle(record)
        return True

    def debug(self, message: str, category: Optional[str] = None, **context: Any) -> bool:
        return self.log(LogLevel.DEBUG, message, category, **context)

    def info(self, message: str, category: Optional[str] = None, **context: Any) -> bool:
        return self.log(LogLevel.INFO, message, category, **context)

    def warning(self, message: str, category: Optional[str] = None, **context: Any) -> bool:
        return self.log(LogLevel.WARNING, message, category, **context)

    def error(self, message: str, category: Optional[str] = None, **context: Any) -> bool:
        return self.log(LogLevel.ERROR, message, category, **context)

    def critical(self, message: str, category: Optional[str] = None, **context: Any) -> bool:
        return self.log(LogLevel.CRITICAL, message, category, **context)

    def __repr__(self) -> str:
        return f"Logger(name={self.config.name!r}, level={self.config.level.name}, chained={self.parent is not None})"


def _config_owner(scope: Optional[IScope]) -> Optional[IScope]:
    current = scope
    while current is not None:
        if current.has_binding(LOGGER_CONFIG, self_only=True):
            return current
        current = current.parent
    return None
