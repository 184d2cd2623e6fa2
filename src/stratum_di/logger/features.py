import time
from typing import Any, Callable, Optional

from stratum_di.application import initializer
from stratum_di.domain import Binding, Bundle, Capability, Feature, IScope
from stratum_di.logger.appenders import MemoryAppender, StdlibAppender
from stratum_di.logger.provider import provide_logger
from stratum_di.logger.tokens import LOG_APPENDER, LOG_CLOCK, LOG_MEMORY, LOG_SILENT, LOGGER


def with_categories(**handlers: Any) -> Feature:
    """Attach category handlers to the scope's logger once the scope is ready.

    Each handler is a callable ``(record)`` or an object with
    ``handle(record)``.

    Raises:
        TypeError: If a handler has neither shape.

    Example:
        >>> audit = MemoryAudit()
        >>> provide_logger({}, with_categories(audit=audit, security=alert_on_call))
    """
    for handler in handlers.values():
        Capability.of(handler, "handle")

    def attach(scope: IScope) -> None:
        service = scope.resolve(LOGGER)
        for category, handler in handlers.items():
            service.register_category(category, handler)

    return provide_logger.feature("categories", Bundle.of(initializer(attach)))


def with_timestamps(clock: Callable[[], float] = time.time) -> Feature:
    """Stamp records with ``clock()``."""
    return provide_logger.feature("timestamps", Bundle.of(Binding.value(LOG_CLOCK, clock)))


def with_memory_sink(sink: Optional[MemoryAppender] = None) -> Feature:
    """Keep records in a :class:`MemoryAppender` bound to ``LOG_MEMORY``."""
    sink = sink if sink is not None else MemoryAppender()
    return provide_logger.feature(
        "memory",
        Bundle.of(
            Binding.value(LOG_MEMORY, sink),
            Binding.capability(LOG_APPENDER, sink, "append"),
        ),
    )


def with_stdlib_bridge(logger_name: str = "stratum") -> Feature:
    """Forward records to ``logging.getLogger(logger_name)``."""
    return provide_logger.feature(
        "bridge", Bundle.of(Binding.capability(LOG_APPENDER, StdlibAppender(logger_name), "append"))
    )


def without_output() -> Feature:
    """Drop all output of the logger; forwarding and category handlers still run."""
    return provide_logger.feature("silent", Bundle.of(Binding.value(LOG_SILENT, True)))

