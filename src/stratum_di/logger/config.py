import inspect
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stratum_di.logger.formatters import default_formatter
from stratum_di.logger.levels import LogLevel


def _check_shape(target: Any, method_name: str) -> Any:
    if callable(getattr(target, method_name, None)):
        return target
    if callable(target) and not inspect.isclass(target):
        return target
    raise ValueError(f"{target!r} must be a callable or provide a '{method_name}' method")


class LoggerConfig(BaseModel):
    """Recognized options of :func:`provide_logger`.

    Attributes:
        name: Logger name stamped on every record.
        level: Minimum severity that passes through.
        formatter: Callable ``(record) -> str``, or an object or class with
            ``format(record)``.
        appenders: Output sinks; each a callable ``(record, text)``, or an
            object or class with ``append(record, text)``.
        chaining: Forward records to the nearest ancestor scope's logger.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    name: str = Field(default="app", min_length=1, description="Logger name stamped on records.")
    level: LogLevel = Field(default=LogLevel.INFO, description="Minimum severity to pass through.")
    formatter: Any = Field(default=default_formatter, description="Exchangeable formatting behaviour.")
    appenders: List[Any] = Field(default_factory=list, description="Ordered output sinks.")
    chaining: bool = Field(default=False, description="Forward records to the parent scope's logger.")

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return LogLevel[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown log level '{value}'") from None
        return value

    @field_validator("formatter")
    @classmethod
    def _check_formatter(cls, value: Any) -> Any:
        return _check_shape(value, "format")

    @field_validator("appenders")
    @classmethod
    def _check_appenders(cls, value: List[Any]) -> List[Any]:
        return [_check_shape(appender, "append") for appender in value]
