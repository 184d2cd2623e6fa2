from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from stratum_di.logger.levels import LogLevel


class LogRecord(BaseModel):
    """A single log event.

    Attributes:
        logger_name: Name of the logger that created the record.
        level: Severity of the event.
        message: The log message.
        category: Optional category used to route to category handlers.
        context: Extra key/value pairs supplied by the caller.
        timestamp: Seconds since the epoch when timestamps are enabled.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    logger_name: str = Field(..., description="Name of the originating logger.")
    level: LogLevel = Field(..., description="Severity of the event.")
    message: str = Field(..., description="The log message.")
    category: Optional[str] = Field(default=None, description="Category used for handler routing.")
    context: Dict[str, Any] = Field(default_factory=dict, description="Extra key/value pairs.")
    timestamp: Optional[float] = Field(default=None, description="Creation time, if timestamps are enabled.")
