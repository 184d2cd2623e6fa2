"""Tokens published by the logger library."""

from stratum_di.domain import Multiplicity, create_token

LOGGER_CONFIG = create_token("LOGGER_CONFIG")
LOG_FORMATTER = create_token("LOG_FORMATTER")
LOG_APPENDER = create_token("LOG_APPENDER", Multiplicity.MULTI)
LOG_CLOCK = create_token("LOG_CLOCK")
LOG_MEMORY = create_token("LOG_MEMORY")
LOG_SILENT = create_token("LOG_SILENT")
LOGGER = create_token("LOGGER")
