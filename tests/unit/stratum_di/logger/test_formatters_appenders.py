"""Unit tests for built-in formatters, appenders and logger configuration."""

import io
import logging

import pytest
from pydantic import ValidationError

from stratum_di.logger import (
    LogLevel,
    LoggerConfig,
    LogRecord,
    MemoryAppender,
    StdlibAppender,
    StreamAppender,
    TemplateFormatter,
    default_formatter,
)


def _record(**overrides):
    values = {"logger_name": "svc", "level": LogLevel.INFO, "message": "hello"}
    values.update(overrides)
    return LogRecord(**values)


class TestDefaultFormatter:
    """Test cases for default_formatter."""

    def test_plain(self):
        """Test a record without category or context."""
        assert default_formatter(_record()) == "[INFO] svc: hello"

    def test_category_and_sorted_context(self):
        """Test category rendering and context key order."""
        record = _record(category="db", context={"z": 1, "a": "x"})

        assert default_formatter(record) == "[INFO] svc(db): hello a=x z=1"


class TestTemplateFormatter:
    """Test cases for TemplateFormatter."""

    def test_default_template(self):
        """Test the default template."""
        assert TemplateFormatter().format(_record(level=LogLevel.ERROR)) == "ERROR svc: hello"

    def test_context_fields(self):
        """Test that context keys are available to the template."""
        formatter = TemplateFormatter("{message} for {user} [{category}]")

        assert formatter.format(_record(context={"user": "ada"})) == "hello for ada []"


class TestAppenders:
    """Test cases for appenders."""

    def test_memory_appender(self):
        """Test storing and clearing entries."""
        sink = MemoryAppender()
        record = _record()

        sink.append(record, "text")

        assert sink.entries == [(record, "text")]
        assert sink.texts == ["text"]
        assert sink.records == [record]
        sink.clear()
        assert sink.entries == []

    def test_stream_appender(self):
        """Test writing lines to a stream."""
        stream = io.StringIO()
        appender = StreamAppender(stream)

        appender.append(_record(), "one")
        appender.append(_record(), "two")

        assert stream.getvalue() == "one\ntwo\n"

    def test_stdlib_appender(self, caplog):
        """Test forwarding to the logging module."""
        appender = StdlibAppender("stratum.tests")

        with caplog.at_level(logging.DEBUG, logger="stratum.tests"):
            appender.append(_record(level=LogLevel.WARNING, category="db", context={"id": 3}), "slow query")

        [entry] = caplog.records
        assert entry.levelno == logging.WARNING
        assert entry.getMessage() == "slow query"
        assert entry.stratum_category == "db"
        assert entry.stratum_context == {"id": 3}


class TestLoggerConfig:
    """Test cases for LoggerConfig validation."""

    def test_level_names_case_insensitive(self):
        """Test parsing level names."""
        assert LoggerConfig(level="warning").level == LogLevel.WARNING

    def test_level_numbers(self):
        """Test numeric levels."""
        assert LoggerConfig(level=40).level == LogLevel.ERROR

    def test_unknown_field_forbidden(self):
        """Test that extra fields are rejected."""
        with pytest.raises(ValidationError):
            LoggerConfig(colour="red")

    def test_class_formatter_accepted(self):
        """Test that classes providing format() are valid formatters."""
        assert LoggerConfig(formatter=TemplateFormatter).formatter is TemplateFormatter

    def test_class_without_method_rejected(self):
        """Test that classes lacking the method are rejected."""
        with pytest.raises(ValidationError):
            LoggerConfig(appenders=[TemplateFormatter])

    def test_frozen(self):
        """Test that configuration is immutable."""
        config = LoggerConfig()

        with pytest.raises(ValidationError):
            config.name = "other"
