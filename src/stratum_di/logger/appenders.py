import logging
import sys
from typing import IO, List, Optional, Tuple

from stratum_di.logger.records import LogRecord


class MemoryAppender:
    """Keeps formatted records in memory.

    Attributes:
        entries: ``(record, text)`` pairs in arrival order.
    """

    def __init__(self) -> None:
        self.entries: List[Tuple[LogRecord, str]] = []

    def append(self, record: LogRecord, text: str) -> None:
        self.entries.append((record, text))

    @property
    def texts(self) -> List[str]:
        return [text for _, text in self.entries]

    @property
    def records(self) -> List[LogRecord]:
        return [record for record, _ in self.entries]

    def clear(self) -> None:
        self.entries.clear()


class StreamAppender:
    """Writes one line per record to a text stream, ``sys.stderr`` by default."""

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self.stream = stream

    def append(self, record: LogRecord, text: str) -> None:
        stream = self.stream if self.stream is not None else sys.stderr
        stream.write(text + "\n")
        stream.flush()


class StdlibAppender:
    """Forwards records to a standard library logger.

    The record's category and context travel in ``extra`` as
    ``stratum_category`` and ``stratum_context``.
    """

    def __init__(self, logger_name: str = "stratum") -> None:
        self.logger = logging.getLogger(logger_name)

    def append(self, record: LogRecord, text: str) -> None:
        self.logger.log(
            int(record.level),
            text,
            extra={"stratum_category": record.category, "stratum_context": dict(record.context)},
        )
