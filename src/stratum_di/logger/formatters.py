from stratum_di.logger.records import LogRecord


def default_formatter(record: LogRecord) -> str:
    """Render ``[LEVEL] name(category): message key=value``."""
    origin = record.logger_name if record.category is None else f"{record.logger_name}({record.category})"
    text = f"[{record.level.name}] {origin}: {record.message}"
    if record.context:
        text += " " + " ".join(f"{key}={value}" for key, value in sorted(record.context.items()))
    return text


class TemplateFormatter:
    """Formats records with a ``str.format`` template.

    Available fields: ``level``, ``name``, ``category``, ``message``,
    ``timestamp`` and every key of the record context.

    Example:
        >>> formatter = TemplateFormatter("{level} {name} - {message}")
        >>> provide_logger({"formatter": formatter})
    """

    def __init__(self, template: str = "{level} {name}: {message}") -> None:
        self.template = template

    def format(self, record: LogRecord) -> str:
        return self.template.format(
            **record.context,
            level=record.level.name,
            name=record.logger_name,
            category=record.category or "",
            message=record.message,
            timestamp=record.timestamp,
        )
