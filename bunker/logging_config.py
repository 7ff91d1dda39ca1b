"""
Logging for the volume core: Rich console for the operator, rotating file for history.

Code logs through the standard ``logging`` module. Mount operations pass
``extra={"operation": ...}``; the file format shows that field so one
mount/unmount/probe sequence can be followed in the log file.
"""

import logging
import logging.handlers

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings

FILE_FORMAT = (
    "%(asctime)s - %(levelname)s - [%(operation)s] - "
    "%(filename)s:%(lineno)d in %(funcName)s() - "
    "%(message)s"
)


class OperationFieldFilter(logging.Filter):
    """Gives every record an ``operation`` attribute so FILE_FORMAT never fails."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "operation"):
            record.operation = "-"
        return True


def _console_handler(settings: Settings) -> logging.Handler:
    handler = RichHandler(
        console=Console(width=120),
        show_path=True,
        markup=True,
        rich_tracebacks=True,
    )
    handler.setLevel(settings.log_level)
    return handler


def _file_handler(settings: Settings) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=settings.log_file_path,
        when="midnight",
        backupCount=settings.log_retention_days,
        encoding="utf-8",
    )
    handler.setLevel(settings.log_level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    handler.addFilter(OperationFieldFilter())
    return handler


def setup_logging(settings: Settings) -> None:
    """Replace the root logger's handlers with console + file output."""
    settings.log_directory.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(_console_handler(settings))
    root_logger.addHandler(_file_handler(settings))

    # Subprocess transport chatter
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.info(
        f"[bold green]Logging initialized[/] - "
        f"File: [cyan]{settings.log_file_path}[/], "
        f"Level: [yellow]{settings.log_level}[/], "
        f"Retention: [blue]{settings.log_retention_days}[/] days"
    )
