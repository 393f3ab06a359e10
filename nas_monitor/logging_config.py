import logging
import logging.handlers
import sys

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings

FILE_FORMAT = "%(asctime)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"
# journald and autostart logs add their own timestamps
PLAIN_CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def _console_handler(settings: Settings) -> logging.Handler:
    if sys.stderr.isatty():
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True, width=120),
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(PLAIN_CONSOLE_FORMAT))
    handler.setLevel(settings.log_level)
    return handler


def _file_handler(settings: Settings) -> logging.Handler:
    settings.log_directory.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=settings.log_file_path,
        when="midnight",
        backupCount=settings.log_retention_days,
        encoding="utf-8",
    )
    handler.setLevel(settings.log_level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(settings: Settings) -> None:
    """Route all daemon logging to the console and a daily rotated file."""
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)

    # Called again when the API lifespan starts; drop handlers from the first call
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)

    root_logger.addHandler(_console_handler(settings))
    root_logger.addHandler(_file_handler(settings))

    for noisy in ("uvicorn.access", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.info(
        f"Logging initialized - File: {settings.log_file_path}, "
        f"Level: {settings.log_level}, "
        f"Retention: {settings.log_retention_days} days"
    )
