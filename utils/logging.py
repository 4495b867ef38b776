import atexit
import json
import logging
import logging.handlers
import os
import queue
from pathlib import Path

_queue_listener: logging.handlers.QueueListener | None = None
_atexit_registered = False

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Extra attributes copied from the LogRecord into the JSON payload
_EXTRA_FIELDS = ("env", "env_var", "config_status", "config", "path")


class ErrorLevelFilter(logging.Filter):
    """Allow only error-or-higher log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


class CustomJsonFormatter(logging.Formatter):
    def __init__(self, datefmt: str | None = None) -> None:
        super().__init__(datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        record_dict = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.name,
            "funcName": record.funcName,
            "lineno": record.lineno,
            "message": record.getMessage(),
        }

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                record_dict[name] = getattr(record, name)

        return json.dumps(record_dict, ensure_ascii=False, default=str)


def resolve_log_level(level_name: str | None = None) -> int:
    """
    Map a level name (or the LOG_LEVEL env var) to a logging level.

    Unknown names fall back to INFO with a warning.
    """
    if level_name is None:
        level_name = os.getenv("LOG_LEVEL", "INFO")
    normalized = level_name.upper()
    if normalized not in VALID_LEVELS:
        logging.warning(
            f"Invalid logging level '{level_name}'. Defaulting to 'INFO'."
        )
        normalized = "INFO"
    return getattr(logging, normalized)


def setup_logging(log_file: str = "logs/server.log", level_name: str | None = None) -> None:
    """
    Route all records through a queue to JSON console and rotating file output.

    Safe to call again; the previous listener is stopped and root handlers
    are replaced. ``level_name`` overrides LOG_LEVEL.
    """
    log_level = resolve_log_level(level_name)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    stop_logging()

    log_path = Path(log_file)
    errors_dir = log_path.parent / "errors"
    errors_dir.mkdir(parents=True, exist_ok=True)

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(maxsize=1000)
    queue_listener = _build_queue_listener(log_queue, log_level, str(log_path))

    queue_handler = logging.handlers.QueueHandler(log_queue)
    queue_handler.setLevel(log_level)
    root_logger.addHandler(queue_handler)

    queue_listener.start()
    global _queue_listener
    _queue_listener = queue_listener

    _register_logging_shutdown()

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def stop_logging() -> None:
    """Flush and stop the queue listener, if running."""
    global _queue_listener
    if _queue_listener:
        _queue_listener.stop()
        _queue_listener = None


def _build_queue_listener(
    log_queue: queue.Queue, log_level: int, log_file: str
) -> logging.handlers.QueueListener:
    """Fan queued records out to the main log, errors.jsonl and stderr."""
    formatter = CustomJsonFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    file_handler = _rotating_handler(Path(log_file), log_level, formatter)

    error_handler = _rotating_handler(
        Path(log_file).parent / "errors" / "errors.jsonl", logging.ERROR, formatter
    )
    error_handler.namer = _error_log_namer  # type: ignore[assignment]
    error_handler.addFilter(ErrorLevelFilter())

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    return logging.handlers.QueueListener(
        log_queue,
        file_handler,
        console_handler,
        error_handler,
        respect_handler_level=True,
    )


def _rotating_handler(
    path: Path, level: int, formatter: logging.Formatter
) -> logging.handlers.TimedRotatingFileHandler:
    # Daily UTC rotation, 30 days kept
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        backupCount=30,
        utc=True,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _error_log_namer(default_name: str) -> str:
    """errors.jsonl.2026-01-31 -> errors_2026-01-31.jsonl"""
    base_without_suffix, date_part = default_name.rsplit(".", 1)
    base_path = Path(base_without_suffix)
    return str(base_path.with_name(f"errors_{date_part}.jsonl"))


def _register_logging_shutdown() -> None:
    global _atexit_registered

    if _atexit_registered:
        return

    atexit.register(stop_logging)
    _atexit_registered = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
