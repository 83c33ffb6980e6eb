import json
import logging
import os
from logging.handlers import RotatingFileHandler

DEFAULT_LOG_BACKUP_COUNT = 10
DEFAULT_LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_FILENAME = "propsheet.log"


_HTTPX_REQUEST_SUBSTR = "HTTP Request:"


class _HttpxRequestFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except Exception:
            return True
        return _HTTPX_REQUEST_SUBSTR not in message


_httpx_request_filter = _HttpxRequestFilter()


def suppress_httpx_request_logs() -> None:
    logging.getLogger("httpx").addFilter(_httpx_request_filter)


class JsonFormatter(logging.Formatter):
    """One JSON object per line; dict messages are embedded as-is."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, "%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
        }
        if isinstance(record.msg, dict) and not record.args:
            payload["msg"] = record.msg
        else:
            payload["msg"] = record.getMessage()
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _reset_handlers(logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(level="INFO", json_logs=False, log_dir=None, max_bytes=DEFAULT_LOG_MAX_BYTES):
    """Configure the propsheet logger; httpx records share its handlers minus request lines."""
    level = level.upper() if isinstance(level, str) else level
    logger = logging.getLogger("propsheet")
    http_logger = logging.getLogger("httpx")
    _reset_handlers(logger)
    _reset_handlers(http_logger)
    logger.setLevel(level)
    http_logger.setLevel(level)

    if json_logs:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, LOG_FILENAME),
            maxBytes=max_bytes,
            backupCount=DEFAULT_LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for handler in logger.handlers:
        http_logger.addHandler(handler)
    http_logger.propagate = False

    suppress_httpx_request_logs()
    return logger
