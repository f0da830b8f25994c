"""
Logging configuration for the PDF Lambda.

One stdout handler (CloudWatch reads stdout) with either a plain text or a
one-object-per-line JSON formatter. Request-scoped loggers attach the Lambda
request id to each record as structured data rather than baking it into the
message, so both formatters can render it.
"""

import json
import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s%(request_tag)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Request ids are UUIDs; the first block is enough to correlate a run
REQUEST_TAG_LENGTH = 8


def _short_request_id(record: logging.LogRecord) -> Optional[str]:
    request_id = getattr(record, "request_id", None)
    if not request_id:
        return None
    return request_id[:REQUEST_TAG_LENGTH]


class TextFormatter(logging.Formatter):
    """Human readable lines: `2024-01-01 12:00:00 [INFO] name [req:8f5e2c1a]: msg`."""

    def __init__(self):
        super().__init__(TEXT_FORMAT, datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        short_id = _short_request_id(record)
        record.request_tag = f" [req:{short_id}]" if short_id else ""
        return super().format(record)


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line, for CloudWatch Logs Insights.

    Messages are serialized with json.dumps, so quotes, backslashes and
    newlines (wkhtmltopdf stderr has all three) stay valid JSON.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class RequestLogger(logging.LoggerAdapter):
    """
    Logger adapter that attaches the current request id to every record.

    Wraps a standard logging.Logger so module-level handlers and levels apply.
    """

    def __init__(self, name: str, request_id: Optional[str] = None):
        super().__init__(logging.getLogger(name), {"request_id": request_id})

    @property
    def request_id(self) -> Optional[str]:
        return self.extra["request_id"]

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("request_id", self.request_id)
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ("simple" or "json")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # The Lambda runtime installs its own handler; replace it
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JsonFormatter() if format == "json" else TextFormatter())

    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str, request_id: Optional[str] = None) -> RequestLogger:
    """
    Get a request logger instance.

    Args:
        name: Logger name (usually __name__)
        request_id: Optional AWS request id

    Returns:
        RequestLogger instance
    """
    return RequestLogger(name, request_id)
