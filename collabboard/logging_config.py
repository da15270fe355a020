"""
Logging configuration.

Log records go to stdout, as JSON lines unless ``LOG_JSON`` is turned off
for local development.

Usage:
    from collabboard.logging_config import setup_logging

    setup_logging()
"""
import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from collabboard.config import settings

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False


def build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return jsonlogger.JsonFormatter(
            fmt=JSON_FORMAT,
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        )
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> None:
    """Configure the root logger once with a single stdout handler."""
    global _configured
    if _configured:
        return

    log_level = (level or settings.LOG_LEVEL or "INFO").upper()
    if json_format is None:
        json_format = settings.LOG_JSON

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(json_format))

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level, logging.INFO))

    # SQL echo is controlled by SQLAlchemy's own logger
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).info("Logging configured: level=%s, json=%s", log_level, json_format)
