"""
Logging setup for the safesave CLI.

Library modules only call get_logger(); the CLI calls setup_logging() once.
Every record carries a trace_id (signature prefix) so an export and the later
import of the same envelope can be matched up.

Environment Variables:
    SAFESAVE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL - default: INFO
    SAFESAVE_LOG_FORMAT: json, text - default: json
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

JSON_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(trace_id)s] %(message)s"


class TraceIDFilter(logging.Filter):
    """Give records logged without an adapter a trace_id of N/A."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def _formatter(log_format: str) -> logging.Formatter:
    if log_format == "text":
        return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    return jsonlogger.JsonFormatter(
        JSON_FIELDS,
        rename_fields={"asctime": "timestamp", "name": "logger", "levelname": "level"},
    )


def setup_logging(stream=None) -> None:
    """
    Replace root handlers with one structured handler.

    Logs go to stderr unless a stream is given; stdout carries command output.
    Unknown levels fall back to INFO, unknown formats to json.
    """
    level_name = os.getenv("SAFESAVE_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name) if level_name in LEVELS else logging.INFO

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.addFilter(TraceIDFilter())
    handler.setFormatter(_formatter(os.getenv("SAFESAVE_LOG_FORMAT", "json").lower()))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    return logging.LoggerAdapter(logging.getLogger(name), {"trace_id": trace_id or "N/A"})


def trace_id_for(signature: Optional[str]) -> str:
    """Short correlation id derived from a signature string."""
    if not isinstance(signature, str) or not signature:
        return "N/A"
    return signature[:12]
