"""Logging configuration for cnid-synth.

Records go to stderr, either as JSON objects (the default) or as plain
text lines. Every record produced while a batch is being generated carries
that batch's id; see ``batch_context``.
"""

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from pythonjsonlogger import jsonlogger


SERVICE_NAME = "cnid-synth"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")

_NO_BATCH = "-"

batch_id_var: ContextVar[str] = ContextVar("batch_id", default="")


class BatchIdFilter(logging.Filter):
    """Stamp the active batch id onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.batch_id = batch_id_var.get() or _NO_BATCH
        return True


def _json_formatter() -> logging.Formatter:
    return jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        rename_fields={"levelname": "level", "asctime": "timestamp"},
        static_fields={"service": SERVICE_NAME},
    )


def _text_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s %(levelname)-8s %(name)s [%(batch_id)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> None:
    """Install a single stderr handler on the root logger.

    Args:
        level: Level name. Falls back to CNID_SYNTH_LOG_LEVEL, then INFO.
        json_format: Emit JSON. Falls back to CNID_SYNTH_LOG_FORMAT == "json",
            which is the default.

    Calling this again replaces the previous handler.
    """
    if level is None:
        level = os.getenv("CNID_SYNTH_LOG_LEVEL", "INFO")
    level = level.upper()
    if json_format is None:
        json_format = os.getenv("CNID_SYNTH_LOG_FORMAT", "json").lower() == "json"

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(BatchIdFilter())
    handler.setFormatter(_json_formatter() if json_format else _text_formatter())

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


@contextmanager
def batch_context(batch_id: str) -> Iterator[str]:
    """Tag log records emitted inside the block with ``batch_id``.

    The previous value is restored on exit, so nested or consecutive
    batches never leak their id into unrelated records.

    Example:
        >>> with batch_context("3f2a9c1b7d4e"):
        ...     logger.info("Batch started")
    """
    token = batch_id_var.set(batch_id)
    try:
        yield batch_id
    finally:
        batch_id_var.reset(token)


def get_batch_id() -> str:
    """Id of the batch in progress, or an empty string outside a batch."""
    return batch_id_var.get()
