"""Logging configuration module for cnid-synth."""

from cnid_synth.logging.setup import batch_context, get_batch_id, get_logger, setup_logging

__all__ = ["batch_context", "get_batch_id", "get_logger", "setup_logging"]
