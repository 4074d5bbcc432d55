"""Logging configuration and utilities."""

from nomad.shared.logging.config import (
    LOG_FORMAT,
    StructuredFormatter,
    setup_logging,
    log_step_transition,
)

__all__ = [
    "LOG_FORMAT",
    "StructuredFormatter",
    "setup_logging",
    "log_step_transition",
]
