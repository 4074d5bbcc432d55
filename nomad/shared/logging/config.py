"""
Logging configuration.

Plain text logging is the default; JSON output is available for
deployments that ship logs to a collector. Step transitions of the
booking orchestrator are logged as structured records.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpcore", "httpx", "openai", "urllib3", "stripe")


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs log records as JSON.

    Each log entry includes:
    - timestamp: ISO format datetime (UTC)
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - extra: Structured payload attached by log_step_transition
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra"):
            log_entry["extra"] = record.extra

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", log_format: str = "text") -> None:
    """
    Configure root logging for the application.

    Args:
        level: Log level name
        log_format: "json" for StructuredFormatter output, anything else
            for the pipe-separated text format
    """
    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_step_transition(
    event: str,
    step: Dict[str, Any],
    orchestration_id: str,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log an orchestration step transition.

    Args:
        event: Name of the event (e.g. "step_running", "step_failed")
        step: Step record as a dict (step, worker, status, message)
        orchestration_id: Run identifier
        logger: Logger instance to use. Defaults to "nomad.booking".
    """
    if logger is None:
        logger = logging.getLogger("nomad.booking")

    record = logger.makeRecord(
        logger.name,
        logging.INFO,
        "",
        0,
        "Step transition: %s | step=%s, status=%s",
        args=(event, step.get("step"), step.get("status")),
        exc_info=None,
    )
    record.extra = {
        "event": event,
        "orchestration_id": orchestration_id,
        "step": step.get("step"),
        "worker": step.get("worker"),
        "status": step.get("status"),
        "message": step.get("message"),
    }

    logger.handle(record)
