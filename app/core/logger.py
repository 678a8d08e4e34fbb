"""
Logging setup shared by every module.
Provides correlation-aware loggers and a dedicated audit trail channel.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.config import settings


class CorrelationFilter(logging.Filter):
    """Guarantees every record carries a correlation_id attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True


def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(correlation_id)s | %(message)s"
    ))
    handler.addFilter(CorrelationFilter())
    return handler


def setup_logger(name: str, level: str = settings.LOG_LEVEL) -> logging.Logger:
    """Returns a configured logger. Idempotent: handlers are attached only once."""
    log = logging.getLogger(name)
    if not log.handlers:
        log.addHandler(_build_handler())
    log.setLevel(level.upper())
    log.propagate = False
    return log


logger = setup_logger("selefni")
audit_logger = setup_logger("selefni.audit")


def get_logger_with_correlation(correlation_id: Optional[str]) -> logging.LoggerAdapter:
    """Wraps the application logger so every line is stamped with the request correlation ID."""
    return logging.LoggerAdapter(logger, {"correlation_id": correlation_id or "-"})


def audit_log(action: str, user: str, resource: str, details: Optional[Dict[str, Any]] = None) -> None:
    """
    Emits a structured audit event.
    Audit lines are JSON so they can be shipped to a log index without parsing rules.
    """
    details = details or {}
    event = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "user": user,
        "resource": resource,
        "details": details,
    }
    audit_logger.info(
        json.dumps(event, default=str),
        extra={"correlation_id": details.get("correlation_id", "-")}
    )
