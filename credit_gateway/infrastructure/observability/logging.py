"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from credit_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_evaluation(
    request_id: str,
    success: bool,
    decision: Optional[str],
    score: Optional[float],
    risk_tier: Optional[str],
    duration_ms: float,
    error: Optional[str] = None,
) -> None:
    """Log structured evaluation outcome for analysis"""
    logging.info(
        "Credit evaluation completed",
        extra={
            "request_id": request_id,
            "step": "evaluation_complete",
            "success": success,
            "decision": decision,
            "score": score,
            "risk_tier": risk_tier,
            "error": error,
            "duration_ms": duration_ms,
        },
    )
