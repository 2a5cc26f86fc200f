"""Evaluation audit trail: structured log line plus a persisted EvaluationLog row"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from credit_gateway.infrastructure.database.repositories import EvaluationLogRepository
from credit_gateway.infrastructure.observability.metrics import audit_write_failures_counter


@dataclass
class AuditEntry:
    endpoint: str
    method: str
    success: bool
    request_id: Optional[str] = None
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    decision: Optional[str] = None
    score: Optional[float] = None
    risk_tier: Optional[str] = None
    error: Optional[str] = None


class EvaluationAuditService:
    """
    Records the outcome of each evaluation request.

    Runs as a background task after the response is sent, with its own
    session, so a failed write never changes what the caller received.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def record(self, entry: AuditEntry) -> None:
        logging.info(
            "Evaluation request processed",
            extra={
                "request_id": entry.request_id,
                "endpoint": entry.endpoint,
                "method": entry.method,
                "success": entry.success,
                "ip": entry.ip,
                "decision": entry.decision,
                "score": entry.score,
                "risk_tier": entry.risk_tier,
            },
        )

        db = self.session_factory()
        try:
            EvaluationLogRepository(db).create_log(
                endpoint=entry.endpoint,
                method=entry.method,
                success=entry.success,
                request_id=entry.request_id,
                ip=entry.ip,
                user_agent=entry.user_agent,
                decision=entry.decision,
                score=entry.score,
                risk_tier=entry.risk_tier,
                error=entry.error,
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            audit_write_failures_counter.inc()
            logging.error(f"Audit write failed: {e}", extra={"request_id": entry.request_id})
        finally:
            db.close()
