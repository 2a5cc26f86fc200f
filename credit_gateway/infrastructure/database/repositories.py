"""Data access layer for evaluation audit logs"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from credit_gateway.infrastructure.database.models import EvaluationLog


class EvaluationLogRepository:
    """Repository for evaluation audit records"""

    def __init__(self, db: Session):
        self.db = db

    def create_log(
        self,
        endpoint: str,
        method: str,
        success: bool,
        request_id: Optional[str] = None,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
        decision: Optional[str] = None,
        score: Optional[float] = None,
        risk_tier: Optional[str] = None,
        error: Optional[str] = None,
    ) -> EvaluationLog:
        """Persist an audit record; the caller commits"""
        db_log = EvaluationLog(
            request_id=request_id,
            endpoint=endpoint,
            method=method,
            ip=ip,
            user_agent=user_agent,
            success=success,
            decision=decision,
            score=score,
            risk_tier=risk_tier,
            error=error,
        )
        self.db.add(db_log)
        self.db.flush()
        return db_log

    def get_logs_by_endpoint(self, endpoint: str, limit: int = 100) -> List[EvaluationLog]:
        """Fetch most recent records for an endpoint"""
        return (
            self.db.query(EvaluationLog)
            .filter(EvaluationLog.endpoint == endpoint)
            .order_by(EvaluationLog.created_at.desc())
            .limit(limit)
            .all()
        )

    def get_logs_by_date_range(self, start: datetime, end: datetime, limit: int = 100) -> List[EvaluationLog]:
        """Fetch records created within [start, end]"""
        return (
            self.db.query(EvaluationLog)
            .filter(EvaluationLog.created_at >= start, EvaluationLog.created_at <= end)
            .order_by(EvaluationLog.created_at.desc())
            .limit(limit)
            .all()
        )
