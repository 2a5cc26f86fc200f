"""GET /v1/evaluation-logs - Query the evaluation audit trail"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from credit_gateway.api.v1.schemas import EvaluationLogItem, EvaluationLogResponse
from credit_gateway.config import settings
from credit_gateway.infrastructure.database.repositories import EvaluationLogRepository
from credit_gateway.infrastructure.database.session import get_db

router = APIRouter()


@router.get("/evaluation-logs", response_model=EvaluationLogResponse)
def get_evaluation_logs(
    endpoint: Optional[str] = Query(None, description="Request path, e.g. /v1/credit-evaluation"),
    start: Optional[datetime] = Query(None, description="Range start (inclusive)"),
    end: Optional[datetime] = Query(None, description="Range end (inclusive)"),
    limit: int = Query(settings.audit_log_default_limit, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """
    Retrieve audit records by endpoint or by creation date range.

    Returns:
        Most recent records first
    """
    log_repo = EvaluationLogRepository(db)

    if endpoint:
        logs = log_repo.get_logs_by_endpoint(endpoint, limit=limit)
    elif start and end:
        if start > end:
            raise HTTPException(status_code=400, detail="start must not be after end")
        logs = log_repo.get_logs_by_date_range(start, end, limit=limit)
    else:
        raise HTTPException(status_code=400, detail="Provide endpoint or both start and end")

    return EvaluationLogResponse(
        logs=[
            EvaluationLogItem(
                log_id=str(log.id),
                request_id=log.request_id,
                endpoint=log.endpoint,
                method=log.method,
                success=log.success,
                decision=log.decision,
                score=log.score,
                risk_tier=log.risk_tier,
                error=log.error,
                created_at=log.created_at.isoformat(),
            )
            for log in logs
        ]
    )
