"""POST /v1/credit-evaluation - Credit evaluation endpoints"""

import dataclasses
import logging
import time
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from credit_gateway.api.dependencies import (
    get_audit_service,
    get_decision_webhook_client,
    get_evaluator,
    get_request_id,
)
from credit_gateway.api.errors import rejection_response, utc_timestamp, validation_error_response
from credit_gateway.api.v1.schemas import (
    BatchEvaluationRequest,
    BatchEvaluationResponse,
    CreditEvaluationRequest,
    EvaluationDataSchema,
    EvaluationOutcomeSchema,
    EvaluationResponse,
)
from credit_gateway.domain.analysis import build_detailed_analysis, suggest_alternatives
from credit_gateway.domain.evaluation import CreditEvaluator
from credit_gateway.domain.exceptions import DomainException
from credit_gateway.domain.models import ApplicantProfile, EvaluationOutcome, EvaluationResult
from credit_gateway.domain.report import render_text_report
from credit_gateway.infrastructure.audit import AuditEntry, EvaluationAuditService
from credit_gateway.infrastructure.clients.decision_webhook import DecisionWebhookClient
from credit_gateway.infrastructure.observability.logging import log_evaluation
from credit_gateway.infrastructure.observability.metrics import record_evaluation, record_invalid_profile

router = APIRouter()


def _audit_entry(request: Request, request_id: str, outcome: Optional[EvaluationOutcome] = None, error: Optional[str] = None) -> AuditEntry:
    entry = AuditEntry(
        endpoint=request.url.path,
        method=request.method,
        success=bool(outcome and outcome.success),
        request_id=request_id,
        ip=request.client.host if request.client else "unknown",
        user_agent=request.headers.get("user-agent", "unknown"),
        error=error,
    )
    if outcome is not None:
        entry.error = outcome.error
        if outcome.data is not None:
            entry.decision = outcome.data.evaluation.decision.value
            entry.score = outcome.data.evaluation.score
            entry.risk_tier = outcome.data.evaluation.risk_tier.value
    return entry


def _to_schema(result: EvaluationResult, profile: Optional[ApplicantProfile] = None, detailed: bool = False) -> EvaluationDataSchema:
    data = dataclasses.asdict(result)
    if detailed and profile is not None:
        data["detailed_analysis"] = dataclasses.asdict(build_detailed_analysis(profile, result))
        data["alternative_options"] = dataclasses.asdict(suggest_alternatives(profile, result))
    return EvaluationDataSchema(**data)


def _record(outcome: EvaluationOutcome, request_id: str, start_time: float) -> None:
    duration_ms = (time.time() - start_time) * 1000
    data = outcome.data
    evaluation = data.evaluation if data else None
    record_evaluation(
        outcome.success,
        approved=bool(data and data.approved),
        score=evaluation.score if evaluation else None,
        risk_tier=evaluation.risk_tier.value if evaluation else None,
    )
    log_evaluation(
        request_id,
        outcome.success,
        decision=evaluation.decision.value if evaluation else None,
        score=evaluation.score if evaluation else None,
        risk_tier=evaluation.risk_tier.value if evaluation else None,
        duration_ms=duration_ms,
        error=outcome.error,
    )


@router.post("/credit-evaluation", response_model=EvaluationResponse, response_model_exclude_none=True)
def evaluate_credit(
    request_body: CreditEvaluationRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    evaluator: CreditEvaluator = Depends(get_evaluator),
    audit_service: EvaluationAuditService = Depends(get_audit_service),
    webhook_client: DecisionWebhookClient = Depends(get_decision_webhook_client),
):
    """
    Evaluate an applicant profile.

    Flow:
    1. Apply custom criteria, if any, to a fresh evaluator
    2. Run the scoring pipeline
    3. Record metrics and logs; audit and notify in the background
    4. Return 200 with the evaluation, or 400 when the applicant is rejected
       before scoring
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        profile = request_body.profile.to_domain()
        outcome = evaluator.with_criteria(request_body.custom_criteria).evaluate(profile)

    except DomainException as e:
        record_invalid_profile()
        logging.warning(f"Invalid evaluation request: {e}", extra={"request_id": request_id})
        background_tasks.add_task(audit_service.record, _audit_entry(request, request_id, error=str(e)))
        return validation_error_response(str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    _record(outcome, request_id, start_time)
    background_tasks.add_task(audit_service.record, _audit_entry(request, request_id, outcome))

    if not outcome.success:
        return rejection_response(outcome.error)

    result = outcome.data
    if webhook_client.enabled:
        background_tasks.add_task(
            webhook_client.notify,
            {
                "event": "CREDIT_EVALUATED",
                "request_id": request_id,
                "decision": result.evaluation.decision.value,
                "score": result.evaluation.score,
                "risk_tier": result.evaluation.risk_tier.value,
                "applicant_name": result.applicant.name,
                "requested_amount": result.loan.requested_amount,
                "approved_amount": result.loan.approved_amount,
            },
        )

    return EvaluationResponse(
        success=True,
        data=_to_schema(result, profile, detailed=request_body.include_detailed_analysis),
        timestamp=utc_timestamp(),
    )


@router.post("/credit-evaluation/batch", response_model=BatchEvaluationResponse, response_model_exclude_none=True)
def evaluate_batch(
    request_body: BatchEvaluationRequest,
    request: Request,
    evaluator: CreditEvaluator = Depends(get_evaluator),
):
    """
    Evaluate several raw profiles.

    Each profile is validated on its own; a missing field or age rejection
    fails that slot only.
    """
    request_id = get_request_id(request)
    outcomes = evaluator.evaluate_many(request_body.profiles)

    results = []
    for outcome in outcomes:
        record_evaluation(
            outcome.success,
            approved=bool(outcome.data and outcome.data.approved),
            score=outcome.data.evaluation.score if outcome.data else None,
            risk_tier=outcome.data.evaluation.risk_tier.value if outcome.data else None,
        )
        results.append(
            EvaluationOutcomeSchema(
                success=outcome.success,
                data=_to_schema(outcome.data) if outcome.data else None,
                error=outcome.error,
            )
        )

    successful = sum(1 for outcome in outcomes if outcome.success)
    approved = sum(1 for outcome in outcomes if outcome.data and outcome.data.approved)
    logging.info(
        "Batch credit evaluation completed",
        extra={"request_id": request_id, "total": len(outcomes), "successful": successful, "approved": approved},
    )

    return BatchEvaluationResponse(
        total=len(outcomes),
        successful=successful,
        approved=approved,
        results=results,
        timestamp=utc_timestamp(),
    )


@router.post("/credit-evaluation/report", response_class=PlainTextResponse)
def evaluation_report(
    request_body: CreditEvaluationRequest,
    request: Request,
    evaluator: CreditEvaluator = Depends(get_evaluator),
):
    """Evaluate a profile and render the result as a plain-text report"""
    request_id = get_request_id(request)
    profile = request_body.profile.to_domain()

    try:
        outcome = evaluator.with_criteria(request_body.custom_criteria).evaluate(profile)
    except DomainException as e:
        logging.warning(f"Invalid report request: {e}", extra={"request_id": request_id})
        return validation_error_response(str(e))

    if not outcome.success:
        return rejection_response(outcome.error)

    result = outcome.data
    analysis = alternatives = None
    if request_body.include_detailed_analysis:
        analysis = build_detailed_analysis(profile, result)
        alternatives = suggest_alternatives(profile, result)

    return PlainTextResponse(render_text_report(profile, result, analysis, alternatives))


@router.get("/credit-evaluation/criteria")
def get_criteria(evaluator: CreditEvaluator = Depends(get_evaluator)):
    """Scoring criteria currently applied to evaluations"""
    return dataclasses.asdict(evaluator.criteria)
