"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from credit_gateway.domain.evaluation import CreditEvaluator
from credit_gateway.infrastructure.audit import EvaluationAuditService
from credit_gateway.infrastructure.clients.decision_webhook import DecisionWebhookClient
from credit_gateway.infrastructure.database.session import SessionLocal


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_evaluator() -> CreditEvaluator:
    """Provide an evaluator bound to the default criteria and today's date"""
    return CreditEvaluator()


def get_audit_service() -> EvaluationAuditService:
    """Provide the evaluation audit writer"""
    return EvaluationAuditService(SessionLocal)


def get_decision_webhook_client() -> DecisionWebhookClient:
    """Provide decision notification client instance"""
    return DecisionWebhookClient()
