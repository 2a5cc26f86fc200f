"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from credit_gateway.domain.models import (
    ApplicantProfile,
    Decision,
    DocumentType,
    LoanType,
    PaymentPeriod,
    RiskTier,
)


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplicantProfileSchema(CamelModel):
    """Applicant profile as submitted in POST /v1/credit-evaluation"""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(..., min_length=2, max_length=50)
    document_type: DocumentType
    document_number: str = Field(..., min_length=1)
    birth_date: date = Field(..., description="YYYY-MM-DD")
    loan_type: LoanType
    requested_amount: float = Field(..., ge=1000, le=500_000)
    term_months: int = Field(..., ge=6, le=60)
    payment_period: PaymentPeriod
    monthly_income: float = Field(..., ge=0)
    monthly_expenses: float = Field(..., ge=0)
    months_employed: int = Field(..., ge=0)

    def to_domain(self) -> ApplicantProfile:
        return ApplicantProfile(**self.model_dump())


class CreditEvaluationRequest(CamelModel):
    """Request body for POST /v1/credit-evaluation"""

    profile: ApplicantProfileSchema
    include_detailed_analysis: bool = False
    custom_criteria: Optional[Dict[str, Any]] = Field(
        None, description="Partial scoring criteria overrides, e.g. {'approval_threshold': 75}"
    )


class BatchEvaluationRequest(CamelModel):
    """Request body for POST /v1/credit-evaluation/batch; profiles are validated one by one"""

    profiles: List[Dict[str, Any]] = Field(..., min_length=1, max_length=100)


class ApplicantSummarySchema(CamelModel):
    name: str
    age: int
    document_type: str


class EvaluationSummarySchema(CamelModel):
    score: float
    risk_tier: RiskTier
    decision: Decision


class LoanSummarySchema(CamelModel):
    loan_type: str
    requested_amount: float
    approved_amount: float
    approval_percentage: int


class PaymentSummarySchema(CamelModel):
    period: str
    payment_count: int
    payment_amount: float
    term_months: int
    annual_interest_rate: float


class KeyFactorsSchema(CamelModel):
    expense_to_income_ratio_pct: int
    months_employed: int
    payment_capacity_pct: int


class FactorScoresSchema(CamelModel):
    income_debt_ratio: int
    employment_stability: int
    loan_income_ratio: int
    age_factor: int
    document_type_factor: int


class FinancialRatiosSchema(CamelModel):
    debt_to_income_ratio: float
    loan_to_income_ratio: float
    disposable_income: float
    monthly_payment_estimate: float
    payment_to_income_ratio: float


class RiskAssessmentSchema(CamelModel):
    age_risk: str
    employment_risk: str
    debt_risk: str
    loan_size_risk: str
    document_risk: str


class DetailedAnalysisSchema(CamelModel):
    financial_ratios: FinancialRatiosSchema
    risk_factors: RiskAssessmentSchema
    strengths: List[str]
    weaknesses: List[str]
    mitigation_strategies: List[str]


class AlternativeOptionsSchema(CamelModel):
    suggested_loan_amount: Optional[int] = None
    suggested_term: Optional[int] = None
    required_down_payment: Optional[float] = None
    co_signer_recommended: Optional[bool] = None


class EvaluationDataSchema(CamelModel):
    applicant: ApplicantSummarySchema
    evaluation: EvaluationSummarySchema
    loan: LoanSummarySchema
    payment: PaymentSummarySchema
    key_factors: KeyFactorsSchema
    factors: FactorScoresSchema
    recommendations: List[str] = Field(default_factory=list)
    detailed_analysis: Optional[DetailedAnalysisSchema] = None
    alternative_options: Optional[AlternativeOptionsSchema] = None


class EvaluationResponse(CamelModel):
    """Response for POST /v1/credit-evaluation"""

    success: bool
    data: Optional[EvaluationDataSchema] = None
    error: Optional[str] = None
    timestamp: str


class EvaluationOutcomeSchema(CamelModel):
    success: bool
    data: Optional[EvaluationDataSchema] = None
    error: Optional[str] = None


class BatchEvaluationResponse(CamelModel):
    """Response for POST /v1/credit-evaluation/batch"""

    total: int
    successful: int
    approved: int
    results: List[EvaluationOutcomeSchema]
    timestamp: str


class EvaluationLogItem(CamelModel):
    """Single audit record"""

    log_id: str
    request_id: Optional[str] = None
    endpoint: str
    method: str
    success: bool
    decision: Optional[str] = None
    score: Optional[float] = None
    risk_tier: Optional[str] = None
    error: Optional[str] = None
    created_at: str


class EvaluationLogResponse(CamelModel):
    """Response for GET /v1/evaluation-logs"""

    logs: List[EvaluationLogItem]
