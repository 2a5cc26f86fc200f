"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Tuple


class DocumentType(str, Enum):
    CEDULA = "cedula"
    PASSPORT = "passport"


class LoanType(str, Enum):
    PERSONAL = "personal"
    VEHICULAR = "vehicular"
    MORTGAGE = "mortgage"
    COMMERCIAL = "commercial"


class PaymentPeriod(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class RiskTier(str, Enum):
    VERY_LOW = "VERY_LOW"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


class Decision(str, Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class ApplicantProfile:
    """Loan application as submitted by the applicant"""

    name: str
    document_type: DocumentType
    document_number: str
    birth_date: date
    loan_type: LoanType
    requested_amount: float
    term_months: int
    payment_period: PaymentPeriod
    monthly_income: float
    monthly_expenses: float
    months_employed: int


@dataclass(frozen=True)
class FactorScores:
    """Per-factor scores on the 0-100 scale"""

    income_debt_ratio: int
    employment_stability: int
    loan_income_ratio: int
    age_factor: int
    document_type_factor: int


@dataclass(frozen=True)
class LoanTerms:
    """Derived loan terms; computed for rejected applications too"""

    approved_amount: float
    payment_count: int
    payment_amount: float
    annual_interest_rate: float


@dataclass(frozen=True)
class KeyFactors:
    expense_to_income_ratio_pct: int
    months_employed: int
    payment_capacity_pct: int


@dataclass(frozen=True)
class ApplicantSummary:
    name: str
    age: int
    document_type: str


@dataclass(frozen=True)
class EvaluationSummary:
    score: float
    risk_tier: RiskTier
    decision: Decision


@dataclass(frozen=True)
class LoanSummary:
    loan_type: str
    requested_amount: float
    approved_amount: float
    approval_percentage: int


@dataclass(frozen=True)
class PaymentSummary:
    period: str
    payment_count: int
    payment_amount: float
    term_months: int
    annual_interest_rate: float


@dataclass(frozen=True)
class EvaluationResult:
    """Output of a single credit evaluation"""

    applicant: ApplicantSummary
    evaluation: EvaluationSummary
    loan: LoanSummary
    payment: PaymentSummary
    key_factors: KeyFactors
    factors: FactorScores
    recommendations: Tuple[str, ...] = ()

    @property
    def approved(self) -> bool:
        return self.evaluation.decision is Decision.APPROVED


@dataclass(frozen=True)
class EvaluationOutcome:
    """
    Result envelope of CreditEvaluator.evaluate.

    A business rejection (age outside the accepted range) is reported here with
    success=False, not raised.
    """

    success: bool
    data: Optional[EvaluationResult] = None
    error: Optional[str] = None
    profile: Optional[ApplicantProfile] = field(default=None, repr=False, compare=False)
