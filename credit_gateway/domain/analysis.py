"""Detailed financial analysis and alternative offers for an evaluated application"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from credit_gateway.domain.models import ApplicantProfile, DocumentType, EvaluationResult, FactorScores, RiskTier
from credit_gateway.domain.scoring import NO_INCOME_LOAN_RATIO, loan_income_ratio
from credit_gateway.utils.number_utils import round_half_up

# Rate used only for the amortized payment estimate, not for the offered terms
ESTIMATE_ANNUAL_RATE = 0.12
MAX_SUGGESTED_TERM_MONTHS = 72
SUGGESTED_DOWN_PAYMENT_SHARE = 0.20
MAX_LOAN_ANNUAL_INCOME_MULTIPLE = 3


@dataclass(frozen=True)
class FinancialRatios:
    debt_to_income_ratio: float
    loan_to_income_ratio: float
    disposable_income: float
    monthly_payment_estimate: float
    payment_to_income_ratio: float


@dataclass(frozen=True)
class RiskAssessment:
    age_risk: str
    employment_risk: str
    debt_risk: str
    loan_size_risk: str
    document_risk: str


@dataclass(frozen=True)
class DetailedAnalysis:
    financial_ratios: FinancialRatios
    risk_factors: RiskAssessment
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    mitigation_strategies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AlternativeOptions:
    """Offered only to rejected applicants; empty otherwise"""

    suggested_loan_amount: Optional[int] = None
    suggested_term: Optional[int] = None
    required_down_payment: Optional[float] = None
    co_signer_recommended: Optional[bool] = None


WEAK_FACTOR_SCORE = 60
WEAK_AGE_FACTOR_SCORE = 80
LONG_TERM_MONTHS = 60
ALL_CRITERIA_MET = "Profile meets all criteria for loan approval"


def generate_recommendations(profile: ApplicantProfile, factors: FactorScores) -> Tuple[str, ...]:
    """
    Advice for the applicant based on the weakest factors.

    Always returns at least one entry; a profile with no weak factor gets
    ALL_CRITERIA_MET.
    """
    recommendations = []

    if factors.income_debt_ratio < WEAK_FACTOR_SCORE:
        recommendations.append("Consider reducing monthly expenses or increasing income before applying")
    if factors.employment_stability < WEAK_FACTOR_SCORE:
        recommendations.append("Employment stability is a concern. Consider waiting until you have more job tenure")
    if factors.loan_income_ratio < WEAK_FACTOR_SCORE:
        recommendations.append("Requested loan amount is high relative to income. Consider a smaller loan amount")
    if factors.age_factor < WEAK_AGE_FACTOR_SCORE:
        recommendations.append("Age factor may affect loan terms. Consider shorter loan periods")
    if profile.term_months > LONG_TERM_MONTHS:
        recommendations.append("Consider a shorter loan term to reduce total interest paid")

    return tuple(recommendations) or (ALL_CRITERIA_MET,)


def amortized_monthly_payment(principal: float, term_months: int, annual_rate: float = ESTIMATE_ANNUAL_RATE) -> float:
    """Standard annuity payment: P * r * (1+r)^n / ((1+r)^n - 1)"""
    if term_months <= 0:
        return 0.0
    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return principal / term_months
    growth = (1 + monthly_rate) ** term_months
    return principal * monthly_rate * growth / (growth - 1)


def assess_age_risk(age: int) -> str:
    if age < 25:
        return "Young applicant - limited credit history expected"
    if age > 60:
        return "Approaching retirement - income stability concern"
    if age <= 45:
        return "Prime age group - low risk"
    return "Mature applicant - stable income expected"


def assess_employment_risk(months: int) -> str:
    if months < 6:
        return "Very new employment - high risk"
    if months < 12:
        return "Recent employment - moderate risk"
    if months < 24:
        return "Established employment - low risk"
    return "Long-term employment - very low risk"


def assess_debt_risk(ratio: float) -> str:
    if ratio > 0.6:
        return "Very high debt burden - high risk"
    if ratio > 0.5:
        return "High debt burden - moderate risk"
    if ratio > 0.3:
        return "Moderate debt burden - low risk"
    return "Low debt burden - very low risk"


def assess_loan_size_risk(ratio: float) -> str:
    if ratio > 6:
        return "Loan amount too high relative to income"
    if ratio > 4:
        return "Large loan relative to income - monitor closely"
    if ratio > 3:
        return "Moderate loan size - acceptable"
    return "Conservative loan size - low risk"


DOCUMENT_RISK = {
    DocumentType.CEDULA: "National ID - lowest risk",
    DocumentType.PASSPORT: "Passport - low risk, verify residency",
}


def assess_document_risk(document_type: DocumentType) -> str:
    return DOCUMENT_RISK.get(document_type, "Unknown document type - high risk")


def calculate_financial_ratios(profile: ApplicantProfile) -> FinancialRatios:
    income = profile.monthly_income
    payment_estimate = amortized_monthly_payment(profile.requested_amount, profile.term_months)

    return FinancialRatios(
        debt_to_income_ratio=round_half_up(profile.monthly_expenses / income, 4) if income > 0 else 1.0,
        loan_to_income_ratio=round_half_up(loan_income_ratio(profile.requested_amount, income), 4),
        disposable_income=round_half_up(income - profile.monthly_expenses, 2),
        monthly_payment_estimate=round_half_up(payment_estimate, 2),
        payment_to_income_ratio=round_half_up(payment_estimate / income, 4) if income > 0 else NO_INCOME_LOAN_RATIO,
    )


def identify_strengths(profile: ApplicantProfile, result: EvaluationResult) -> List[str]:
    strengths = []
    factors = result.factors

    if factors.employment_stability >= 80:
        strengths.append(f"Excellent employment stability ({profile.months_employed} months)")
    if factors.loan_income_ratio >= 80:
        strengths.append("Conservative loan amount relative to income")
    if factors.age_factor >= 90:
        strengths.append("Optimal age group for lending")
    if profile.monthly_income >= 100_000:
        strengths.append("High monthly income provides good repayment capacity")
    if profile.monthly_income - profile.monthly_expenses >= 50_000:
        strengths.append("Substantial disposable income available")
    if profile.document_type is DocumentType.CEDULA:
        strengths.append("National identification document provides verification ease")

    return strengths


def identify_weaknesses(profile: ApplicantProfile, result: EvaluationResult) -> List[str]:
    weaknesses = []
    factors = result.factors
    age = result.applicant.age

    if factors.income_debt_ratio < 60:
        weaknesses.append("High debt-to-income ratio may strain repayment capacity")
    if factors.employment_stability < 60:
        weaknesses.append("Limited employment history increases risk")
    if factors.loan_income_ratio < 60:
        weaknesses.append("Loan amount is high relative to income")
    if profile.term_months > 60:
        weaknesses.append("Long loan term increases total interest cost")
    if profile.monthly_income - profile.monthly_expenses < 30_000:
        weaknesses.append("Limited disposable income for loan payments")
    if age < 25:
        weaknesses.append("Young age may indicate limited credit experience")
    if age > 55:
        weaknesses.append("Age approaching retirement may affect long-term repayment")

    return weaknesses


# Keyword found in a weakness -> strategies that address it
MITIGATIONS = (
    ("debt-to-income", (
        "Consider debt consolidation or reduction before loan approval",
        "Require proof of debt reduction plan",
    )),
    ("employment history", (
        "Request employment verification and contract details",
        "Consider requiring a co-signer or guarantor",
    )),
    ("Loan amount", (
        "Reduce loan amount or increase down payment",
        "Consider shorter loan term to reduce risk",
    )),
    ("disposable income", (
        "Require detailed budget analysis",
        "Consider income verification from multiple sources",
    )),
    ("age", (
        "Adjust loan terms based on age-related factors",
        "Consider life insurance requirement",
    )),
)


def generate_mitigation_strategies(weaknesses: List[str]) -> List[str]:
    strategies = []
    for keyword, remedies in MITIGATIONS:
        if any(keyword.lower() in weakness.lower() for weakness in weaknesses):
            strategies.extend(remedies)
    return strategies


def build_detailed_analysis(profile: ApplicantProfile, result: EvaluationResult) -> DetailedAnalysis:
    ratios = calculate_financial_ratios(profile)
    income = profile.monthly_income
    # Risk bands are judged on the unrounded ratios
    debt_ratio = profile.monthly_expenses / income if income > 0 else 1.0
    weaknesses = identify_weaknesses(profile, result)

    return DetailedAnalysis(
        financial_ratios=ratios,
        risk_factors=RiskAssessment(
            age_risk=assess_age_risk(result.applicant.age),
            employment_risk=assess_employment_risk(profile.months_employed),
            debt_risk=assess_debt_risk(debt_ratio),
            loan_size_risk=assess_loan_size_risk(loan_income_ratio(profile.requested_amount, income)),
            document_risk=assess_document_risk(profile.document_type),
        ),
        strengths=identify_strengths(profile, result),
        weaknesses=weaknesses,
        mitigation_strategies=generate_mitigation_strategies(weaknesses),
    )


def suggest_alternatives(profile: ApplicantProfile, result: EvaluationResult) -> AlternativeOptions:
    """
    Alternatives for a rejected application.

    - Lower amount when the request exceeds 3x annual income
    - Term extended by 12 months, capped at 72
    - 20% down payment
    - Co-signer for HIGH / VERY_HIGH risk
    """
    if result.approved:
        return AlternativeOptions()

    max_recommended = profile.monthly_income * 12 * MAX_LOAN_ANNUAL_INCOME_MULTIPLE
    suggested_amount = int(max_recommended) if profile.requested_amount > max_recommended else None

    suggested_term = None
    if profile.term_months < MAX_SUGGESTED_TERM_MONTHS:
        suggested_term = min(MAX_SUGGESTED_TERM_MONTHS, profile.term_months + 12)

    co_signer = result.evaluation.risk_tier in (RiskTier.HIGH, RiskTier.VERY_HIGH) or None

    return AlternativeOptions(
        suggested_loan_amount=suggested_amount,
        suggested_term=suggested_term,
        required_down_payment=round_half_up(profile.requested_amount * SUGGESTED_DOWN_PAYMENT_SHARE, 2),
        co_signer_recommended=co_signer,
    )
