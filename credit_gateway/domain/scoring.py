"""Risk scoring engine - factor scores, weighted score, risk tier and decision"""

from decimal import Decimal, ROUND_HALF_UP

from credit_gateway.domain.criteria import ScoringCriteria, ThresholdScale
from credit_gateway.domain.models import ApplicantProfile, Decision, FactorScores, RiskTier
from credit_gateway.utils.number_utils import exact_ratio

# Worst-case ratios used when income is zero
NO_INCOME_DEBT_RATIO_PCT = 100.0
NO_INCOME_LOAN_RATIO = 999.0


def _score_at_most(value: float, scale: ThresholdScale) -> int:
    for threshold, score in scale.steps():
        if value <= threshold:
            return score
    return scale.floor_score

def _score_at_least(value: float, scale: ThresholdScale) -> int:
    for threshold, score in scale.steps():
        if value >= threshold:
            return score
    return scale.floor_score


def expense_ratio_pct(monthly_income: float, monthly_expenses: float) -> float:
    """Monthly expenses as a percentage of monthly income; 22000 of 40000 is exactly 55.0"""
    if monthly_income <= 0:
        return NO_INCOME_DEBT_RATIO_PCT
    return float(exact_ratio(monthly_expenses, monthly_income) * 100)


def loan_income_ratio(requested_amount: float, monthly_income: float) -> float:
    """Requested amount in multiples of annual income"""
    annual_income = monthly_income * 12
    if annual_income <= 0:
        return NO_INCOME_LOAN_RATIO
    return float(exact_ratio(requested_amount, annual_income))


def score_income_debt_ratio(monthly_income: float, monthly_expenses: float, criteria: ScoringCriteria) -> int:
    return _score_at_most(expense_ratio_pct(monthly_income, monthly_expenses), criteria.income_debt_ratio)


def score_employment_stability(months_employed: int, criteria: ScoringCriteria) -> int:
    return _score_at_least(months_employed, criteria.employment_stability)


def score_loan_income_ratio(requested_amount: float, monthly_income: float, criteria: ScoringCriteria) -> int:
    return _score_at_most(loan_income_ratio(requested_amount, monthly_income), criteria.loan_income_ratio)


def score_age(age: int, criteria: ScoringCriteria) -> int:
    ages = criteria.age_range
    if ages.optimal_min <= age <= ages.optimal_max:
        return ages.optimal_score
    if ages.min_age <= age <= ages.max_age:
        return ages.accepted_score
    return ages.fallback_score


def score_document_type(document_type: str, criteria: ScoringCriteria) -> int:
    return criteria.document_score(document_type)


def calculate_factor_scores(profile: ApplicantProfile, age: int, criteria: ScoringCriteria) -> FactorScores:
    """Score each of the five factors independently"""
    return FactorScores(
        income_debt_ratio=score_income_debt_ratio(profile.monthly_income, profile.monthly_expenses, criteria),
        employment_stability=score_employment_stability(profile.months_employed, criteria),
        loan_income_ratio=score_loan_income_ratio(profile.requested_amount, profile.monthly_income, criteria),
        age_factor=score_age(age, criteria),
        document_type_factor=score_document_type(profile.document_type, criteria),
    )


def calculate_overall_score(scores: FactorScores, criteria: ScoringCriteria) -> float:
    """
    Weighted sum of the factor scores, rounded half-up to one decimal.

    Weights (defaults):
    - 30%: Income/debt ratio
    - 25%: Employment stability
    - 25%: Loan/income ratio
    - 10%: Age
    - 10%: Document type

    Summed in Decimal so e.g. 87.75 rounds to 87.8 rather than drifting on
    binary float error.
    """
    weights = criteria.weights.as_decimals()
    total = sum(
        (Decimal(getattr(scores, factor)) * weight for factor, weight in weights.items()),
        Decimal(0),
    )
    return float(total.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def determine_risk_tier(score: float, criteria: ScoringCriteria) -> RiskTier:
    """
    Map score to a risk tier.

    Tiers: >=85 VERY_LOW, >=75 LOW, >=65 MEDIUM, >=50 HIGH, else VERY_HIGH.
    """
    for min_score, tier in criteria.risk_tiers:
        if score >= min_score:
            return tier
    return RiskTier.VERY_HIGH


def determine_decision(score: float, criteria: ScoringCriteria) -> Decision:
    """Approval threshold is independent of the tier boundaries (72 is MEDIUM and APPROVED)"""
    return Decision.APPROVED if score >= criteria.approval_threshold else Decision.REJECTED
