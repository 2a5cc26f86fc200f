"""Loan terms derivation: approved amount, payment schedule and interest rate"""

from credit_gateway.domain.criteria import ScoringCriteria
from credit_gateway.domain.models import ApplicantProfile, KeyFactors, LoanTerms, PaymentPeriod
from credit_gateway.domain.scoring import expense_ratio_pct
from credit_gateway.utils.number_utils import exact_ratio, round_half_up, round_pct

PERIODS_PER_MONTH = {
    PaymentPeriod.WEEKLY: 4,
    PaymentPeriod.BIWEEKLY: 2,
    PaymentPeriod.MONTHLY: 1,
}


def calculate_approved_amount(score: float, requested_amount: float) -> float:
    """Approved amount = score% of the requested amount"""
    return round_half_up((score / 100) * requested_amount, 2)


def calculate_payment_count(score: float, payment_period: str, criteria: ScoringCriteria) -> int:
    """
    Number of payments for the score and payment period.

    Rows are scanned in ascending order and the first row with
    score/100 <= upper_bound wins:

        score/100 <=  weekly  biweekly  monthly
        0.70          8       4         3
        0.85          13      7         6
        1.00          15      8         12

    Unknown payment periods get 0 payments.
    """
    fraction = score / 100
    for row in criteria.payment_counts:
        if fraction <= row.upper_bound:
            return row.count_for(payment_period)
    return 0


def calculate_interest_rate(score: float, criteria: ScoringCriteria) -> float:
    """
    Annual interest rate interpolated within the band of the score's tier.

    VERY_LOW 8-12%, LOW 12-16%, MEDIUM 16-20%, HIGH 20-25%, VERY_HIGH 25-30%;
    the result is clamped to [8, 30] and rounded to 2 decimals.
    """
    band = criteria.interest_rate_bands[-1]
    for candidate in criteria.interest_rate_bands:
        if candidate.min_score is None or score >= candidate.min_score:
            band = candidate
            break

    rate = band.rate_for(score)
    rate = max(criteria.min_interest_rate, min(criteria.max_interest_rate, rate))
    return round_half_up(rate, 2)


def calculate_payment_amount(approved_amount: float, payment_count: int) -> float:
    """
    Even split of the approved amount across payments.

    The annual interest rate is informational only and is not folded into the
    installment.
    """
    if payment_count <= 0:
        return 0.0
    return round_half_up(approved_amount / payment_count, 2)


def calculate_loan_terms(
    score: float,
    requested_amount: float,
    payment_period: str,
    criteria: ScoringCriteria,
) -> LoanTerms:
    approved_amount = calculate_approved_amount(score, requested_amount)
    payment_count = calculate_payment_count(score, payment_period, criteria)

    return LoanTerms(
        approved_amount=approved_amount,
        payment_count=payment_count,
        # Splits the unrounded approved amount
        payment_amount=calculate_payment_amount((score / 100) * requested_amount, payment_count),
        annual_interest_rate=calculate_interest_rate(score, criteria),
    )


def calculate_key_factors(profile: ApplicantProfile, payment_amount: float) -> KeyFactors:
    """
    Summary ratios shown next to the decision.

    payment_capacity_pct is disposable income over the monthly debt service
    (payment amount times payments per month); it is 0 when there is no payment.
    """
    periods_per_month = PERIODS_PER_MONTH.get(profile.payment_period, 1)
    monthly_payment = payment_amount * periods_per_month

    if monthly_payment > 0:
        disposable_income = profile.monthly_income - profile.monthly_expenses
        payment_capacity = round_pct(exact_ratio(disposable_income, monthly_payment) * 100)
    else:
        payment_capacity = 0

    return KeyFactors(
        expense_to_income_ratio_pct=round_pct(expense_ratio_pct(profile.monthly_income, profile.monthly_expenses)),
        months_employed=profile.months_employed,
        payment_capacity_pct=payment_capacity,
    )
