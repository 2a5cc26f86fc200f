"""Credit evaluation engine - main entry point for scoring an applicant"""

from datetime import date
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from credit_gateway.domain.analysis import generate_recommendations
from credit_gateway.domain.criteria import DEFAULT_CRITERIA, ScoringCriteria
from credit_gateway.domain.exceptions import DomainException
from credit_gateway.domain.loan_terms import calculate_key_factors, calculate_loan_terms
from credit_gateway.domain.models import (
    ApplicantProfile,
    ApplicantSummary,
    EvaluationOutcome,
    EvaluationResult,
    EvaluationSummary,
    LoanSummary,
    PaymentSummary,
)
from credit_gateway.domain.scoring import (
    calculate_factor_scores,
    calculate_overall_score,
    determine_decision,
    determine_risk_tier,
)
from credit_gateway.domain.validation import build_profile
from credit_gateway.utils.date_utils import calculate_age
from credit_gateway.utils.number_utils import round_pct

ProfileInput = Union[ApplicantProfile, Mapping[str, Any]]


def age_out_of_range_message(age: int, criteria: ScoringCriteria) -> str:
    ages = criteria.age_range
    return f"age out of range ({ages.min_age}–{ages.max_age}); computed age: {age}"


class CreditEvaluator:
    """
    Stateless scoring pipeline bound to one set of criteria.

    Flow:
    1. Validate the profile (raises MissingFieldError / InvalidProfileError)
    2. Gate on age; out of range returns a failed outcome
    3. Score the five factors and weight them into the overall score
    4. Derive risk tier and decision
    5. Derive loan terms and key factors

    Criteria are immutable, so one evaluator can serve concurrent callers.
    """

    def __init__(self, criteria: ScoringCriteria = DEFAULT_CRITERIA, clock: Callable[[], date] = date.today):
        self.criteria = criteria
        self.clock = clock

    def with_criteria(self, overrides: Optional[Mapping[str, Any]]) -> "CreditEvaluator":
        """Evaluator using these criteria overrides; this instance is left untouched"""
        if not overrides:
            return self
        return CreditEvaluator(self.criteria.with_overrides(overrides), clock=self.clock)

    def evaluate(self, profile: ProfileInput) -> EvaluationOutcome:
        if not isinstance(profile, ApplicantProfile):
            profile = build_profile(profile)

        criteria = self.criteria
        age = calculate_age(profile.birth_date, self.clock())
        if not criteria.age_range.min_age <= age <= criteria.age_range.max_age:
            return EvaluationOutcome(success=False, error=age_out_of_range_message(age, criteria), profile=profile)

        factors = calculate_factor_scores(profile, age, criteria)
        score = calculate_overall_score(factors, criteria)
        risk_tier = determine_risk_tier(score, criteria)
        decision = determine_decision(score, criteria)

        terms = calculate_loan_terms(score, profile.requested_amount, profile.payment_period, criteria)
        key_factors = calculate_key_factors(profile, terms.payment_amount)

        result = EvaluationResult(
            applicant=ApplicantSummary(
                name=profile.name,
                age=age,
                document_type=profile.document_type.value,
            ),
            evaluation=EvaluationSummary(score=score, risk_tier=risk_tier, decision=decision),
            loan=LoanSummary(
                loan_type=profile.loan_type.value,
                requested_amount=profile.requested_amount,
                approved_amount=terms.approved_amount,
                approval_percentage=round_pct(terms.approved_amount / profile.requested_amount * 100)
                if profile.requested_amount > 0
                else 0,
            ),
            payment=PaymentSummary(
                period=profile.payment_period.value,
                payment_count=terms.payment_count,
                payment_amount=terms.payment_amount,
                term_months=profile.term_months,
                annual_interest_rate=terms.annual_interest_rate,
            ),
            key_factors=key_factors,
            factors=factors,
            recommendations=generate_recommendations(profile, factors),
        )
        return EvaluationOutcome(success=True, data=result, profile=profile)

    def evaluate_many(self, profiles: Iterable[ProfileInput]) -> List[EvaluationOutcome]:
        """
        Evaluate profiles one by one.

        A profile that fails validation yields a failed outcome in its slot
        instead of aborting the batch.
        """
        outcomes = []
        for profile in profiles:
            try:
                outcomes.append(self.evaluate(profile))
            except DomainException as e:
                outcomes.append(EvaluationOutcome(success=False, error=str(e)))
        return outcomes
