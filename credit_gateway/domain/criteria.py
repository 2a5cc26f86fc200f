"""
Scoring criteria for credit evaluation.

All tables are immutable and scanned in a fixed order so the boundary
behaviour can be read straight off the data. Custom criteria are applied by
building a new ScoringCriteria with with_overrides(); the defaults are never
modified.
"""

import dataclasses
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

from credit_gateway.domain.exceptions import InvalidCriteriaError
from credit_gateway.domain.models import PaymentPeriod, RiskTier


@dataclass(frozen=True)
class ThresholdScale:
    """
    Four thresholds mapped onto a five-level score scale.

    For ratio factors a value passes a level when it is <= the threshold
    (thresholds ascend); for employment it passes when >= (thresholds descend).
    """

    excellent: float
    good: float
    fair: float
    poor: float
    scores: Tuple[int, int, int, int, int] = (100, 85, 70, 50, 25)

    def steps(self) -> Tuple[Tuple[float, int], ...]:
        thresholds = (self.excellent, self.good, self.fair, self.poor)
        return tuple(zip(thresholds, self.scores[:4]))

    @property
    def floor_score(self) -> int:
        return self.scores[4]


@dataclass(frozen=True)
class AgeRange:
    min_age: int = 18
    max_age: int = 70
    optimal_min: int = 25
    optimal_max: int = 55
    optimal_score: int = 100
    accepted_score: int = 85
    fallback_score: int = 50


@dataclass(frozen=True)
class FactorWeights:
    income_debt_ratio: str = "0.30"
    employment_stability: str = "0.25"
    loan_income_ratio: str = "0.25"
    age_factor: str = "0.10"
    document_type_factor: str = "0.10"

    def as_decimals(self) -> Dict[str, Decimal]:
        return {name: Decimal(str(value)) for name, value in dataclasses.asdict(self).items()}


@dataclass(frozen=True)
class PaymentCountRow:
    """Number of payments granted when score/100 <= upper_bound"""

    upper_bound: float
    weekly: int
    biweekly: int
    monthly: int

    def count_for(self, period: str) -> int:
        if period == PaymentPeriod.WEEKLY:
            return self.weekly
        if period == PaymentPeriod.BIWEEKLY:
            return self.biweekly
        if period == PaymentPeriod.MONTHLY:
            return self.monthly
        return 0


@dataclass(frozen=True)
class InterestRateBand:
    """
    Annual rate for scores >= min_score:
        base_rate + ((anchor_score - score) / span) * spread

    min_score None marks the catch-all band.
    """

    tier: RiskTier
    min_score: Optional[float]
    base_rate: float
    anchor_score: float
    span: float
    spread: float

    def rate_for(self, score: float) -> float:
        return self.base_rate + ((self.anchor_score - score) / self.span) * self.spread


@dataclass(frozen=True)
class ScoringCriteria:
    income_debt_ratio: ThresholdScale = ThresholdScale(excellent=25, good=35, fair=45, poor=55)
    employment_stability: ThresholdScale = ThresholdScale(excellent=48, good=36, fair=24, poor=12)
    loan_income_ratio: ThresholdScale = ThresholdScale(excellent=3.0, good=4.0, fair=5.0, poor=6.0)
    age_range: AgeRange = AgeRange()
    document_scores: Tuple[Tuple[str, int], ...] = (("cedula", 100), ("passport", 90))
    default_document_score: int = 80
    weights: FactorWeights = FactorWeights()
    risk_tiers: Tuple[Tuple[float, RiskTier], ...] = (
        (85, RiskTier.VERY_LOW),
        (75, RiskTier.LOW),
        (65, RiskTier.MEDIUM),
        (50, RiskTier.HIGH),
    )
    approval_threshold: float = 70
    payment_counts: Tuple[PaymentCountRow, ...] = (
        PaymentCountRow(upper_bound=0.70, weekly=8, biweekly=4, monthly=3),
        PaymentCountRow(upper_bound=0.85, weekly=13, biweekly=7, monthly=6),
        PaymentCountRow(upper_bound=1.00, weekly=15, biweekly=8, monthly=12),
    )
    interest_rate_bands: Tuple[InterestRateBand, ...] = (
        InterestRateBand(RiskTier.VERY_LOW, 85, base_rate=8, anchor_score=100, span=15, spread=4),
        InterestRateBand(RiskTier.LOW, 75, base_rate=12, anchor_score=85, span=10, spread=4),
        InterestRateBand(RiskTier.MEDIUM, 65, base_rate=16, anchor_score=75, span=10, spread=4),
        InterestRateBand(RiskTier.HIGH, 50, base_rate=20, anchor_score=65, span=15, spread=5),
        InterestRateBand(RiskTier.VERY_HIGH, None, base_rate=25, anchor_score=50, span=50, spread=5),
    )
    min_interest_rate: float = 8.0
    max_interest_rate: float = 30.0

    def document_score(self, document_type: str) -> int:
        key = getattr(document_type, "value", document_type)
        return dict(self.document_scores).get(str(key).lower(), self.default_document_score)

    def with_overrides(self, overrides: Optional[Mapping[str, Any]]) -> "ScoringCriteria":
        """
        Return a copy with the given overrides applied.

        Supported keys: income_debt_ratio, employment_stability,
        loan_income_ratio, age_range and weights (partial mappings merged into
        the current values), document_scores (mapping), default_document_score
        and approval_threshold.
        """
        if not overrides:
            return self

        changes: Dict[str, Any] = {}
        nested = {
            "income_debt_ratio": self.income_debt_ratio,
            "employment_stability": self.employment_stability,
            "loan_income_ratio": self.loan_income_ratio,
            "age_range": self.age_range,
            "weights": self.weights,
        }

        for key, value in overrides.items():
            if key in nested:
                if not isinstance(value, Mapping):
                    raise InvalidCriteriaError(f"{key} override must be a mapping")
                fields = dict(value)
                try:
                    if "scores" in fields:
                        fields["scores"] = tuple(fields["scores"])
                    changes[key] = dataclasses.replace(nested[key], **fields)
                except TypeError as e:
                    raise InvalidCriteriaError(f"Invalid {key} override: {e}") from e
            elif key == "document_scores":
                if not isinstance(value, Mapping):
                    raise InvalidCriteriaError("document_scores override must be a mapping")
                merged = dict(self.document_scores)
                try:
                    merged.update({str(k).lower(): int(v) for k, v in value.items()})
                except (TypeError, ValueError) as e:
                    raise InvalidCriteriaError(f"Invalid document_scores override: {e}") from e
                changes[key] = tuple(merged.items())
            elif key in ("default_document_score", "approval_threshold"):
                changes[key] = value
            else:
                raise InvalidCriteriaError(f"Unknown criteria key: {key}")

        criteria = dataclasses.replace(self, **changes)
        criteria.validate()
        return criteria

    def validate(self) -> None:
        """Raise InvalidCriteriaError if a table is out of order or weights don't sum to 1"""
        numbers = [
            *(bound for scale in (self.income_debt_ratio, self.employment_stability, self.loan_income_ratio)
              for bound, _ in scale.steps()),
            *dataclasses.astuple(self.age_range),
            self.default_document_score,
            self.approval_threshold,
        ]
        if not all(isinstance(value, (int, float)) and not isinstance(value, bool) for value in numbers):
            raise InvalidCriteriaError("Criteria thresholds and scores must be numeric")

        for name in ("income_debt_ratio", "employment_stability", "loan_income_ratio"):
            scores = getattr(self, name).scores
            if (
                not isinstance(scores, tuple)
                or len(scores) != 5
                or not all(isinstance(score, int) and not isinstance(score, bool) for score in scores)
            ):
                raise InvalidCriteriaError(f"{name} scores must be five integers")
            if list(scores) != sorted(scores, reverse=True):
                raise InvalidCriteriaError(f"{name} scores must be descending")

        for name in ("income_debt_ratio", "loan_income_ratio"):
            thresholds = [bound for bound, _ in getattr(self, name).steps()]
            if thresholds != sorted(thresholds):
                raise InvalidCriteriaError(f"{name} thresholds must be ascending")

        employment = [bound for bound, _ in self.employment_stability.steps()]
        if employment != sorted(employment, reverse=True):
            raise InvalidCriteriaError("employment_stability thresholds must be descending")

        ages = self.age_range
        if not (ages.min_age <= ages.optimal_min <= ages.optimal_max <= ages.max_age):
            raise InvalidCriteriaError("age_range must satisfy min <= optimal_min <= optimal_max <= max")

        try:
            total = sum(self.weights.as_decimals().values())
        except ArithmeticError as e:
            raise InvalidCriteriaError(f"Invalid weight value: {e}") from e
        if total != Decimal("1"):
            raise InvalidCriteriaError(f"Factor weights must sum to 1.00, got {total}")


DEFAULT_CRITERIA = ScoringCriteria()
