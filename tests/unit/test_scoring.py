"""Unit tests for risk scoring logic"""

import pytest
from credit_gateway.domain.criteria import DEFAULT_CRITERIA
from credit_gateway.domain.models import Decision, FactorScores, RiskTier
from credit_gateway.domain.scoring import (
    calculate_factor_scores,
    calculate_overall_score,
    determine_decision,
    determine_risk_tier,
    expense_ratio_pct,
    loan_income_ratio,
    score_age,
    score_document_type,
    score_employment_stability,
    score_income_debt_ratio,
    score_loan_income_ratio,
)


@pytest.mark.parametrize(
    "expenses, expected",
    [
        (10000, 100),  # 25% exactly
        (10001, 85),
        (14000, 85),  # 35%
        (14001, 70),
        (18000, 70),  # 45%
        (22000, 50),  # 55%
        (22001, 25),
        (40000, 25),
    ],
)
def test_score_income_debt_ratio_tiers(expenses, expected):
    """Thresholds are inclusive on the stricter side"""
    assert score_income_debt_ratio(40000, expenses, DEFAULT_CRITERIA) == expected


@pytest.mark.parametrize(
    "income, expenses, expected",
    [(40000, 22000, 55.0), (20000, 7000, 35.0), (30000, 13500, 45.0), (10000, 5500, 55.0)],
)
def test_expense_ratio_pct_is_exact_at_boundaries(income, expenses, expected):
    assert expense_ratio_pct(income, expenses) == expected


def test_income_debt_ratio_boundary_uses_exact_percentage():
    # 5500 / 10000 * 100 is 55.00000000000001 in binary floats
    assert score_income_debt_ratio(10000, 5500, DEFAULT_CRITERIA) == 50


def test_income_debt_ratio_zero_income_is_worst_case():
    assert expense_ratio_pct(0, 500) == 100.0
    assert score_income_debt_ratio(0, 0, DEFAULT_CRITERIA) == 25


@pytest.mark.parametrize(
    "months, expected",
    [(60, 100), (48, 100), (47, 85), (36, 85), (35, 70), (24, 70), (12, 50), (11, 25), (0, 25)],
)
def test_score_employment_stability_tiers(months, expected):
    assert score_employment_stability(months, DEFAULT_CRITERIA) == expected


@pytest.mark.parametrize(
    "requested, expected",
    [
        (36000, 100),  # 3.0x annual income of 12000
        (36001, 85),
        (48000, 85),
        (60000, 70),
        (72000, 50),
        (72001, 25),
    ],
)
def test_score_loan_income_ratio_tiers(requested, expected):
    assert score_loan_income_ratio(requested, 1000, DEFAULT_CRITERIA) == expected


def test_loan_income_ratio_zero_income_is_worst_case():
    assert loan_income_ratio(50000, 0) == 999.0
    assert score_loan_income_ratio(50000, 0, DEFAULT_CRITERIA) == 25


@pytest.mark.parametrize(
    "age, expected",
    [(25, 100), (40, 100), (55, 100), (24, 85), (56, 85), (18, 85), (70, 85), (17, 50), (71, 50)],
)
def test_score_age(age, expected):
    assert score_age(age, DEFAULT_CRITERIA) == expected


def test_score_document_type():
    assert score_document_type("cedula", DEFAULT_CRITERIA) == 100
    assert score_document_type("passport", DEFAULT_CRITERIA) == 90
    assert score_document_type("CEDULA", DEFAULT_CRITERIA) == 100
    # Unknown types fall back to the default score
    assert score_document_type("licencia", DEFAULT_CRITERIA) == 80


def test_calculate_factor_scores_strong_profile(strong_profile):
    scores = calculate_factor_scores(strong_profile, 33, DEFAULT_CRITERIA)

    assert scores == FactorScores(
        income_debt_ratio=100,
        employment_stability=100,
        loan_income_ratio=100,
        age_factor=100,
        document_type_factor=100,
    )


def test_calculate_overall_score_weights():
    """Weights: 30% income/debt, 25% employment, 25% loan/income, 10% age, 10% document"""
    assert calculate_overall_score(FactorScores(100, 100, 100, 100, 100), DEFAULT_CRITERIA) == 100.0
    assert calculate_overall_score(FactorScores(85, 100, 100, 100, 100), DEFAULT_CRITERIA) == 95.5
    assert calculate_overall_score(FactorScores(25, 25, 25, 85, 80), DEFAULT_CRITERIA) == 36.5


def test_calculate_overall_score_rounds_half_up():
    # 30 + 21.25 + 25 + 10 + 10 = 96.25
    assert calculate_overall_score(FactorScores(100, 85, 100, 100, 100), DEFAULT_CRITERIA) == 96.3


@pytest.mark.parametrize(
    "score, tier",
    [
        (100, RiskTier.VERY_LOW),
        (85, RiskTier.VERY_LOW),
        (84.9, RiskTier.LOW),
        (75, RiskTier.LOW),
        (74.9, RiskTier.MEDIUM),
        (65, RiskTier.MEDIUM),
        (64.9, RiskTier.HIGH),
        (50, RiskTier.HIGH),
        (49.9, RiskTier.VERY_HIGH),
        (0, RiskTier.VERY_HIGH),
    ],
)
def test_determine_risk_tier(score, tier):
    assert determine_risk_tier(score, DEFAULT_CRITERIA) is tier


def test_determine_decision_threshold():
    assert determine_decision(70, DEFAULT_CRITERIA) is Decision.APPROVED
    assert determine_decision(69.9, DEFAULT_CRITERIA) is Decision.REJECTED


def test_tier_and_decision_are_independent():
    """A MEDIUM score can still be approved"""
    assert determine_risk_tier(72, DEFAULT_CRITERIA) is RiskTier.MEDIUM
    assert determine_decision(72, DEFAULT_CRITERIA) is Decision.APPROVED

    assert determine_risk_tier(66, DEFAULT_CRITERIA) is RiskTier.MEDIUM
    assert determine_decision(66, DEFAULT_CRITERIA) is Decision.REJECTED
