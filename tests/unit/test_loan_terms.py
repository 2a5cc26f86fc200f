"""Unit tests for loan terms derivation"""

import dataclasses
import pytest
from credit_gateway.domain.criteria import DEFAULT_CRITERIA
from credit_gateway.domain.loan_terms import (
    calculate_approved_amount,
    calculate_interest_rate,
    calculate_key_factors,
    calculate_loan_terms,
    calculate_payment_amount,
    calculate_payment_count,
)
from credit_gateway.domain.models import LoanTerms, PaymentPeriod
from credit_gateway.utils.number_utils import round_pct


def test_calculate_approved_amount():
    assert calculate_approved_amount(100, 50000) == 50000.0
    assert calculate_approved_amount(72.5, 10000) == 7250.0
    assert calculate_approved_amount(96.3, 20000) == 19260.0


def test_approved_amount_never_exceeds_requested():
    for score in (25, 50.5, 70, 99.9, 100):
        assert calculate_approved_amount(score, 123456) <= 123456


@pytest.mark.parametrize(
    "score, period, expected",
    [
        (70, PaymentPeriod.WEEKLY, 8),  # 0.70 is inclusive
        (70.001, PaymentPeriod.WEEKLY, 13),
        (85, PaymentPeriod.WEEKLY, 13),
        (100, PaymentPeriod.WEEKLY, 15),
        (50, PaymentPeriod.BIWEEKLY, 4),
        (85, PaymentPeriod.BIWEEKLY, 7),
        (85.1, PaymentPeriod.BIWEEKLY, 8),
        (50, PaymentPeriod.MONTHLY, 3),
        (80, PaymentPeriod.MONTHLY, 6),
        (100, PaymentPeriod.MONTHLY, 12),
    ],
)
def test_calculate_payment_count_table(score, period, expected):
    assert calculate_payment_count(score, period, DEFAULT_CRITERIA) == expected


def test_calculate_payment_count_unknown_period():
    assert calculate_payment_count(90, "daily", DEFAULT_CRITERIA) == 0


@pytest.mark.parametrize(
    "score, expected",
    [
        (100, 8.0),
        (96.3, 8.99),
        (85, 12.0),
        (80, 14.0),
        (75, 16.0),
        (70, 18.0),
        (65, 20.0),
        (57.5, 22.5),
        (50, 25.0),
        (37.5, 26.25),
        (0, 30.0),
    ],
)
def test_calculate_interest_rate_bands(score, expected):
    assert calculate_interest_rate(score, DEFAULT_CRITERIA) == expected


def test_calculate_interest_rate_clamped():
    """Out-of-range scores still produce a rate within [8, 30]"""
    assert calculate_interest_rate(110, DEFAULT_CRITERIA) == 8.0
    assert calculate_interest_rate(-50, DEFAULT_CRITERIA) == 30.0


def test_calculate_payment_amount():
    assert calculate_payment_amount(50000, 12) == 4166.67
    assert calculate_payment_amount(1000, 0) == 0.0


def test_calculate_loan_terms():
    terms = calculate_loan_terms(100, 50000, PaymentPeriod.MONTHLY, DEFAULT_CRITERIA)

    assert terms == LoanTerms(
        approved_amount=50000.0,
        payment_count=12,
        payment_amount=4166.67,
        annual_interest_rate=8.0,
    )


def test_payment_amount_ignores_interest_rate():
    """Installments are a plain split; the rate is informational"""
    terms = calculate_loan_terms(37.5, 800000, PaymentPeriod.MONTHLY, DEFAULT_CRITERIA)

    assert terms.annual_interest_rate == 26.25
    assert terms.payment_count == 3
    assert terms.payment_amount == 100000.0
    assert terms.payment_amount * terms.payment_count == terms.approved_amount


def test_calculate_key_factors(strong_profile):
    factors = calculate_key_factors(strong_profile, 4166.67)

    assert factors.expense_to_income_ratio_pct == 25
    assert factors.months_employed == 60
    # 30000 / 4166.67 * 100
    assert factors.payment_capacity_pct == 720


def test_key_factors_scale_by_payments_per_month(strong_profile):
    weekly = dataclasses.replace(strong_profile, payment_period=PaymentPeriod.WEEKLY)
    biweekly = dataclasses.replace(strong_profile, payment_period=PaymentPeriod.BIWEEKLY)

    # 30000 disposable over 4 x 1000 and 2 x 1000
    assert calculate_key_factors(weekly, 1000).payment_capacity_pct == 750
    assert calculate_key_factors(biweekly, 1000).payment_capacity_pct == 1500


def test_key_factors_division_guards(strong_profile):
    no_income = dataclasses.replace(strong_profile, monthly_income=0)

    assert calculate_key_factors(strong_profile, 0).payment_capacity_pct == 0
    assert calculate_key_factors(no_income, 1000).expense_to_income_ratio_pct == 100


def test_key_factors_expense_ratio_matches_scoring(strong_profile):
    at_poor_threshold = dataclasses.replace(strong_profile, monthly_expenses=22000)

    assert calculate_key_factors(at_poor_threshold, 1000).expense_to_income_ratio_pct == 55


def test_key_factors_negative_capacity_rounds_half_toward_positive(strong_profile):
    overspent = dataclasses.replace(strong_profile, monthly_income=10000, monthly_expenses=10025)

    # -25 / 1000 * 100 = -2.5
    assert calculate_key_factors(overspent, 1000).payment_capacity_pct == -2


@pytest.mark.parametrize("value, expected", [(2.5, 3), (-2.5, -2), (-2.51, -3), (719.99, 720)])
def test_round_pct(value, expected):
    assert round_pct(value) == expected
