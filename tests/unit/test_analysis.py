"""Unit tests for detailed analysis, alternative offers and the text report"""

import dataclasses
import pytest
from datetime import date
from credit_gateway.domain.analysis import (
    ALL_CRITERIA_MET,
    AlternativeOptions,
    amortized_monthly_payment,
    assess_debt_risk,
    assess_employment_risk,
    build_detailed_analysis,
    generate_recommendations,
    suggest_alternatives,
)
from credit_gateway.domain.models import DocumentType, FactorScores
from credit_gateway.domain.report import render_text_report


@pytest.fixture
def weak_profile(strong_profile):
    return dataclasses.replace(
        strong_profile,
        document_type=DocumentType.PASSPORT,
        birth_date=date(2003, 6, 1),
        requested_amount=800000,
        monthly_income=10000,
        monthly_expenses=9000,
        months_employed=3,
    )


def test_amortized_monthly_payment():
    # 50,000 at 12% over 24 months
    assert amortized_monthly_payment(50000, 24) == pytest.approx(2353.67, abs=0.01)
    assert amortized_monthly_payment(1200, 12, annual_rate=0) == 100
    assert amortized_monthly_payment(1200, 0) == 0.0


def test_risk_descriptions():
    assert assess_employment_risk(3) == "Very new employment - high risk"
    assert assess_employment_risk(30) == "Long-term employment - very low risk"
    assert assess_debt_risk(0.25) == "Low debt burden - very low risk"
    assert assess_debt_risk(0.9) == "Very high debt burden - high risk"


def test_detailed_analysis_strong_applicant(evaluator, strong_profile):
    result = evaluator.evaluate(strong_profile).data
    analysis = build_detailed_analysis(strong_profile, result)

    assert analysis.financial_ratios.debt_to_income_ratio == 0.25
    assert analysis.financial_ratios.disposable_income == 30000.0
    assert analysis.financial_ratios.monthly_payment_estimate == 2353.67
    assert analysis.risk_factors.age_risk == "Prime age group - low risk"
    assert analysis.risk_factors.document_risk == "National ID - lowest risk"
    assert analysis.strengths == [
        "Excellent employment stability (60 months)",
        "Conservative loan amount relative to income",
        "Optimal age group for lending",
        "National identification document provides verification ease",
    ]
    assert analysis.weaknesses == []
    assert analysis.mitigation_strategies == []


def test_detailed_analysis_weak_applicant(evaluator, weak_profile):
    result = evaluator.evaluate(weak_profile).data
    analysis = build_detailed_analysis(weak_profile, result)

    assert len(analysis.weaknesses) == 5
    assert "Young age may indicate limited credit experience" in analysis.weaknesses
    assert "Require proof of debt reduction plan" in analysis.mitigation_strategies
    assert "Reduce loan amount or increase down payment" in analysis.mitigation_strategies
    assert "Consider life insurance requirement" in analysis.mitigation_strategies
    assert len(analysis.mitigation_strategies) == 10


def test_alternatives_only_for_rejected(evaluator, strong_profile, weak_profile):
    approved = evaluator.evaluate(strong_profile).data
    assert suggest_alternatives(strong_profile, approved) == AlternativeOptions()

    rejected = evaluator.evaluate(weak_profile).data
    options = suggest_alternatives(weak_profile, rejected)

    assert options.suggested_loan_amount == 360000
    assert options.suggested_term == 36
    assert options.required_down_payment == 160000.0
    assert options.co_signer_recommended is True


def test_render_text_report(evaluator, strong_profile):
    result = evaluator.evaluate(strong_profile).data
    report = render_text_report(strong_profile, result, build_detailed_analysis(strong_profile, result))

    assert report.startswith("=== CREDIT EVALUATION REPORT ===")
    assert report.endswith("=== END OF REPORT ===")
    assert "Name: Ana Ruiz" in report
    assert "Amount: $50,000.00" in report
    assert "Overall Score: 100.0/100" in report
    assert "Decision: APPROVED" in report
    assert "Payments: 12 x $4,166.67" in report
    assert "- Optimal age group for lending" in report
    assert "ALTERNATIVE OPTIONS" not in report


def test_render_text_report_with_alternatives(evaluator, weak_profile):
    result = evaluator.evaluate(weak_profile).data
    report = render_text_report(weak_profile, result, alternatives=suggest_alternatives(weak_profile, result))

    assert "Decision: REJECTED" in report
    assert "Suggested Loan Amount: $360,000.00" in report
    assert "Co-signer Recommended: Yes" in report


def test_recommendations_fallback_when_no_factor_is_weak(evaluator, strong_profile):
    result = evaluator.evaluate(strong_profile).data

    assert result.recommendations == (ALL_CRITERIA_MET,)
    assert generate_recommendations(strong_profile, result.factors) == ("Profile meets all criteria for loan approval",)


def test_recommendations_for_weak_factors(weak_profile):
    factors = FactorScores(
        income_debt_ratio=25,
        employment_stability=25,
        loan_income_ratio=25,
        age_factor=85,
        document_type_factor=90,
    )
    long_term = dataclasses.replace(weak_profile, term_months=72)

    recommendations = generate_recommendations(long_term, factors)

    assert recommendations == (
        "Consider reducing monthly expenses or increasing income before applying",
        "Employment stability is a concern. Consider waiting until you have more job tenure",
        "Requested loan amount is high relative to income. Consider a smaller loan amount",
        "Consider a shorter loan term to reduce total interest paid",
    )
    assert ALL_CRITERIA_MET not in recommendations


def test_recommendations_flag_age_factor_below_80(strong_profile):
    factors = FactorScores(100, 100, 100, 50, 100)

    assert generate_recommendations(strong_profile, factors) == (
        "Age factor may affect loan terms. Consider shorter loan periods",
    )


def test_debt_risk_uses_unrounded_ratio(evaluator, strong_profile):
    # 12001.6 / 40000 = 0.30004, shown as 0.3 but above the 0.3 band edge
    borderline = dataclasses.replace(strong_profile, monthly_expenses=12001.6)
    result = evaluator.evaluate(borderline).data

    analysis = build_detailed_analysis(borderline, result)

    assert analysis.financial_ratios.debt_to_income_ratio == 0.3
    assert analysis.risk_factors.debt_risk == "Moderate debt burden - low risk"


def test_render_text_report_lists_recommendations(evaluator, weak_profile):
    result = evaluator.evaluate(weak_profile).data
    report = render_text_report(weak_profile, result)

    assert "RECOMMENDATIONS:" in report
    assert "1. Consider reducing monthly expenses or increasing income before applying" in report
