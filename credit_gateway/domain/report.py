"""Plain-text evaluation report"""

from typing import List, Optional

from credit_gateway.domain.analysis import AlternativeOptions, DetailedAnalysis
from credit_gateway.domain.models import ApplicantProfile, EvaluationResult


def _money(amount: float) -> str:
    return f"${amount:,.2f}"


def render_text_report(
    profile: ApplicantProfile,
    result: EvaluationResult,
    analysis: Optional[DetailedAnalysis] = None,
    alternatives: Optional[AlternativeOptions] = None,
) -> str:
    factors = result.factors
    lines: List[str] = [
        "=== CREDIT EVALUATION REPORT ===",
        "",
        "APPLICANT INFORMATION:",
        f"Name: {profile.name}",
        f"Document: {profile.document_type.value} - {profile.document_number}",
        f"Birth Date: {profile.birth_date.isoformat()}",
        f"Age: {result.applicant.age}",
        f"Employment Time: {profile.months_employed} months",
        "",
        "LOAN REQUEST:",
        f"Type: {profile.loan_type.value}",
        f"Amount: {_money(profile.requested_amount)}",
        f"Term: {profile.term_months} months",
        f"Payment Frequency: {profile.payment_period.value}",
        "",
        "FINANCIAL INFORMATION:",
        f"Monthly Income: {_money(profile.monthly_income)}",
        f"Monthly Expenses: {_money(profile.monthly_expenses)}",
        f"Disposable Income: {_money(profile.monthly_income - profile.monthly_expenses)}",
        "",
        "EVALUATION RESULTS:",
        f"Overall Score: {result.evaluation.score}/100",
        f"Risk Tier: {result.evaluation.risk_tier.value}",
        f"Decision: {result.evaluation.decision.value}",
        "",
        "LOAN TERMS:",
        f"Approved Amount: {_money(result.loan.approved_amount)} ({result.loan.approval_percentage}%)",
        f"Payments: {result.payment.payment_count} x {_money(result.payment.payment_amount)}",
        f"Annual Interest Rate: {result.payment.annual_interest_rate:.2f}%",
        "",
        "FACTOR SCORES:",
        f"Income/Debt Ratio: {factors.income_debt_ratio}/100",
        f"Employment Stability: {factors.employment_stability}/100",
        f"Loan/Income Ratio: {factors.loan_income_ratio}/100",
        f"Age Factor: {factors.age_factor}/100",
        f"Document Type: {factors.document_type_factor}/100",
        "",
        "RECOMMENDATIONS:",
    ]
    lines += [f"{index}. {item}" for index, item in enumerate(result.recommendations, start=1)]

    if analysis is not None:
        lines += ["", "DETAILED ANALYSIS:", "", "Strengths:"]
        lines += [f"- {item}" for item in analysis.strengths]
        lines += ["", "Weaknesses:"]
        lines += [f"- {item}" for item in analysis.weaknesses]
        lines += ["", "Mitigation Strategies:"]
        lines += [f"- {item}" for item in analysis.mitigation_strategies]

    if alternatives is not None and alternatives != AlternativeOptions():
        lines += ["", "ALTERNATIVE OPTIONS:"]
        if alternatives.suggested_loan_amount:
            lines.append(f"Suggested Loan Amount: {_money(alternatives.suggested_loan_amount)}")
        if alternatives.suggested_term:
            lines.append(f"Suggested Term: {alternatives.suggested_term} months")
        if alternatives.required_down_payment:
            lines.append(f"Required Down Payment: {_money(alternatives.required_down_payment)}")
        if alternatives.co_signer_recommended:
            lines.append("Co-signer Recommended: Yes")

    lines += ["", "=== END OF REPORT ==="]
    return "\n".join(lines)
