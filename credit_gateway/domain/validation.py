"""Applicant profile presence checks and coercion into ApplicantProfile"""

import math
from typing import Any, Mapping, Tuple

from credit_gateway.domain.exceptions import InvalidProfileError, MissingFieldError
from credit_gateway.domain.models import ApplicantProfile, DocumentType, LoanType, PaymentPeriod
from credit_gateway.utils.date_utils import parse_iso_date

# Checked in this order; the first missing one is reported
REQUIRED_FIELDS: Tuple[str, ...] = (
    "name",
    "document_type",
    "document_number",
    "birth_date",
    "loan_type",
    "requested_amount",
    "term_months",
    "payment_period",
    "monthly_income",
    "monthly_expenses",
    "months_employed",
)


def _camel(field_name: str) -> str:
    head, *rest = field_name.split("_")
    return head + "".join(part.title() for part in rest)


def _lookup(candidate: Mapping[str, Any], field_name: str) -> Any:
    """Accept snake_case or camelCase keys"""
    if candidate.get(field_name) is not None:
        return candidate[field_name]
    return candidate.get(_camel(field_name))


def validate_profile(candidate: Mapping[str, Any]) -> None:
    """
    Ensure every required field is present and not None.

    Raises:
        MissingFieldError: naming the first absent field
    """
    for field_name in REQUIRED_FIELDS:
        if _lookup(candidate, field_name) is None:
            raise MissingFieldError(field_name)


def _finite(values: Mapping[str, Any], field_name: str) -> float:
    number = float(values[field_name])
    if not math.isfinite(number):
        raise InvalidProfileError(f"Invalid applicant profile: {field_name} must be a finite number")
    return number


def build_profile(candidate: Mapping[str, Any]) -> ApplicantProfile:
    """
    Validate a raw mapping and convert it into an ApplicantProfile.

    Only presence and type coercion are checked here; amount and term bounds
    belong to the request schema.

    Raises:
        MissingFieldError: a required field is absent
        InvalidProfileError: a field can't be converted (bad date, unknown enum
            value, infinite or NaN number)
    """
    validate_profile(candidate)
    values = {name: _lookup(candidate, name) for name in REQUIRED_FIELDS}

    try:
        return ApplicantProfile(
            name=str(values["name"]),
            document_type=DocumentType(values["document_type"]),
            document_number=str(values["document_number"]),
            birth_date=parse_iso_date(values["birth_date"]),
            loan_type=LoanType(values["loan_type"]),
            requested_amount=_finite(values, "requested_amount"),
            term_months=int(_finite(values, "term_months")),
            payment_period=PaymentPeriod(values["payment_period"]),
            monthly_income=_finite(values, "monthly_income"),
            monthly_expenses=_finite(values, "monthly_expenses"),
            months_employed=int(_finite(values, "months_employed")),
        )
    except (TypeError, ValueError) as e:
        raise InvalidProfileError(f"Invalid applicant profile: {e}") from e
