"""Date manipulation utilities"""

from datetime import date


def calculate_age(birth_date: date, today: date) -> int:
    """Calendar age in whole years: drops a year until the birthday has passed"""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def parse_iso_date(value: str | date) -> date:
    """Parse a YYYY-MM-DD string; dates pass through unchanged"""
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)
