"""Numeric helpers for money and score rounding"""

from decimal import Decimal, ROUND_HALF_CEILING, ROUND_HALF_UP


def round_half_up(value: float | Decimal, places: int = 0) -> float:
    """
    Round half away from zero on the decimal representation of value.

    Unlike round() on binary floats, round_half_up(2.675, 2) == 2.68.
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def round_pct(value: float) -> int:
    """Whole-number percentage, halves rounded toward +inf (-2.5 -> -2, 2.5 -> 3)"""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_CEILING))


def exact_ratio(numerator: float, denominator: float) -> Decimal:
    """numerator / denominator on the decimal representations of both"""
    return Decimal(str(numerator)) / Decimal(str(denominator))
