"""
Numeric helpers.

Python's built-in round() rounds half to even; the simulator rounds half up
everywhere so reported money and unit counts match what players expect.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round ``value`` half away from zero to ``places`` decimals.

    Works on the shortest decimal representation of the float (``repr``), so
    2.675 rounds to 2.68 rather than 2.67. Magnitudes of any size are
    supported; the working precision grows with the number of digits kept.
    """
    exact = Decimal(repr(value))
    if not exact.is_finite():
        return value
    exponent = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + places + 2)
        return float(exact.quantize(exponent, rounding=ROUND_HALF_UP))


def round_units(value: float) -> int:
    """Round a unit count half up to an integer, never below zero."""
    return max(0, int(round_half_up(value)))


def round_money(value: float) -> float:
    """Round a currency amount to cents, half up."""
    return round_half_up(value, 2)
