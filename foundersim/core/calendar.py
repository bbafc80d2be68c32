"""
Quarter/year arithmetic shared by the simulation and advisory engines.
"""

from typing import Tuple

QUARTERS_PER_YEAR = 4


def next_quarter(year: int, quarter: int) -> Tuple[int, int]:
    """Return the (year, quarter) that follows the given one."""
    quarter += 1
    if quarter > QUARTERS_PER_YEAR:
        return year + 1, 1
    return year, quarter


def quarters_remaining(year: int, quarter: int, max_year: int = 10) -> int:
    """
    Turns left after the current one before the final quarter of
    ``max_year`` completes.

    Zero while playing Q4 of the final year, which is exactly the turn whose
    calendar advance ends the game with a win.
    """
    return (max_year - year) * QUARTERS_PER_YEAR + (QUARTERS_PER_YEAR - quarter)


def is_past_final_year(year: int, max_year: int) -> bool:
    return year > max_year
