"""
Utilities package.

Contains logging and numeric rounding utilities.
"""

from foundersim.utils.logging import (
    configure_logging,
    get_logger,
)
from foundersim.utils.numbers import round_half_up, round_money, round_units

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Rounding
    "round_half_up",
    "round_money",
    "round_units",
]
