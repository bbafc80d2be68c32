"""
Core package.

Contains the simulation engine, the advisory engine, the market factor
source and the game service layer.
"""

from foundersim.core.advisory import (
    STRATEGIES,
    get_strategy,
    recommend,
    recommend_all,
    situation_brief,
)
from foundersim.core.calendar import next_quarter, quarters_remaining
from foundersim.core.game import (
    GameRun,
    new_company_state,
    play_bot_turn,
    play_turn,
    simulate_game,
    validate_decisions,
)
from foundersim.core.market import MarketFactorCache, seasonal_market_factor
from foundersim.core.simulation import AdvanceResult, advance

__all__ = [
    # Simulation Engine
    "AdvanceResult",
    "advance",
    # Advisory Engine
    "STRATEGIES",
    "get_strategy",
    "recommend",
    "recommend_all",
    "situation_brief",
    # Calendar
    "next_quarter",
    "quarters_remaining",
    # Game service
    "GameRun",
    "new_company_state",
    "play_bot_turn",
    "play_turn",
    "simulate_game",
    "validate_decisions",
    # Market factor
    "MarketFactorCache",
    "seasonal_market_factor",
]
