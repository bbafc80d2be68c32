"""
Founder Simulator

A turn-based startup simulation core: a deterministic quarterly simulation
engine plus rule-based CFO, Growth and Quality advisors.
"""

from foundersim.core import (
    AdvanceResult,
    advance,
    new_company_state,
    recommend,
    recommend_all,
    situation_brief,
)
from foundersim.models import (
    CompanyState,
    Decisions,
    GameStatus,
    Outcome,
    Recommendation,
    StateUpdate,
    StrategyName,
)

__version__ = "1.0.0"

__all__ = [
    "AdvanceResult",
    "advance",
    "new_company_state",
    "recommend",
    "recommend_all",
    "situation_brief",
    "CompanyState",
    "Decisions",
    "GameStatus",
    "Outcome",
    "Recommendation",
    "StateUpdate",
    "StrategyName",
]
