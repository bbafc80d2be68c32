"""
Data models package.

Contains the Pydantic schemas for company state, decisions and results.
"""

from foundersim.models.schemas import (
    BaseSchema,
    CompanyState,
    Decisions,
    DecisionsRequest,
    GameStatus,
    Outcome,
    Recommendation,
    StateUpdate,
    StrategyName,
    TurnRecord,
)

__all__ = [
    # Enums
    "GameStatus",
    "StrategyName",
    # Schemas
    "BaseSchema",
    "CompanyState",
    "Decisions",
    "DecisionsRequest",
    "Outcome",
    "Recommendation",
    "StateUpdate",
    "TurnRecord",
]
