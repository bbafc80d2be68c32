"""
Pydantic schemas for the simulator's state, decisions and results.

Every schema is frozen: a snapshot is replaced, never mutated in place.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Lifecycle status of a game."""
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.ACTIVE


class StrategyName(str, Enum):
    """Advisory strategies, in recommendation order."""
    CFO = "cfo"
    GROWTH = "growth"
    QUALITY = "quality"


# =============================================================================
# Base Schemas
# =============================================================================

class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# State Schemas
# =============================================================================

class StateUpdate(BaseSchema):
    """Replacement values produced by one simulated quarter."""

    status: GameStatus
    current_year: int = Field(..., ge=1)
    current_quarter: int = Field(..., ge=1, le=4)
    cash: float
    quality: float = Field(..., ge=0.0, le=100.0)
    engineers: int = Field(..., ge=0)
    sales: int = Field(..., ge=0)
    cumulative_profit: float


class CompanyState(BaseSchema):
    """
    Snapshot of a company at the start of a quarter.

    Extra keys (row ids, owner, optimistic-lock version) are ignored so a
    persisted record can be validated straight into a snapshot.
    """

    status: GameStatus = GameStatus.ACTIVE
    current_year: int = Field(default=1, ge=1)
    current_quarter: int = Field(default=1, ge=1, le=4)
    cash: float
    quality: float = Field(default=50.0, ge=0.0, le=100.0)
    engineers: int = Field(default=0, ge=0)
    sales: int = Field(default=0, ge=0)
    cumulative_profit: float = 0.0

    @property
    def headcount(self) -> int:
        return self.engineers + self.sales

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    def apply(self, update: StateUpdate) -> "CompanyState":
        """Return a new snapshot with the engine's replacement values."""
        return self.model_copy(update=update.model_dump())


# =============================================================================
# Decision Schemas
# =============================================================================

class Decisions(BaseSchema):
    """One quarter's decisions."""

    price: float = Field(..., gt=0.0)
    engineers_to_hire: int = Field(default=0, ge=0)
    sales_to_hire: int = Field(default=0, ge=0)
    # Percentage of the industry baseline salary
    salary_pct: float = Field(default=100.0, gt=0.0)

    @property
    def total_hires(self) -> int:
        return self.engineers_to_hire + self.sales_to_hire


class DecisionsRequest(BaseSchema):
    """
    Raw decisions as submitted by a player.

    Bounds are checked by foundersim.core.game.validate_decisions against the
    configured decision limits; this schema only enforces types. Validation
    is strict: booleans and numeric strings are rejected, not coerced.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    price: float
    engineers_to_hire: int
    sales_to_hire: int
    salary_pct: float


# =============================================================================
# Result Schemas
# =============================================================================

class Outcome(BaseSchema):
    """Immutable record of a single simulated quarter."""

    revenue: float
    units_sold: int = Field(..., ge=0)
    payroll: float
    hiring_cost: float
    costs: float
    net_income: float
    new_cash: float
    new_quality: float
    new_engineers: int
    new_sales: int
    new_cumulative_profit: float
    status: GameStatus


class Recommendation(BaseSchema):
    """A strategy's suggested decisions with a justification."""

    strategy: StrategyName
    decisions: Decisions
    reasoning: str = Field(..., min_length=1)


class TurnRecord(BaseSchema):
    """A played quarter: the decisions taken and what came of them."""

    year: int = Field(..., ge=1)
    quarter: int = Field(..., ge=1, le=4)
    decisions: Decisions
    outcome: Outcome
    market_factor: float = 1.0
    strategy: Optional[StrategyName] = None
