"""
Game service layer.

Glue between a caller holding a persisted snapshot and the pure engines:
- creating a new company
- validating raw player decisions at the boundary
- playing a turn (human or bot) and producing its turn record
- running a headless bot game to completion
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple, Union

import structlog
from pydantic import ValidationError

from foundersim.config import (
    BalanceSettings,
    DecisionLimitSettings,
    StartingSettings,
    get_settings,
)
from foundersim.core.advisory import get_strategy, recommend
from foundersim.core.simulation import advance
from foundersim.exceptions import GameOverError, InvalidDecisionsError
from foundersim.models.schemas import (
    CompanyState,
    Decisions,
    DecisionsRequest,
    GameStatus,
    StrategyName,
    TurnRecord,
)
from foundersim.utils.logging import get_logger

logger = get_logger(__name__)


def new_company_state(starting: Optional[StartingSettings] = None) -> CompanyState:
    """Create the opening snapshot of a new game."""
    starting = starting or get_settings().starting
    return CompanyState(
        status=GameStatus.ACTIVE,
        current_year=1,
        current_quarter=1,
        cash=starting.cash,
        quality=starting.quality,
        engineers=starting.engineers,
        sales=starting.sales,
        cumulative_profit=0.0,
    )


def validate_decisions(
    payload: Mapping[str, Any],
    limits: Optional[DecisionLimitSettings] = None,
) -> Decisions:
    """
    Validate raw decisions against the configured limits.

    Args:
        payload: Mapping with price, engineers_to_hire, sales_to_hire, salary_pct
        limits: Decision bounds; defaults to the configured limits

    Returns:
        Validated Decisions

    Raises:
        InvalidDecisionsError: If a field is missing, mistyped or out of bounds
    """
    limits = limits or get_settings().decision_limits

    try:
        request = DecisionsRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidDecisionsError("Invalid decisions payload", errors=e.errors()) from e

    errors = []
    if not limits.min_price <= request.price <= limits.max_price:
        errors.append({
            "loc": ("price",),
            "msg": f"price must be between {limits.min_price:g} and {limits.max_price:g}",
        })
    for name in ("engineers_to_hire", "sales_to_hire"):
        value = getattr(request, name)
        if not 0 <= value <= limits.max_hires:
            errors.append({
                "loc": (name,),
                "msg": f"{name} must be between 0 and {limits.max_hires}",
            })
    if not limits.min_salary_pct <= request.salary_pct <= limits.max_salary_pct:
        errors.append({
            "loc": ("salary_pct",),
            "msg": (
                f"salary_pct must be between {limits.min_salary_pct:g} "
                f"and {limits.max_salary_pct:g}"
            ),
        })

    if errors:
        raise InvalidDecisionsError("Decisions out of bounds", errors=errors)

    return Decisions(**request.model_dump())


def play_turn(
    state: CompanyState,
    decisions: Decisions,
    market_factor: float = 1.0,
    balance: Optional[BalanceSettings] = None,
    strategy: Optional[StrategyName] = None,
) -> Tuple[CompanyState, TurnRecord]:
    """
    Play one quarter and return the replacement snapshot with its record.

    Raises:
        GameOverError: If the game has already been won or lost
    """
    if state.is_over:
        logger.warning(
            "turn_refused",
            status=state.status.value,
            year=state.current_year,
            quarter=state.current_quarter,
        )
        raise GameOverError(state.status.value)

    new_state, outcome = advance(state, decisions, market_factor, balance)

    record = TurnRecord(
        year=state.current_year,
        quarter=state.current_quarter,
        decisions=decisions,
        outcome=outcome,
        market_factor=market_factor,
        strategy=strategy,
    )

    logger.info(
        "turn_played",
        year=record.year,
        quarter=record.quarter,
        strategy=strategy.value if strategy else None,
        units_sold=outcome.units_sold,
        net_income=outcome.net_income,
        cash=outcome.new_cash,
        status=outcome.status.value,
    )

    return state.apply(new_state), record


def play_bot_turn(
    strategy: Union[StrategyName, str],
    state: CompanyState,
    market_factor: float = 1.0,
    balance: Optional[BalanceSettings] = None,
) -> Tuple[CompanyState, TurnRecord]:
    """Play the quarter a strategy advisor recommends."""
    recommendation = recommend(strategy, state, balance)
    return play_turn(
        state,
        recommendation.decisions,
        market_factor=market_factor,
        balance=balance,
        strategy=recommendation.strategy,
    )


@dataclass
class GameRun:
    """Result of a headless bot game."""

    strategy: StrategyName
    initial_state: CompanyState
    final_state: CompanyState
    turns: List[TurnRecord] = field(default_factory=list)

    @property
    def status(self) -> GameStatus:
        return self.final_state.status

    @property
    def is_complete(self) -> bool:
        return self.final_state.is_over

    @property
    def total_net_income(self) -> float:
        return sum(turn.outcome.net_income for turn in self.turns)


def simulate_game(
    strategy: Union[StrategyName, str],
    state: Optional[CompanyState] = None,
    market_factor: float = 1.0,
    balance: Optional[BalanceSettings] = None,
    max_turns: Optional[int] = None,
) -> GameRun:
    """
    Let a strategy advisor play until the game ends.

    Args:
        strategy: Advisor that picks every quarter's decisions
        state: Starting snapshot; defaults to a new company
        market_factor: Market factor applied to every turn
        balance: Game constants; defaults to the configured balance
        max_turns: Optional cap on the number of quarters played

    Returns:
        GameRun with the final snapshot and every turn record
    """
    initial = state or new_company_state()
    run = GameRun(
        strategy=get_strategy(strategy).name,
        initial_state=initial,
        final_state=initial,
    )

    with structlog.contextvars.bound_contextvars(strategy=run.strategy.value):
        current = initial
        while not current.is_over:
            if max_turns is not None and len(run.turns) >= max_turns:
                break
            current, record = play_bot_turn(run.strategy, current, market_factor, balance)
            run.turns.append(record)
        run.final_state = current

        logger.info(
            "game_finished",
            status=current.status.value,
            turns=len(run.turns),
            cash=current.cash,
            cumulative_profit=current.cumulative_profit,
        )

    return run
