"""
Simulation Engine - computes the outcome of one quarterly turn.

Each call to advance():
1. Applies hiring to headcount
2. Raises product quality from the engineering team
3. Derives demand from quality and price
4. Converts demand into units sold through the sales team and market factor
5. Books revenue, payroll and one-off hiring cost
6. Advances the calendar and evaluates win/loss

The engine is a pure function of its arguments: no I/O, no clock, no
randomness. Cash and cumulative profit are rounded half up to cents only
when reported, never mid-computation.
"""

from typing import NamedTuple, Optional

from foundersim.config import BalanceSettings, get_balance
from foundersim.core.calendar import is_past_final_year, next_quarter
from foundersim.models.schemas import (
    CompanyState,
    Decisions,
    GameStatus,
    Outcome,
    StateUpdate,
)
from foundersim.utils.numbers import round_money, round_units


class AdvanceResult(NamedTuple):
    """Result of advance(): the replacement state and the turn's outcome."""

    new_state: StateUpdate
    outcome: Outcome


def compute_demand(quality: float, price: float, balance: BalanceSettings) -> float:
    """Demand per sales person, floored at zero."""
    demand = quality * balance.quality_demand_weight - price * balance.price_demand_weight
    return max(0.0, demand)


def compute_units_sold(
    demand: float,
    sales: int,
    market_factor: float,
    balance: BalanceSettings,
) -> int:
    return round_units(demand * sales * balance.sales_conversion * market_factor)


def salary_per_person(salary_pct: float, balance: BalanceSettings) -> float:
    """Quarterly fully-loaded cost of one employee at ``salary_pct``."""
    return (salary_pct / 100) * balance.industry_base_salary


def evaluate_status(new_cash: float, next_year: int, balance: BalanceSettings) -> GameStatus:
    """Bankruptcy takes precedence over finishing the final year."""
    if new_cash <= 0:
        return GameStatus.LOST
    if is_past_final_year(next_year, balance.max_year):
        return GameStatus.WON
    return GameStatus.ACTIVE


def advance(
    state: CompanyState,
    decisions: Decisions,
    market_factor: float = 1.0,
    balance: Optional[BalanceSettings] = None,
) -> AdvanceResult:
    """
    Simulate one quarter.

    Args:
        state: Company snapshot at the start of the quarter
        decisions: The quarter's price, hiring and salary decisions
        market_factor: Externally supplied demand multiplier
        balance: Game constants; defaults to the configured balance

    Returns:
        AdvanceResult with the replacement state and the turn outcome
    """
    balance = balance or get_balance()

    # Headcount
    new_engineers = state.engineers + decisions.engineers_to_hire
    new_sales = state.sales + decisions.sales_to_hire
    hiring_cost = decisions.total_hires * balance.hiring_cost_per_person

    # Quality only ever improves and is capped
    new_quality = min(
        balance.max_quality,
        state.quality + new_engineers * balance.quality_gain_per_engineer,
    )

    # Sales
    demand = compute_demand(new_quality, decisions.price, balance)
    units_sold = compute_units_sold(demand, new_sales, market_factor, balance)
    revenue = decisions.price * units_sold

    # Costs
    payroll = salary_per_person(decisions.salary_pct, balance) * (new_engineers + new_sales)
    net_income = revenue - payroll
    costs = payroll + hiring_cost

    new_cash = state.cash + net_income - hiring_cost
    new_cumulative_profit = state.cumulative_profit + net_income

    next_year, next_q = next_quarter(state.current_year, state.current_quarter)
    status = evaluate_status(new_cash, next_year, balance)

    outcome = Outcome(
        revenue=revenue,
        units_sold=units_sold,
        payroll=payroll,
        hiring_cost=hiring_cost,
        costs=costs,
        net_income=net_income,
        new_cash=round_money(new_cash),
        new_quality=new_quality,
        new_engineers=new_engineers,
        new_sales=new_sales,
        new_cumulative_profit=round_money(new_cumulative_profit),
        status=status,
    )

    new_state = StateUpdate(
        status=status,
        current_year=next_year,
        current_quarter=next_q,
        cash=outcome.new_cash,
        quality=outcome.new_quality,
        engineers=new_engineers,
        sales=new_sales,
        cumulative_profit=outcome.new_cumulative_profit,
    )

    return AdvanceResult(new_state=new_state, outcome=outcome)
