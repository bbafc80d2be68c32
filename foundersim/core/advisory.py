"""
Advisory Engine - rule-based strategy advisors.

Three advisors read a company snapshot and each suggests a full set of
decisions with a short justification:

- cfo: protect cash, slow hiring, mid-high price
- growth: aggressive hiring, low price to capture the market
- quality: high salary, engineer-heavy, premium pricing

Every advisor switches to a hiring freeze in its late-game window. A
separate situation brief summarises risks and opportunities independent of
any strategy. All functions here are deterministic functions of the state.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from foundersim.config import BalanceSettings, get_balance
from foundersim.core.calendar import quarters_remaining
from foundersim.exceptions import UnknownStrategyError
from foundersim.models.schemas import (
    CompanyState,
    Decisions,
    Recommendation,
    StrategyName,
)

# Cash buckets used by reasoning and the situation brief
CASH_CRITICAL = 200_000
CASH_LOW = 500_000
CASH_STRONG = 1_500_000

# Quality buckets
QUALITY_CRITICAL = 30
QUALITY_POOR = 40
QUALITY_EXCELLENT = 70

LARGE_TEAM = 20

# Strategy-specific cash triggers
CFO_LOW_CASH = 300_000
GROWTH_CAN_AFFORD_HIRING = 500_000
GROWTH_HIGH_CASH = 1_200_000
CFO_HEADCOUNT_TARGETS = {"engineers": 6, "sales": 4}
QUALITY_MIN_SALES = 3

# Late-game windows, in quarters remaining
CFO_FREEZE_QUARTERS = 4
CFO_FINAL_STRETCH_QUARTERS = 8
GROWTH_FREEZE_QUARTERS = 6
QUALITY_FREEZE_QUARTERS = 6
FINAL_YEAR_QUARTERS = 4
FINISH_LINE_QUARTERS = 12


# =============================================================================
# Assessment
# =============================================================================

@dataclass(frozen=True)
class Assessment:
    """Categorical read of a company snapshot."""

    year: int
    quarter: int
    cash: float
    quality: float
    engineers: int
    sales: int
    quarters_left: int
    final_year: int

    @property
    def headcount(self) -> int:
        return self.engineers + self.sales

    @property
    def cash_level(self) -> str:
        if self.cash < CASH_CRITICAL:
            return "critical"
        if self.cash < CASH_LOW:
            return "low"
        if self.cash > CASH_STRONG:
            return "strong"
        return "moderate"

    @property
    def quality_level(self) -> str:
        if self.quality < QUALITY_POOR:
            return "poor"
        if self.quality > QUALITY_EXCELLENT:
            return "excellent"
        return "moderate"

    @property
    def is_high_quality(self) -> bool:
        return self.quality > QUALITY_EXCELLENT


def assess(state: CompanyState, balance: Optional[BalanceSettings] = None) -> Assessment:
    """Bucket a snapshot for the advisors."""
    balance = balance or get_balance()
    return Assessment(
        year=state.current_year,
        quarter=state.current_quarter,
        cash=float(state.cash),
        quality=float(state.quality),
        engineers=state.engineers,
        sales=state.sales,
        quarters_left=quarters_remaining(
            state.current_year, state.current_quarter, balance.max_year
        ),
        final_year=balance.max_year,
    )


def format_cash(amount: float) -> str:
    """Format an amount as grouped dollars with cents, e.g. $1,250,000.00."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_quality(quality: float) -> str:
    return f"{quality:.1f}%"


def pluralize(count: int, noun: str) -> str:
    """Prefix a count and add an 's' unless the count is exactly one."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


# =============================================================================
# Strategies
# =============================================================================

def cfo_decisions(a: Assessment) -> Decisions:
    """Capital preservation."""
    if a.quarters_left <= CFO_FREEZE_QUARTERS or a.cash < CFO_LOW_CASH:
        return Decisions(price=400, engineers_to_hire=0, sales_to_hire=0, salary_pct=80)
    return Decisions(
        price=300,
        engineers_to_hire=1 if a.engineers < CFO_HEADCOUNT_TARGETS["engineers"] else 0,
        sales_to_hire=1 if a.sales < CFO_HEADCOUNT_TARGETS["sales"] else 0,
        salary_pct=90,
    )


def growth_decisions(a: Assessment) -> Decisions:
    """Market capture."""
    if a.quarters_left <= GROWTH_FREEZE_QUARTERS:
        return Decisions(price=250, engineers_to_hire=0, sales_to_hire=0, salary_pct=100)
    high_cash = a.cash > GROWTH_HIGH_CASH
    batch = 3 if a.cash > GROWTH_CAN_AFFORD_HIRING else 1
    return Decisions(
        price=150 if high_cash else 200,
        engineers_to_hire=batch,
        sales_to_hire=batch,
        salary_pct=120 if high_cash else 100,
    )


def quality_decisions(a: Assessment) -> Decisions:
    """Premium product."""
    price = 500 if a.is_high_quality else 400
    if a.quarters_left <= QUALITY_FREEZE_QUARTERS:
        return Decisions(price=price, engineers_to_hire=0, sales_to_hire=0, salary_pct=100)
    return Decisions(
        price=price,
        engineers_to_hire=1 if a.is_high_quality else 2,
        sales_to_hire=1 if a.sales < QUALITY_MIN_SALES else 0,
        salary_pct=140,
    )


# =============================================================================
# Reasoning
# =============================================================================

def cfo_reasoning(a: Assessment, d: Decisions) -> str:
    cash = format_cash(a.cash)
    if a.cash_level == "critical":
        return (
            f"URGENT: cash at {cash} is dangerously low. Freeze hiring, raise the price "
            f"to ${d.price:,.0f} and cut salaries to {d.salary_pct:.0f}% to survive."
        )
    if a.cash_level == "low":
        return (
            f"Cash reserves at {cash} need protection. Price at ${d.price:,.0f} with "
            f"minimal hiring. Build runway before scaling."
        )
    if a.quarters_left <= CFO_FINAL_STRETCH_QUARTERS:
        return (
            f"{pluralize(a.quarters_left, 'quarter')} to the Year {a.final_year} finish. "
            f"Keep pricing steady at ${d.price:,.0f} and operations lean with {cash} "
            f"in the bank to close out the win."
        )
    return (
        f"With {cash} in reserves, keep a balanced approach. Price at ${d.price:,.0f}, "
        f"hire conservatively (team: {a.headcount}) and protect margins at "
        f"{d.salary_pct:.0f}% salary."
    )


def growth_reasoning(a: Assessment, d: Decisions) -> str:
    cash = format_cash(a.cash)
    if a.quarters_left <= GROWTH_FREEZE_QUARTERS:
        return (
            f"{pluralize(a.quarters_left, 'quarter')} left, switching to survival mode. "
            f"Stop hiring and price at ${d.price:,.0f} for steady revenue. The goal is "
            f"to cross the finish line with {cash} or more in the bank."
        )
    if a.cash_level == "critical":
        return (
            f"Cash at {cash} is too low for aggressive growth. Hire only "
            f"{d.engineers_to_hire}+{d.sales_to_hire} for now and consider the CFO "
            f"strategy until reserves recover."
        )
    if a.cash_level == "strong":
        return (
            f"A {cash} war chest enables maximum aggression. Price low at "
            f"${d.price:,.0f}, hire {d.engineers_to_hire}+{d.sales_to_hire} and pay "
            f"{d.salary_pct:.0f}% of market. Scale fast while there is runway."
        )
    if a.headcount < 8:
        return (
            f"A team of {a.headcount} is too small to scale. Hire "
            f"{pluralize(d.engineers_to_hire, 'engineer')} and {d.sales_to_hire} sales at "
            f"${d.price:,.0f} pricing to build the engine, even if margins are thin."
        )
    return (
        f"Scale aggressively with {cash} available. Low pricing captures volume; keep "
        f"hiring fast (currently {a.headcount} staff). Speed beats perfection."
    )


def quality_reasoning(a: Assessment, d: Decisions) -> str:
    quality = format_quality(a.quality)
    if a.quarters_left <= QUALITY_FREEZE_QUARTERS:
        return (
            f"{pluralize(a.quarters_left, 'quarter')} to the finish. Freeze hiring and "
            f"ride premium pricing at ${d.price:,.0f}. Quality at {quality} should carry us."
        )
    if a.quality_level == "poor":
        return (
            f"Quality at {quality} is hurting sales badly. Hire "
            f"{pluralize(d.engineers_to_hire, 'more engineer')} at {d.salary_pct:.0f}% "
            f"salary to attract top talent. Premium pricing follows quality."
        )
    if a.quality_level == "excellent":
        return (
            f"Quality at {quality} justifies premium pricing at ${d.price:,.0f}. With "
            f"{pluralize(a.engineers, 'engineer')} maintaining excellence, shift focus "
            f"to sales to monetize it."
        )
    return (
        f"Build product excellence from {quality} with "
        f"{pluralize(d.engineers_to_hire, 'new engineer')} at {d.salary_pct:.0f}% salary. "
        f"Price at ${d.price:,.0f}; customers pay more for quality. "
        f"Currently {pluralize(a.engineers, 'engineer')} on the team."
    )


# =============================================================================
# Registry
# =============================================================================

@dataclass(frozen=True)
class Strategy:
    """A named advisor: how it decides and how it explains itself."""

    name: StrategyName
    decide: Callable[[Assessment], Decisions]
    explain: Callable[[Assessment, Decisions], str]


STRATEGIES: Dict[StrategyName, Strategy] = {
    StrategyName.CFO: Strategy(
        name=StrategyName.CFO,
        decide=cfo_decisions,
        explain=cfo_reasoning,
    ),
    StrategyName.GROWTH: Strategy(
        name=StrategyName.GROWTH,
        decide=growth_decisions,
        explain=growth_reasoning,
    ),
    StrategyName.QUALITY: Strategy(
        name=StrategyName.QUALITY,
        decide=quality_decisions,
        explain=quality_reasoning,
    ),
}


def get_strategy(strategy: Union[StrategyName, str]) -> Strategy:
    """Look up a strategy by enum member or tag."""
    try:
        key = StrategyName(strategy)
    except ValueError:
        raise UnknownStrategyError(strategy) from None
    return STRATEGIES[key]


def recommend(
    strategy: Union[StrategyName, str],
    state: CompanyState,
    balance: Optional[BalanceSettings] = None,
) -> Recommendation:
    """
    Recommend decisions for the next quarter under one strategy.

    Raises:
        UnknownStrategyError: If ``strategy`` is not cfo, growth or quality
    """
    advisor = get_strategy(strategy)
    a = assess(state, balance)
    decisions = advisor.decide(a)
    return Recommendation(
        strategy=advisor.name,
        decisions=decisions,
        reasoning=advisor.explain(a, decisions),
    )


def recommend_all(
    state: CompanyState,
    balance: Optional[BalanceSettings] = None,
) -> List[Recommendation]:
    """Recommendations from every strategy, in cfo, growth, quality order."""
    return [recommend(name, state, balance) for name in StrategyName]


# =============================================================================
# Situation brief
# =============================================================================

def situation_brief(state: CompanyState, balance: Optional[BalanceSettings] = None) -> str:
    """
    Summarise the company's posture.

    Observations are ordered cash, quality, team, time horizon.
    """
    a = assess(state, balance)
    parts: List[str] = []

    if a.cash < CASH_CRITICAL:
        parts.append(f"Cash critical at {format_cash(a.cash)}, bankruptcy risk is high")
    elif a.cash < CASH_LOW:
        parts.append(f"Cash reserves are running low at {format_cash(a.cash)}")
    elif a.cash > CASH_STRONG:
        parts.append(f"Strong cash position of {format_cash(a.cash)} for expansion")

    if a.quality < QUALITY_CRITICAL:
        parts.append(f"Product quality at {format_quality(a.quality)} is severely hurting sales")
    elif a.quality > QUALITY_EXCELLENT:
        parts.append(
            f"Excellent product quality at {format_quality(a.quality)} is driving premium demand"
        )

    if a.engineers == 0:
        parts.append("No engineers, quality will stagnate")
    if a.sales == 0:
        parts.append("No sales team, the revenue pipeline is empty")
    if a.headcount > LARGE_TEAM:
        parts.append(f"Large team of {a.headcount}, payroll is a significant cost")

    if a.quarters_left <= FINAL_YEAR_QUARTERS:
        parts.append("Final year, just survive to win")
    elif a.quarters_left <= FINISH_LINE_QUARTERS:
        parts.append("Less than 3 years to the finish line")

    if not parts:
        return (
            f"Steady state at Y{a.year} Q{a.quarter}. "
            f"Evaluate advisor strategies to optimize your next move."
        )
    return ". ".join(parts) + "."
