"""
Unit tests for the Simulation Engine.
"""

import pytest

from foundersim.config import BalanceSettings
from foundersim.core.calendar import next_quarter, quarters_remaining
from foundersim.core.simulation import AdvanceResult, advance
from foundersim.models.schemas import CompanyState, Decisions, GameStatus, StateUpdate


@pytest.fixture
def balance():
    """Reference balance constants."""
    return BalanceSettings(
        hiring_cost_per_person=5000,
        quality_gain_per_engineer=0.5,
        max_quality=100,
        quality_demand_weight=10,
        price_demand_weight=0.0001,
        sales_conversion=0.5,
        industry_base_salary=30000,
        max_year=10,
    )


@pytest.fixture
def state():
    """A fresh company at the start of the game."""
    return CompanyState(
        status="active",
        current_year=1,
        current_quarter=1,
        cash=1_000_000,
        quality=50,
        engineers=4,
        sales=2,
        cumulative_profit=0,
    )


@pytest.fixture
def decisions():
    return Decisions(price=100, engineers_to_hire=1, sales_to_hire=1, salary_pct=100)


class TestAdvanceScenarios:
    """Concrete turns with hand-computed results."""

    def test_first_quarter(self, state, decisions, balance):
        """Hiring, quality, payroll and calendar for a normal turn."""
        new_state, outcome = advance(state, decisions, 1.0, balance)

        assert outcome.new_engineers == 5
        assert outcome.new_sales == 3
        assert outcome.new_quality == 52.5
        # demand 524.99 * 3 sales * 0.5 conversion = 787.485
        assert outcome.units_sold == 787
        assert outcome.revenue == 78_700
        assert outcome.payroll == 240_000
        assert outcome.hiring_cost == 10_000
        assert outcome.costs == 250_000
        assert outcome.net_income == -161_300
        assert outcome.new_cash == 828_700
        assert outcome.new_cumulative_profit == -161_300
        assert outcome.status == GameStatus.ACTIVE

        assert new_state.current_quarter == 2
        assert new_state.current_year == 1
        assert new_state.status == GameStatus.ACTIVE
        assert new_state.cash == outcome.new_cash
        assert new_state.quality == 52.5

    def test_final_quarter_wins(self, state, balance):
        """Completing Q4 of the final year with cash left wins."""
        final = state.model_copy(update={"current_year": 10, "current_quarter": 4})
        no_hires = Decisions(price=100, engineers_to_hire=0, sales_to_hire=0, salary_pct=100)

        new_state, outcome = advance(final, no_hires, 1.0, balance)

        assert outcome.units_sold == 520
        assert outcome.new_cash == 872_000
        assert new_state.current_year == 11
        assert new_state.current_quarter == 1
        assert outcome.status == GameStatus.WON
        assert new_state.status == GameStatus.WON

    def test_aggressive_hiring_goes_bankrupt(self, state, balance):
        """Payroll far beyond revenue drives cash below zero."""
        poor = state.model_copy(update={"cash": 10_000})
        aggressive = Decisions(price=100, engineers_to_hire=5, sales_to_hire=5, salary_pct=200)

        new_state, outcome = advance(poor, aggressive, 1.0, balance)

        assert outcome.payroll == 960_000
        assert outcome.new_cash == -809_300
        assert outcome.status == GameStatus.LOST
        assert new_state.status == GameStatus.LOST

    def test_loss_takes_precedence_over_win(self, state, balance):
        """Bankrupt in the very last quarter is still a loss."""
        last = state.model_copy(
            update={"current_year": 10, "current_quarter": 4, "cash": 10_000}
        )
        aggressive = Decisions(price=100, engineers_to_hire=5, sales_to_hire=5, salary_pct=200)

        new_state, outcome = advance(last, aggressive, 1.0, balance)

        assert new_state.current_year == 11
        assert outcome.status == GameStatus.LOST

    def test_exactly_zero_cash_is_a_loss(self, balance):
        """Cash landing on zero counts as bankruptcy."""
        state = CompanyState(cash=30_000, quality=0, engineers=1, sales=0)
        decisions = Decisions(price=100, salary_pct=100)

        _, outcome = advance(state, decisions, 1.0, balance)

        assert outcome.new_cash == 0
        assert outcome.status == GameStatus.LOST


class TestAdvanceEdgeCases:
    """Edge cases of the turn computation."""

    def test_zero_headcount(self, balance):
        """No staff means no sales and no costs, but time still passes."""
        empty = CompanyState(cash=500_000, quality=40, engineers=0, sales=0)
        decisions = Decisions(price=250, engineers_to_hire=0, sales_to_hire=0, salary_pct=150)

        new_state, outcome = advance(empty, decisions, 1.0, balance)

        assert outcome.units_sold == 0
        assert outcome.revenue == 0
        assert outcome.costs == 0
        assert outcome.net_income == 0
        assert outcome.new_cash == 500_000
        assert new_state.quality == 40
        assert new_state.current_quarter == 2

    @pytest.mark.parametrize("price", [1, 100, 999])
    def test_zero_headcount_any_price(self, balance, price):
        empty = CompanyState(cash=1000, quality=50, engineers=0, sales=0)
        _, outcome = advance(empty, Decisions(price=price), 1.0, balance)

        assert outcome.units_sold == 0
        assert outcome.costs == 0

    @pytest.mark.parametrize("cash", [1e27, -1e30, 1e300])
    def test_huge_cash(self, balance, cash):
        rich = CompanyState(cash=cash, quality=50, engineers=0, sales=0)

        new_state, outcome = advance(rich, Decisions(price=10), 1.0, balance)

        assert outcome.new_cash == cash
        assert new_state.cash == cash

    def test_zero_market_factor(self, state, decisions, balance):
        """A market factor of zero means nothing sells."""
        _, outcome = advance(state, decisions, 0.0, balance)

        assert outcome.units_sold == 0
        assert outcome.revenue == 0

    def test_price_can_suppress_demand_entirely(self, state, balance):
        """Demand is floored at zero rather than going negative."""
        overpriced = Decisions(price=10_000_000, engineers_to_hire=0, sales_to_hire=0)

        _, outcome = advance(state, overpriced, 1.0, balance)

        assert outcome.units_sold == 0
        assert outcome.revenue == 0

    def test_quality_is_capped(self, balance):
        strong = CompanyState(cash=1_000_000, quality=99, engineers=10, sales=1)

        new_state, outcome = advance(strong, Decisions(price=100), 1.0, balance)

        assert outcome.new_quality == 100
        assert new_state.quality == 100

    def test_units_round_half_up(self):
        """2.5 units round to 3, not to the even 2."""
        balance = BalanceSettings(
            quality_gain_per_engineer=0,
            quality_demand_weight=10,
            price_demand_weight=0,
            sales_conversion=0.25,
            industry_base_salary=0,
        )
        state = CompanyState(cash=100, quality=1, engineers=0, sales=1)

        _, outcome = advance(state, Decisions(price=10), 1.0, balance)

        assert outcome.units_sold == 3

    def test_cash_rounded_to_cents(self, balance):
        state = CompanyState(cash=1000.005, cumulative_profit=-0.125, engineers=0, sales=0)

        _, outcome = advance(state, Decisions(price=10), 1.0, balance)

        assert outcome.new_cash == 1000.01
        assert outcome.new_cumulative_profit == -0.13

    def test_alternate_balance(self, state, decisions):
        """Balance constants can be substituted."""
        cheap = BalanceSettings(hiring_cost_per_person=500, industry_base_salary=400)

        _, outcome = advance(state, decisions, 1.0, cheap)

        assert outcome.hiring_cost == 1000
        assert outcome.payroll == 3200


class TestAdvanceProperties:
    """Invariants that hold for any turn."""

    def test_returns_named_result(self, state, decisions, balance):
        result = advance(state, decisions, 1.0, balance)

        assert isinstance(result, AdvanceResult)
        assert isinstance(result.new_state, StateUpdate)
        assert result.outcome.status == result.new_state.status

    def test_deterministic(self, state, decisions, balance):
        """Same inputs, same outputs."""
        first = advance(state, decisions, 1.1, balance)
        second = advance(state, decisions, 1.1, balance)

        assert first == second

    def test_does_not_mutate_input(self, state, decisions, balance):
        before = state.model_dump()
        advance(state, decisions, 1.0, balance)

        assert state.model_dump() == before

    @pytest.mark.parametrize("year", [1, 5, 9])
    @pytest.mark.parametrize("quarter", [1, 2, 3, 4])
    def test_calendar_advances_one_quarter(self, state, decisions, balance, year, quarter):
        current = state.model_copy(update={"current_year": year, "current_quarter": quarter})

        new_state, _ = advance(current, decisions, 1.0, balance)

        assert new_state.current_quarter == quarter % 4 + 1
        expected_year = year + 1 if quarter == 4 else year
        assert new_state.current_year == expected_year

    @pytest.mark.parametrize("hires", [0, 1, 5, 50])
    def test_quality_monotonic_and_bounded(self, state, balance, hires):
        decisions = Decisions(price=100, engineers_to_hire=hires)

        new_state, _ = advance(state, decisions, 1.0, balance)

        assert state.quality <= new_state.quality <= 100

    def test_market_factor_scales_units(self, state, decisions, balance):
        _, normal = advance(state, decisions, 1.0, balance)
        _, boosted = advance(state, decisions, 2.0, balance)

        assert boosted.units_sold >= normal.units_sold
        assert boosted.units_sold > 0

    def test_headcount_never_negative(self, balance):
        empty = CompanyState(cash=1000, engineers=0, sales=0)

        new_state, _ = advance(empty, Decisions(price=1), 1.0, balance)

        assert new_state.engineers == 0
        assert new_state.sales == 0


class TestCalendar:
    """Tests for quarter arithmetic."""

    def test_next_quarter_within_year(self):
        assert next_quarter(3, 2) == (3, 3)

    def test_next_quarter_wraps(self):
        assert next_quarter(3, 4) == (4, 1)

    def test_quarters_remaining(self):
        assert quarters_remaining(1, 1, 10) == 39
        assert quarters_remaining(10, 1, 10) == 3
        assert quarters_remaining(10, 4, 10) == 0

    def test_quarters_remaining_defaults_to_ten_years(self):
        assert quarters_remaining(1, 1) == 39
        assert quarters_remaining(9, 4) == 4


class TestCompanyState:
    """Tests for the state snapshot schema."""

    def test_apply_update(self, state, decisions, balance):
        new_state, _ = advance(state, decisions, 1.0, balance)

        updated = state.apply(new_state)

        assert updated.current_quarter == 2
        assert updated.engineers == 5
        assert state.current_quarter == 1

    def test_ignores_persistence_columns(self):
        row = {
            "id": "game-1",
            "owner_id": "user-1",
            "version": 3,
            "status": "active",
            "current_year": 2,
            "current_quarter": 3,
            "cash": 12345.67,
            "quality": 61,
            "engineers": 3,
            "sales": 2,
            "cumulative_profit": -500,
        }

        state = CompanyState.model_validate(row)

        assert state.current_year == 2
        assert state.headcount == 5

    def test_rejects_negative_headcount(self):
        with pytest.raises(ValueError):
            CompanyState(cash=100, engineers=-1)

    def test_rejects_bad_quarter(self):
        with pytest.raises(ValueError):
            CompanyState(cash=100, current_quarter=5)

    def test_rejects_non_positive_price(self):
        with pytest.raises(ValueError):
            Decisions(price=0)
