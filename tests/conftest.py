import sys
from pathlib import Path

import pytest

# Make project root importable (flat top-level packages)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import Debt, FinancialConfiguration, FixedExpense, OneTimeGoal  # noqa: E402
from core.schema import TransactionKind  # noqa: E402
from core.utils import PeriodMarker  # noqa: E402

# Income is the inflow; surplus savings is the residual itself, equal to the ending cash
_NOT_SPENT = (TransactionKind.INCOME, TransactionKind.SURPLUS_SAVINGS)


@pytest.fixture
def make_config():
    """Factory for small plans; keyword arguments override the bare defaults."""

    def _make(**overrides):
        values = {"periodic_income": 1_000_000}
        values.update(overrides)
        return FinancialConfiguration(**values)

    return _make


@pytest.fixture
def household_config():
    """A plan that exercises every allocation step over a year."""
    return FinancialConfiguration(
        periodic_income=4_000_000,
        fixed_expenses=(
            FixedExpense(name="Groceries", amount=600_000, schedule="split"),
            FixedExpense(name="Rent", amount=1_200_000, schedule=20, critical=True),
            FixedExpense(name="Phone", amount=90_000, schedule=5),
        ),
        debts=(
            Debt(name="Visa", balance=900_000),
            Debt(name="Loan", balance=2_500_000, minimum_installment=250_000, trigger_day=5, monthly_rate=0.018),
            Debt(name="Store", balance=300_000, paydown_days=(20,)),
        ),
        one_time_goals=(
            OneTimeGoal(
                name="Tuition",
                amount=1_500_000,
                already_saved=200_000,
                active_from=PeriodMarker(2026, 0, 5),
                active_until=PeriodMarker(2026, 1, 5),
            ),
        ),
        paydown_order=("Store", "Visa", "Loan"),
        safety_buffer=50_000,
        advisory_monthly_rate=0.02,
    )


@pytest.fixture
def check_invariants():
    """Per-period checks: non-negative cash and amounts, cash conservation, savings equal to ending cash."""

    def _check(period):
        assert period.ending_cash_balance >= 0
        assert all(t.amount > 0 for t in period.transactions)
        spent = sum(t.amount for t in period.transactions if t.kind not in _NOT_SPENT)
        assert period.income - spent == period.ending_cash_balance - period.shortfall
        assert period.savings == period.ending_cash_balance

    return _check
