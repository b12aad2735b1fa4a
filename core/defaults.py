"""
Default plan: the household profile the planner ships with (amounts in COP).
"""

from __future__ import annotations

from typing import Tuple

from .config import Debt, FinancialConfiguration, FixedExpense, OneTimeGoal, ProjectionConfig
from .utils import PeriodMarker

DEFAULT_INCOME = 5_400_000
DEFAULT_ADVISORY_RATE = 0.022


def default_configuration() -> FinancialConfiguration:
    return FinancialConfiguration(
        periodic_income=DEFAULT_INCOME,
        fixed_expenses=(
            FixedExpense(name="Baby expenses", amount=300_000, schedule="split"),
            FixedExpense(name="Emiliano", amount=100_000, schedule=5),
            FixedExpense(name="Internet", amount=110_000, schedule=5),
            FixedExpense(name="Rent", amount=1_400_000, schedule=20, critical=True),
        ),
        debts=(
            Debt(name="AMEX", balance=1_500_000, paydown_days=(5,)),
            Debt(name="NU", balance=2_200_000, paydown_days=(20,)),
            Debt(
                name="Bogota",
                balance=3_100_000,
                minimum_installment=320_000,
                trigger_day=5,
            ),
        ),
        one_time_goals=(
            OneTimeGoal(
                name="Homologation",
                amount=800_000,
                active_from=PeriodMarker(2026, 0, 5),
                active_until=PeriodMarker(2026, 0, 20),
            ),
            OneTimeGoal(
                name="University",
                amount=7_000_000,
                already_saved=3_400_000,
                active_from=PeriodMarker(2026, 0, 5),
                active_until=PeriodMarker(2026, 1, 5),
            ),
        ),
        paydown_order=("AMEX", "NU", "Bogota"),
        safety_buffer=0,
        advisory_monthly_rate=DEFAULT_ADVISORY_RATE,
    )


def default_projection() -> ProjectionConfig:
    return ProjectionConfig(start_day=5, start_month=0, start_year=2026, n_periods=12)


def default_plan() -> Tuple[FinancialConfiguration, ProjectionConfig]:
    return default_configuration(), default_projection()
