"""
Core package — schema constants, plan configuration, the quincena date sequencer
and shared numeric helpers. No allocation logic lives here.
"""

from .schema import EXPORT_COLUMNS, QUINCENA_DAYS, TransactionKind
from .config import (
    Debt,
    FinancialConfiguration,
    FixedExpense,
    OneTimeGoal,
    ProjectionConfig,
)
from .utils import PeriodMarker, quincena_dates, round_half_up
from .defaults import default_configuration, default_plan, default_projection

__all__ = [
    "EXPORT_COLUMNS",
    "QUINCENA_DAYS",
    "TransactionKind",
    "Debt",
    "FinancialConfiguration",
    "FixedExpense",
    "OneTimeGoal",
    "ProjectionConfig",
    "PeriodMarker",
    "quincena_dates",
    "round_half_up",
    "default_configuration",
    "default_plan",
    "default_projection",
]
