from __future__ import annotations

from enum import Enum
from typing import Tuple

# Pay days of every month. The whole model runs on this fixed cadence.
QUINCENA_DAYS: Tuple[int, int] = (5, 20)

MONTH_NAMES: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class TransactionKind(str, Enum):
    INCOME = "income"
    FIXED_EXPENSE = "fixed-expense"
    PRIORITY_GOAL = "priority-goal"
    DEBT_MINIMUM = "debt-minimum"
    DEBT_PAYDOWN = "debt-paydown"
    SURPLUS_SAVINGS = "surplus-savings"


# Flat export: one row per transaction.
EXPORT_COLUMNS: Tuple[str, ...] = (
    "period_date",
    "transaction_label",
    "transaction_kind",
    "amount",
    "total_debt_after_period",
)
