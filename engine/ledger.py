"""
Ledger records produced by the allocation engine.

Transaction: one allocation inside a quincena (amount always >= 0; direction
             comes from its kind).
Period:      one simulated quincena with its ordered transactions and the
             balances left after it.
SimulationState: the balances carried from one quincena to the next.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, Mapping, Optional, Tuple

from core.config import FinancialConfiguration
from core.schema import TransactionKind
from core.utils import PeriodMarker


@dataclass(frozen=True)
class Transaction:
    kind: TransactionKind
    label: str
    amount: int
    is_critical: bool = False
    ref: Optional[str] = None  # expense / debt / goal name

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError(f"Transaction amount cannot be negative: {self.label}={self.amount}")


@dataclass(frozen=True)
class Period:
    day: int
    month: int  # 0-indexed (0 = Jan)
    year: int
    income: int
    transactions: Tuple[Transaction, ...]
    ending_cash_balance: int
    debt_balances_after: Mapping[str, int]
    goal_balances_after: Mapping[str, int]
    shortfall: int = 0  # fixed expenses in excess of income, never negative

    @property
    def marker(self) -> PeriodMarker:
        return PeriodMarker(self.year, self.month, self.day)

    @property
    def date(self) -> date:
        return self.marker.date

    @property
    def label(self) -> str:
        return self.marker.label

    @property
    def total_debt(self) -> int:
        return sum(self.debt_balances_after.values())

    @property
    def total_goals(self) -> int:
        return sum(self.goal_balances_after.values())

    @property
    def savings(self) -> int:
        return sum(t.amount for t in self.transactions if t.kind == TransactionKind.SURPLUS_SAVINGS)

    def of_kind(self, kind: TransactionKind) -> Tuple[Transaction, ...]:
        return tuple(t for t in self.transactions if t.kind == kind)


@dataclass(frozen=True)
class SimulationState:
    """Running balances threaded through the fold. Never mutated in place."""
    debt_balances: Dict[str, int] = field(default_factory=dict)
    goal_balances: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def initial(cls, config: FinancialConfiguration) -> "SimulationState":
        return cls(
            debt_balances={d.name: d.balance for d in config.debts},
            goal_balances={g.name: g.outstanding for g in config.one_time_goals},
        )

    def with_balances(
        self,
        *,
        debt_balances: Optional[Dict[str, int]] = None,
        goal_balances: Optional[Dict[str, int]] = None,
    ) -> "SimulationState":
        return replace(
            self,
            debt_balances=dict(self.debt_balances if debt_balances is None else debt_balances),
            goal_balances=dict(self.goal_balances if goal_balances is None else goal_balances),
        )
