"""
Plan summary — the headline numbers of a projection.

Answers the questions the plan is built for:
  When am I debt-free?           first quincena with zero total debt
  When does each debt settle?    first quincena its balance reaches zero
  Are my goals covered in time?  first quincena each goal reaches zero
  What is left over?             total residual savings
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

import pandas as pd

from core.schema import TransactionKind
from core.utils import PeriodMarker
from engine.ledger import Period


@dataclass
class PlanSummary:
    n_periods: int
    total_income: int
    total_savings: int
    total_paid_to_debt: int
    final_total_debt: int
    final_total_goals: int
    debt_free_at: Optional[PeriodMarker]
    shortfall_periods: int
    debt_settled_at: Dict[str, Optional[PeriodMarker]] = field(default_factory=dict)
    goal_completed_at: Dict[str, Optional[PeriodMarker]] = field(default_factory=dict)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        def _when(marker: Optional[PeriodMarker]) -> str:
            return marker.label if marker is not None else "not within projection"

        rows = [
            {"Metric": "Quincenas projected", "Value": str(self.n_periods)},
            {"Metric": "Total income", "Value": f"{self.total_income:,}"},
            {"Metric": "Paid to debt", "Value": f"{self.total_paid_to_debt:,}"},
            {"Metric": "Residual savings", "Value": f"{self.total_savings:,}"},
            {"Metric": "Final total debt", "Value": f"{self.final_total_debt:,}"},
            {"Metric": "Final goals outstanding", "Value": f"{self.final_total_goals:,}"},
            {"Metric": "Debt-free", "Value": _when(self.debt_free_at)},
            {"Metric": "Periods with shortfall", "Value": str(self.shortfall_periods)},
        ]
        for name, marker in self.debt_settled_at.items():
            rows.append({"Metric": f"{name} settled", "Value": _when(marker)})
        for name, marker in self.goal_completed_at.items():
            rows.append({"Metric": f"{name} covered", "Value": _when(marker)})
        return pd.DataFrame(rows)


def _first_zero(periods: Sequence[Period], balances: str, name: str) -> Optional[PeriodMarker]:
    for p in periods:
        if getattr(p, balances).get(name, 0) == 0:
            return p.marker
    return None


def plan_summary(periods: Sequence[Period]) -> PlanSummary:
    debt_names = list(periods[0].debt_balances_after) if periods else []
    goal_names = list(periods[0].goal_balances_after) if periods else []
    last = periods[-1] if periods else None

    debt_kinds = (TransactionKind.DEBT_MINIMUM, TransactionKind.DEBT_PAYDOWN)
    return PlanSummary(
        n_periods=len(periods),
        total_income=sum(p.income for p in periods),
        total_savings=sum(p.savings for p in periods),
        total_paid_to_debt=sum(
            t.amount for p in periods for t in p.transactions if t.kind in debt_kinds
        ),
        final_total_debt=last.total_debt if last else 0,
        final_total_goals=last.total_goals if last else 0,
        debt_free_at=next((p.marker for p in periods if p.total_debt == 0), None),
        shortfall_periods=sum(1 for p in periods if p.shortfall > 0),
        debt_settled_at={n: _first_zero(periods, "debt_balances_after", n) for n in debt_names},
        goal_completed_at={n: _first_zero(periods, "goal_balances_after", n) for n in goal_names},
    )
