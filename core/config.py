"""
Plan configuration.

FinancialConfiguration and its parts are immutable pydantic models: field-level
checks (types, non-negative money, pay days) run when the model is built.
Cross-field checks and advisory warnings live in data_prep/validators.py.
ProjectionConfig holds the date range to simulate.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

from .schema import QUINCENA_DAYS
from .utils import PeriodMarker, split_amount

PayDay = Literal[5, 20]
# Whole currency units; bools and numeric strings are refused
Money = Annotated[StrictInt, Field(ge=0)]
PositiveMoney = Annotated[StrictInt, Field(gt=0)]

PLAN_FILE = Path(os.getenv("QUINCENA_PLAN_FILE", Path.cwd() / "plan.json"))
LOG_LEVEL = os.getenv("QUINCENA_LOG_LEVEL", "WARNING")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class FixedExpense(_Frozen):
    """A recurring monthly cost: halved across both quincenas ("split") or paid in full on one day."""

    name: str = Field(min_length=1)
    amount: Money
    schedule: Union[Literal["split"], PayDay] = "split"
    critical: bool = False

    def amount_on(self, day: int) -> int:
        if self.schedule == "split":
            return split_amount(self.amount, day)
        return self.amount if self.schedule == day else 0


class Debt(_Frozen):
    name: str = Field(min_length=1)
    balance: Money
    minimum_installment: Optional[Money] = None
    trigger_day: Optional[PayDay] = None
    # Advisory monthly rate (decimal). None falls back to the plan-wide rate.
    monthly_rate: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)
    paydown_days: Tuple[PayDay, ...] = QUINCENA_DAYS

    @model_validator(mode="after")
    def _installment_needs_day(self) -> "Debt":
        if (self.minimum_installment is None) != (self.trigger_day is None):
            raise ValueError(
                f"debt '{self.name}': minimum_installment and trigger_day must be set together"
            )
        if not self.paydown_days:
            raise ValueError(f"debt '{self.name}': paydown_days cannot be empty")
        return self


class OneTimeGoal(_Frozen):
    """
    A lump obligation paid down as soon as cash allows while its window is open.
    The window is inclusive on both ends; a missing bound leaves that side open.
    """

    name: str = Field(min_length=1)
    amount: Money
    already_saved: Money = 0
    active_from: Optional[PeriodMarker] = None
    active_until: Optional[PeriodMarker] = None

    @model_validator(mode="after")
    def _window_on_pay_days(self) -> "OneTimeGoal":
        for bound in (self.active_from, self.active_until):
            if bound is None:
                continue
            if bound.day not in QUINCENA_DAYS or not 0 <= bound.month <= 11:
                raise ValueError(f"goal '{self.name}': window bound {tuple(bound)} is not a quincena")
        if (
            self.active_from is not None
            and self.active_until is not None
            and self.active_from > self.active_until
        ):
            raise ValueError(f"goal '{self.name}': active_from is after active_until")
        return self

    @property
    def outstanding(self) -> int:
        return max(0, self.amount - self.already_saved)

    def is_active(self, marker: PeriodMarker) -> bool:
        if self.active_from is not None and marker < self.active_from:
            return False
        if self.active_until is not None and marker > self.active_until:
            return False
        return True


class FinancialConfiguration(_Frozen):
    periodic_income: PositiveMoney
    fixed_expenses: Tuple[FixedExpense, ...] = ()
    debts: Tuple[Debt, ...] = ()
    one_time_goals: Tuple[OneTimeGoal, ...] = ()
    paydown_order: Tuple[str, ...] = ()
    safety_buffer: Money = 0
    advisory_monthly_rate: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)

    def debt(self, name: str) -> Debt:
        for d in self.debts:
            if d.name == name:
                return d
        raise KeyError(name)

    def rate_for(self, debt: Debt) -> float:
        return self.advisory_monthly_rate if debt.monthly_rate is None else debt.monthly_rate


@dataclass(frozen=True)
class ProjectionConfig:
    start_day: int = 5
    start_month: int = 0  # 0-indexed
    start_year: int = 2026
    n_periods: int = 12

    @property
    def start(self) -> PeriodMarker:
        return PeriodMarker(self.start_year, self.start_month, self.start_day)
