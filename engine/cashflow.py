"""
Deterministic quincena allocation — one period of the plan.

Order of application (significant, changing it changes outcomes):
  1. Income                 half of the monthly income
  2. Fixed expenses         always deducted in full, cash may go negative
  3. Priority goals         one-time goals whose window covers the period
  4. Debt minimums          fixed installments on their trigger day
  5. Discretionary paydown  surplus above the safety buffer, in configured order
  6. Residual savings       whatever cash is left

All amounts are whole currency units. Balances only ever go down.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from core.config import FinancialConfiguration
from core.schema import TransactionKind
from core.utils import PeriodMarker, round_half_up, split_amount

from .ledger import Period, SimulationState, Transaction

logger = logging.getLogger(__name__)

INCOME_LABEL = "Payroll"
SAVINGS_LABEL = "Available / savings"


def estimated_interest(balance: int, monthly_rate: float) -> int:
    """Advisory one-month interest on the balance. Never added to the balance."""
    return round_half_up(balance * monthly_rate)


def principal_component(payment: int, balance: int, monthly_rate: float) -> int:
    """
    Heuristic share of an installment that reduces principal:
        max(0, payment - balance * monthly_rate), capped at the balance.
    This approximates the interest a payment absorbs; it is not an amortization schedule.
    """
    return min(balance, max(0, payment - estimated_interest(balance, monthly_rate)))


@dataclass
class PeriodBook:
    """Working cash and ledger for a single quincena."""
    cash: int
    transactions: List[Transaction] = field(default_factory=list)

    def record(
        self,
        kind: TransactionKind,
        label: str,
        amount: int,
        *,
        critical: bool = False,
        ref: Optional[str] = None,
    ) -> None:
        # zero allocations are not recorded
        if amount > 0:
            self.transactions.append(
                Transaction(kind=kind, label=label, amount=int(amount), is_critical=critical, ref=ref)
            )


def apply_fixed_expenses(book: PeriodBook, config: FinancialConfiguration, marker: PeriodMarker) -> None:
    for expense in config.fixed_expenses:
        amount = expense.amount_on(marker.day)
        if amount <= 0:
            continue
        book.cash -= amount
        book.record(
            TransactionKind.FIXED_EXPENSE,
            expense.name,
            amount,
            critical=expense.critical,
            ref=expense.name,
        )


def apply_priority_goals(
    book: PeriodBook,
    config: FinancialConfiguration,
    marker: PeriodMarker,
    goal_balances: Dict[str, int],
) -> None:
    for goal in config.one_time_goals:
        remaining = goal_balances.get(goal.name, 0)
        if remaining <= 0 or not goal.is_active(marker):
            continue
        pay = min(book.cash, remaining)
        if pay <= 0:
            continue
        goal_balances[goal.name] = remaining - pay
        book.cash -= pay
        book.record(TransactionKind.PRIORITY_GOAL, goal.name, pay, critical=True, ref=goal.name)


def apply_minimum_installments(
    book: PeriodBook,
    config: FinancialConfiguration,
    marker: PeriodMarker,
    debt_balances: Dict[str, int],
) -> None:
    for debt in config.debts:
        installment = debt.minimum_installment
        balance = debt_balances.get(debt.name, 0)
        if not installment or debt.trigger_day != marker.day or balance <= 0:
            continue

        if book.cash >= installment:
            pay, partial = installment, False
        elif book.cash > 0:
            pay, partial = book.cash, True
        else:
            logger.debug("%s: no cash left for %s installment", marker.label, debt.name)
            continue

        principal = principal_component(pay, balance, config.rate_for(debt))
        debt_balances[debt.name] = balance - principal
        book.cash -= pay
        if partial:
            book.record(
                TransactionKind.DEBT_MINIMUM,
                f"Partial installment {debt.name}",
                pay,
                critical=True,
                ref=debt.name,
            )
        else:
            book.record(TransactionKind.DEBT_MINIMUM, f"Installment {debt.name}", pay, ref=debt.name)


def apply_discretionary_paydown(
    book: PeriodBook,
    config: FinancialConfiguration,
    marker: PeriodMarker,
    debt_balances: Dict[str, int],
) -> None:
    surplus = max(0, book.cash - config.safety_buffer)
    for name in config.paydown_order:
        if surplus <= 0:
            break
        debt = config.debt(name)
        balance = debt_balances.get(name, 0)
        if balance <= 0 or marker.day not in debt.paydown_days:
            continue
        pay = min(surplus, balance)
        debt_balances[name] = balance - pay
        surplus -= pay
        book.cash -= pay
        book.record(TransactionKind.DEBT_PAYDOWN, f"Principal {name}", pay, ref=name)


def simulate_period(
    state: SimulationState,
    marker: PeriodMarker,
    config: FinancialConfiguration,
) -> Tuple[SimulationState, Period]:
    """
    Allocate one quincena. Pure: returns the next state and the finished Period,
    leaving `state` untouched.
    """
    debt_balances = dict(state.debt_balances)
    goal_balances = dict(state.goal_balances)

    income = split_amount(config.periodic_income, marker.day)
    book = PeriodBook(cash=income)
    book.record(TransactionKind.INCOME, INCOME_LABEL, income)

    apply_fixed_expenses(book, config, marker)
    apply_priority_goals(book, config, marker, goal_balances)
    apply_minimum_installments(book, config, marker, debt_balances)
    apply_discretionary_paydown(book, config, marker, debt_balances)

    if book.cash > 0:
        book.record(TransactionKind.SURPLUS_SAVINGS, SAVINGS_LABEL, book.cash)

    shortfall = max(0, -book.cash)
    if shortfall:
        logger.warning(
            "%s: fixed expenses exceed income by %s; period ends with a shortfall",
            marker.label,
            f"{shortfall:,}",
        )

    period = Period(
        day=marker.day,
        month=marker.month,
        year=marker.year,
        income=income,
        transactions=tuple(book.transactions),
        ending_cash_balance=max(0, book.cash),
        debt_balances_after={k: max(0, v) for k, v in debt_balances.items()},
        goal_balances_after={k: max(0, v) for k, v in goal_balances.items()},
        shortfall=shortfall,
    )
    logger.debug(
        "%s: %d transactions, ending cash %s, total debt %s",
        marker.label,
        len(period.transactions),
        f"{period.ending_cash_balance:,}",
        f"{period.total_debt:,}",
    )
    return state.with_balances(debt_balances=debt_balances, goal_balances=goal_balances), period
