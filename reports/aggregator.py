"""
Read-only views over the engine output — chart series, transaction listings and flat export.

Every function takes the list of Period records returned by run_projection and
derives its result without touching the engine:
  debt_series          total (and per-debt) balance after each quincena
  cumulative_savings   running sum of residual savings
  monthly_savings      residual savings grouped by calendar month
  filter_transactions  searchable/filterable ledger grouped by quincena
  transactions_frame   one row per transaction, ready for CSV export
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from core.schema import EXPORT_COLUMNS, TransactionKind
from core.utils import month_name
from engine.ledger import Period, Transaction


def debt_series(periods: Sequence[Period]) -> pd.DataFrame:
    """
    Balance trend for charting.

    Columns: label, date, <one column per debt>, total_debt, total_goals
    """
    rows = []
    for p in periods:
        row = {"label": p.label, "date": pd.Timestamp(p.date)}
        row.update(p.debt_balances_after)
        row["total_debt"] = p.total_debt
        row["total_goals"] = p.total_goals
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=["label", "date", "total_debt", "total_goals"])
    return pd.DataFrame(rows)


def cumulative_savings(periods: Sequence[Period]) -> pd.DataFrame:
    """Columns: label, date, year, month, savings, cumulative."""
    savings = np.array([p.savings for p in periods], dtype=np.int64)
    return pd.DataFrame(
        {
            "label": [p.label for p in periods],
            "date": [pd.Timestamp(p.date) for p in periods],
            "year": [p.year for p in periods],
            "month": [p.month for p in periods],
            "savings": savings,
            "cumulative": np.cumsum(savings),
        }
    )


def monthly_savings(periods: Sequence[Period]) -> pd.DataFrame:
    """Residual savings per calendar month. Columns: year, month, name, amount."""
    df = cumulative_savings(periods)
    if df.empty:
        return pd.DataFrame(columns=["year", "month", "name", "amount"])
    grouped = (
        df.groupby(["year", "month"], as_index=False, sort=True)["savings"]
        .sum()
        .rename(columns={"savings": "amount"})
    )
    grouped.insert(2, "name", grouped["month"].map(month_name))
    return grouped


@dataclass(frozen=True)
class PeriodListing:
    """A quincena with only the transactions that passed the filters."""
    period: Period
    transactions: Tuple[Transaction, ...]
    income: int
    expenses: int


def filter_transactions(
    periods: Sequence[Period],
    *,
    search: Optional[str] = None,
    kind: Optional[Union[TransactionKind, str]] = None,
) -> List[PeriodListing]:
    """
    Filter every period's ledger by a case-insensitive label search and/or a
    transaction kind. Periods left with no visible transactions are dropped.
    income/expenses are totals over the visible transactions only.
    """
    needle = search.lower() if search else None
    wanted = TransactionKind(kind) if kind is not None else None

    listings = []
    for p in periods:
        visible = p.transactions
        if needle:
            visible = tuple(t for t in visible if needle in t.label.lower())
        if wanted is not None:
            visible = tuple(t for t in visible if t.kind == wanted)
        if not visible:
            continue
        income = sum(t.amount for t in visible if t.kind == TransactionKind.INCOME)
        expenses = sum(t.amount for t in visible if t.kind != TransactionKind.INCOME)
        listings.append(PeriodListing(period=p, transactions=visible, income=income, expenses=expenses))
    return listings


def transactions_frame(periods: Sequence[Period]) -> pd.DataFrame:
    """One row per transaction with EXPORT_COLUMNS (plus ref and is_critical)."""
    rows = []
    for p in periods:
        total_debt = p.total_debt
        for t in p.transactions:
            rows.append({
                "period_date": p.date.isoformat(),
                "transaction_label": t.label,
                "transaction_kind": t.kind.value,
                "amount": t.amount,
                "total_debt_after_period": total_debt,
                "ref": t.ref,
                "is_critical": t.is_critical,
            })
    return pd.DataFrame(rows, columns=list(EXPORT_COLUMNS) + ["ref", "is_critical"])


def export_csv(
    periods: Sequence[Period],
    target: Union[str, Path, IO[str], None] = None,
) -> Optional[str]:
    """
    Write the flat export (EXPORT_COLUMNS only) as CSV.
    Returns the CSV text when no target is given.
    """
    df = transactions_frame(periods)[list(EXPORT_COLUMNS)]
    return df.to_csv(target, index=False)
