import io

import pandas as pd
import pytest

from core.config import Debt, FixedExpense, ProjectionConfig
from core.defaults import default_plan
from core.schema import EXPORT_COLUMNS, TransactionKind
from core.utils import PeriodMarker
from engine.runner import run_projection
from reports.aggregator import (
    cumulative_savings,
    debt_series,
    export_csv,
    filter_transactions,
    monthly_savings,
    transactions_frame,
)
from reports.summary import plan_summary


@pytest.fixture
def default_periods():
    config, projection = default_plan()
    return run_projection(config, projection)


@pytest.fixture
def savings_periods(make_config):
    config = make_config(
        periodic_income=1_000_000,
        fixed_expenses=(FixedExpense(name="Rent", amount=300_000, schedule=20, critical=True),),
        debts=(Debt(name="Card", balance=400_000),),
        paydown_order=("Card",),
        safety_buffer=100_000,
    )
    return run_projection(config, ProjectionConfig(n_periods=4))


def test_debt_series_totals(default_periods):
    df = debt_series(default_periods)
    assert list(df["label"][:2]) == ["5 Jan 2026", "20 Jan 2026"]
    assert {"AMEX", "NU", "Bogota", "total_debt", "total_goals"} <= set(df.columns)
    assert (df["total_debt"] == df[["AMEX", "NU", "Bogota"]].sum(axis=1)).all()
    assert df["total_debt"].is_monotonic_decreasing
    assert df["total_debt"].iloc[0] == 6_800_000


def test_debt_series_empty():
    assert list(debt_series([]).columns) == ["label", "date", "total_debt", "total_goals"]


def test_cumulative_savings_is_running_sum(savings_periods):
    df = cumulative_savings(savings_periods)
    # Card is cleared on 5 Jan; the buffer stays as savings
    assert list(df["savings"]) == [100_000, 200_000, 500_000, 200_000]
    assert list(df["cumulative"]) == [100_000, 300_000, 800_000, 1_000_000]


def test_monthly_savings_groups_by_month(savings_periods):
    df = monthly_savings(savings_periods)
    assert list(df.columns) == ["year", "month", "name", "amount"]
    assert df.to_dict("records") == [
        {"year": 2026, "month": 0, "name": "Jan", "amount": 300_000},
        {"year": 2026, "month": 1, "name": "Feb", "amount": 700_000},
    ]


def test_filter_by_search_is_case_insensitive(default_periods):
    listings = filter_transactions(default_periods, search="rENt")
    assert len(listings) == 6
    assert all(listing.period.day == 20 for listing in listings)
    assert all(t.label == "Rent" for listing in listings for t in listing.transactions)
    assert listings[0].income == 0
    assert listings[0].expenses == 1_400_000


def test_filter_by_kind(default_periods):
    listings = filter_transactions(default_periods, kind="priority-goal")
    assert [listing.period.marker for listing in listings] == [
        PeriodMarker(2026, 0, 5),
        PeriodMarker(2026, 0, 20),
        PeriodMarker(2026, 1, 5),
    ]
    assert sum(listing.expenses for listing in listings) == 800_000 + 3_600_000


def test_filter_combines_search_and_kind(default_periods):
    listings = filter_transactions(default_periods, search="amex", kind=TransactionKind.DEBT_PAYDOWN)
    assert [t.amount for listing in listings for t in listing.transactions] == [1_110_000, 390_000]


def test_filter_without_matches_is_empty(default_periods):
    assert filter_transactions(default_periods, search="lottery") == []


def test_filter_rejects_unknown_kind(default_periods):
    with pytest.raises(ValueError):
        filter_transactions(default_periods, kind="interest")


def test_transactions_frame_has_one_row_per_transaction(default_periods):
    df = transactions_frame(default_periods)
    assert list(df.columns[: len(EXPORT_COLUMNS)]) == list(EXPORT_COLUMNS)
    assert len(df) == sum(len(p.transactions) for p in default_periods)
    first = df.iloc[0]
    assert first["period_date"] == "2026-01-05"
    assert first["transaction_kind"] == "income"
    assert first["total_debt_after_period"] == 6_800_000


def test_export_csv_text_and_file(default_periods, tmp_path):
    text = export_csv(default_periods)
    assert text.splitlines()[0] == ",".join(EXPORT_COLUMNS)
    assert text.splitlines()[1] == "2026-01-05,Payroll,income,2700000,6800000"

    path = tmp_path / "plan.csv"
    export_csv(default_periods, path)
    df = pd.read_csv(path)
    assert len(df) == len(text.splitlines()) - 1

    buffer = io.StringIO()
    export_csv(default_periods, buffer)
    assert buffer.getvalue() == text


def test_plan_summary_default_plan(default_periods):
    summary = plan_summary(default_periods)
    assert summary.n_periods == 12
    assert summary.total_income == 32_400_000
    assert summary.final_total_debt == 0
    assert summary.final_total_goals == 0
    assert summary.debt_free_at == PeriodMarker(2026, 3, 5)
    assert summary.debt_settled_at == {
        "AMEX": PeriodMarker(2026, 2, 5),
        "NU": PeriodMarker(2026, 2, 20),
        "Bogota": PeriodMarker(2026, 3, 5),
    }
    assert summary.goal_completed_at == {
        "Homologation": PeriodMarker(2026, 0, 5),
        "University": PeriodMarker(2026, 1, 5),
    }
    assert summary.total_paid_to_debt == 6_949_799
    assert summary.total_savings == 9_590_201
    assert summary.shortfall_periods == 0

    table = summary.to_dataframe()
    assert table.loc[table["Metric"] == "Debt-free", "Value"].item() == "5 Apr 2026"


def test_plan_summary_of_empty_projection():
    summary = plan_summary([])
    assert summary.n_periods == 0
    assert summary.debt_free_at is None
    assert summary.to_dataframe()["Metric"].iloc[0] == "Quincenas projected"
