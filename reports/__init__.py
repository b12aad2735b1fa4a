"""
Reporting views over the projection — chart series, listings, export and summary.
"""

from .aggregator import (
    PeriodListing,
    cumulative_savings,
    debt_series,
    export_csv,
    filter_transactions,
    monthly_savings,
    transactions_frame,
)
from .summary import PlanSummary, plan_summary

__all__ = [
    "PeriodListing",
    "cumulative_savings",
    "debt_series",
    "export_csv",
    "filter_transactions",
    "monthly_savings",
    "transactions_frame",
    "PlanSummary",
    "plan_summary",
]
