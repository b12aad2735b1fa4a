"""
Projection runner — validates a plan and folds it over the quincena dates.

The whole sequence is rebuilt from the immutable configuration on every call:
state is threaded explicitly from one period to the next and nothing is kept
between runs, so identical inputs always give identical output.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from core.config import FinancialConfiguration, ProjectionConfig
from core.utils import PeriodMarker, quincena_dates
from data_prep.validators import validate_configuration

from .cashflow import simulate_period
from .ledger import Period, SimulationState

logger = logging.getLogger(__name__)


def fold_periods(
    config: FinancialConfiguration,
    markers: Iterable[PeriodMarker],
    *,
    initial_state: Optional[SimulationState] = None,
) -> Tuple[SimulationState, List[Period]]:
    """
    Left fold of simulate_period over `markers`.
    Does not validate; use run_projection at the boundary.
    """
    state = initial_state if initial_state is not None else SimulationState.initial(config)
    periods: List[Period] = []
    for marker in markers:
        state, period = simulate_period(state, marker, config)
        periods.append(period)
    return state, periods


def run_projection(
    config: FinancialConfiguration,
    projection: Optional[ProjectionConfig] = None,
) -> List[Period]:
    """
    Run the full quincena projection.

    Parameters
    ----------
    config : FinancialConfiguration
        Income, fixed expenses, debts, goals and paydown order
    projection : ProjectionConfig, optional
        Start quincena and number of periods (defaults to 12 quincenas from 5 Jan 2026)

    Returns
    -------
    List of Period records in date order.

    Raises ConfigurationError (before simulating anything) if the plan is invalid.
    """
    projection = projection if projection is not None else ProjectionConfig()

    result = validate_configuration(config, projection)
    for warning in result.warnings:
        logger.warning(warning)
    result.raise_for_errors()

    markers = quincena_dates(
        projection.start_day,
        projection.start_month,
        projection.start_year,
        projection.n_periods,
    )
    _, periods = fold_periods(config, markers)

    if periods:
        logger.info(
            "Projected %d quincenas %s to %s; final debt %s",
            len(periods),
            periods[0].label,
            periods[-1].label,
            f"{periods[-1].total_debt:,}",
        )
    return periods
