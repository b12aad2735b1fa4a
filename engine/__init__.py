"""
Allocation engine — per-quincena cash allocation and the projection runner.
"""

from .ledger import Period, SimulationState, Transaction
from .cashflow import principal_component, simulate_period
from .runner import fold_periods, run_projection

__all__ = [
    "Period",
    "SimulationState",
    "Transaction",
    "principal_component",
    "simulate_period",
    "fold_periods",
    "run_projection",
]
