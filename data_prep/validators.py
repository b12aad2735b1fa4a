"""
Plan validation before it enters the engine.

Field-level checks (types, non-negative money, pay days) are enforced by the
pydantic models in core/config.py. This module adds the cross-field checks:
- paydown order naming unknown or repeated debts
- duplicate account names
- projection start that is not a quincena, or a projection outside the calendar
and informational warnings for plans that will run but probably not as intended.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from core.config import FinancialConfiguration, ProjectionConfig
from core.exceptions import ConfigurationError
from core.schema import QUINCENA_DAYS
from core.utils import last_quincena_year, split_amount


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a plan."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ConfigurationError(self.errors)

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def _format_pydantic_errors(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return messages


def parse_configuration(data: Mapping[str, Any]) -> FinancialConfiguration:
    """Build a FinancialConfiguration from plain data, raising ConfigurationError on bad input."""
    try:
        return FinancialConfiguration.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(_format_pydantic_errors(exc)) from exc


def validate_projection(projection: ProjectionConfig, result: Optional[ValidationResult] = None) -> ValidationResult:
    result = result if result is not None else ValidationResult()
    day_ok = projection.start_day in QUINCENA_DAYS
    month_ok = 0 <= projection.start_month <= 11
    year_ok = MINYEAR <= projection.start_year <= MAXYEAR
    if not day_ok:
        result.errors.append(f"Projection start day must be one of {QUINCENA_DAYS}, got {projection.start_day}.")
    if not month_ok:
        result.errors.append(f"Projection start month must be in 0..11, got {projection.start_month}.")
    if not year_ok:
        result.errors.append(f"Projection start year must be in {MINYEAR}..{MAXYEAR}, got {projection.start_year}.")
    if projection.n_periods < 0:
        result.errors.append(f"Projection length cannot be negative, got {projection.n_periods}.")
    elif projection.n_periods == 0:
        result.warnings.append("Projection length is 0 — nothing will be simulated.")
    elif day_ok and month_ok and year_ok:
        final_year = last_quincena_year(
            projection.start_day, projection.start_month, projection.start_year, projection.n_periods
        )
        if final_year > MAXYEAR:
            result.errors.append(
                f"Projection of {projection.n_periods} quincenas runs past year {MAXYEAR} (ends in {final_year})."
            )
    return result


def validate_configuration(
    config: FinancialConfiguration,
    projection: Optional[ProjectionConfig] = None,
) -> ValidationResult:
    """
    Run all cross-field checks on a plan.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Names ---
    for label, names in (
        ("debt", [d.name for d in config.debts]),
        ("goal", [g.name for g in config.one_time_goals]),
    ):
        dups = sorted(n for n, c in Counter(names).items() if c > 1)
        if dups:
            result.errors.append(f"Duplicate {label} names: {dups}")

    dup_expenses = sorted(n for n, c in Counter(e.name for e in config.fixed_expenses).items() if c > 1)
    if dup_expenses:
        result.warnings.append(f"Duplicate fixed expense names: {dup_expenses}")

    # --- Paydown order ---
    known = {d.name for d in config.debts}
    unknown = [n for n in config.paydown_order if n not in known]
    if unknown:
        result.errors.append(f"Paydown order names unknown debts: {unknown}")
    repeated = sorted(n for n, c in Counter(config.paydown_order).items() if c > 1)
    if repeated:
        result.errors.append(f"Paydown order repeats debts: {repeated}")

    for debt in config.debts:
        if debt.balance > 0 and debt.name not in config.paydown_order and debt.minimum_installment is None:
            result.warnings.append(
                f"Debt '{debt.name}' has a balance but no installment and is not in the paydown order — it will never be paid."
            )
        if debt.minimum_installment == 0:
            result.warnings.append(f"Debt '{debt.name}' has a zero minimum installment.")

    # --- Fixed expenses vs income ---
    for day in QUINCENA_DAYS:
        income = split_amount(config.periodic_income, day)
        fixed = sum(e.amount_on(day) for e in config.fixed_expenses)
        if fixed > income:
            result.warnings.append(
                f"Fixed expenses on day {day} ({fixed:,}) exceed that quincena's income ({income:,}) — "
                f"periods will end with a shortfall."
            )

    # --- Projection & goal windows ---
    if projection is not None:
        validate_projection(projection, result)
        if projection.start_day in QUINCENA_DAYS and 0 <= projection.start_month <= 11:
            for goal in config.one_time_goals:
                if goal.outstanding > 0 and goal.active_until is not None and goal.active_until < projection.start:
                    result.warnings.append(
                        f"Goal '{goal.name}' window closes before the projection starts — it will never be paid."
                    )

    return result
