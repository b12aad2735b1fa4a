import pytest
from pydantic import ValidationError

from core.config import Debt, FinancialConfiguration, FixedExpense, OneTimeGoal, ProjectionConfig
from core.defaults import default_plan
from core.exceptions import ConfigurationError
from core.utils import PeriodMarker
from data_prep.validators import parse_configuration, validate_configuration, validate_projection


def test_default_plan_passes_all_checks():
    config, projection = default_plan()
    result = validate_configuration(config, projection)
    assert result.is_valid
    assert result.warnings == []
    assert "All checks passed" in result.summary()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"periodic_income": 0},
        {"periodic_income": -5},
        {"periodic_income": 1_000_000, "safety_buffer": -1},
        {"periodic_income": 1_000_000, "advisory_monthly_rate": float("nan")},
        {"periodic_income": 1_000_000, "unexpected": 1},
    ],
)
def test_model_rejects_bad_plan_fields(kwargs):
    with pytest.raises(ValidationError):
        FinancialConfiguration(**kwargs)


def test_debt_installment_requires_trigger_day():
    with pytest.raises(ValidationError):
        Debt(name="Bank", balance=100, minimum_installment=50)
    with pytest.raises(ValidationError):
        Debt(name="Bank", balance=100, minimum_installment=50, trigger_day=15)


def test_negative_balance_rejected():
    with pytest.raises(ValidationError):
        Debt(name="Bank", balance=-1)


@pytest.mark.parametrize("value", [True, False, "1000", 1000.0, 1000.5])
def test_money_must_be_a_plain_integer(value):
    with pytest.raises(ValidationError):
        FinancialConfiguration(periodic_income=value)
    with pytest.raises(ValidationError):
        Debt(name="Bank", balance=value)
    with pytest.raises(ValidationError):
        FixedExpense(name="Rent", amount=value)
    with pytest.raises(ValidationError):
        OneTimeGoal(name="Fee", amount=1, already_saved=value)


def test_parse_configuration_refuses_coerced_money():
    with pytest.raises(ConfigurationError) as excinfo:
        parse_configuration({"periodic_income": "1000", "safety_buffer": True})
    assert {message.split(":")[0] for message in excinfo.value.errors} == {"periodic_income", "safety_buffer"}


def test_fixed_expense_schedule_must_be_a_quincena():
    with pytest.raises(ValidationError):
        FixedExpense(name="Gym", amount=50_000, schedule=10)


def test_goal_window_must_use_quincenas_and_be_ordered():
    with pytest.raises(ValidationError):
        OneTimeGoal(name="Fee", amount=1, active_from=PeriodMarker(2026, 0, 15))
    with pytest.raises(ValidationError):
        OneTimeGoal(
            name="Fee",
            amount=1,
            active_from=PeriodMarker(2026, 2, 5),
            active_until=PeriodMarker(2026, 1, 5),
        )


def test_parse_configuration_wraps_pydantic_errors():
    with pytest.raises(ConfigurationError) as excinfo:
        parse_configuration({"periodic_income": 1_000_000, "debts": [{"name": "Bank", "balance": -3}]})
    assert any(message.startswith("debts.0.balance") for message in excinfo.value.errors)


def test_parse_configuration_accepts_plain_data():
    config = parse_configuration(
        {
            "periodic_income": 2_000_000,
            "fixed_expenses": [{"name": "Rent", "amount": 800_000, "schedule": 20}],
            "one_time_goals": [{"name": "Fee", "amount": 100, "active_until": [2026, 0, 20]}],
        }
    )
    assert config.fixed_expenses[0].amount_on(20) == 800_000
    assert config.fixed_expenses[0].amount_on(5) == 0
    assert config.one_time_goals[0].active_until == PeriodMarker(2026, 0, 20)


def test_unknown_and_repeated_paydown_names_are_errors(make_config):
    config = make_config(
        debts=(Debt(name="Card", balance=100),),
        paydown_order=("Card", "Card", "Ghost"),
    )
    result = validate_configuration(config)
    assert not result.is_valid
    assert len(result.errors) == 2
    with pytest.raises(ConfigurationError):
        result.raise_for_errors()


def test_duplicate_debt_names_are_errors(make_config):
    config = make_config(debts=(Debt(name="Card", balance=1), Debt(name="Card", balance=2)))
    result = validate_configuration(config)
    assert any("Duplicate debt names" in e for e in result.errors)


def test_unpaid_debt_and_shortfall_warnings(make_config):
    config = make_config(
        fixed_expenses=(FixedExpense(name="Rent", amount=600_000, schedule=20),),
        debts=(Debt(name="Orphan", balance=50_000),),
    )
    result = validate_configuration(config)
    assert result.is_valid
    assert any("Orphan" in w for w in result.warnings)
    assert any("day 20" in w for w in result.warnings)


def test_goal_window_before_projection_warns(make_config):
    config = make_config(
        one_time_goals=(OneTimeGoal(name="Old", amount=10, active_until=PeriodMarker(2025, 11, 20)),),
    )
    result = validate_configuration(config, ProjectionConfig())
    assert any("Old" in w for w in result.warnings)


def test_validate_projection_bounds():
    assert validate_projection(ProjectionConfig()).is_valid
    bad = validate_projection(ProjectionConfig(start_day=6, start_month=12, n_periods=-1))
    assert len(bad.errors) == 3
    assert validate_projection(ProjectionConfig(n_periods=0)).warnings


@pytest.mark.parametrize(
    "projection, fragment",
    [
        (ProjectionConfig(start_year=0), "start year"),
        (ProjectionConfig(start_year=-2026), "start year"),
        (ProjectionConfig(start_year=10_000, n_periods=0), "start year"),
        (ProjectionConfig(start_day=20, start_month=11, start_year=9999, n_periods=2), "runs past year 9999"),
        (ProjectionConfig(start_day=5, start_month=0, start_year=9998, n_periods=49), "ends in 10000"),
    ],
)
def test_validate_projection_rejects_years_outside_calendar(projection, fragment):
    result = validate_projection(projection)
    assert not result.is_valid
    assert any(fragment in e for e in result.errors)


def test_validate_projection_accepts_run_ending_in_last_year():
    assert validate_projection(ProjectionConfig(start_day=5, start_month=0, start_year=9998, n_periods=48)).is_valid
