from __future__ import annotations

import math

import pytest

from retireplan.domain.portfolios import PortfolioKey
from retireplan.domain.validation import (
    NOT_AN_OBJECT,
    RequestValidationError,
    ValidationRules,
    parse_accumulation_request,
    parse_withdrawal_request,
    validate_accumulation_request,
    validate_withdrawal_request,
)


def accumulation_body(**overrides) -> dict:
    body = {"currentAge": 30, "desiredAge": 60, "initialAmount": 5000, "monthlyContribution": 1000}
    body.update(overrides)
    return body


def withdrawal_body(**overrides) -> dict:
    body = {
        "accumulatedValues": [1_000_000, 1_500_000, 2_000_000],
        "rates": [0.06, 0.085, 0.11],
        "retirementAge": 65,
    }
    body.update(overrides)
    return body


def test_valid_accumulation_request():
    result = validate_accumulation_request(accumulation_body())
    assert result.is_valid
    assert result.errors == []


@pytest.mark.parametrize("desired_age", [60, 18, 100, "x", None])
def test_current_age_below_range_always_reported(desired_age):
    result = validate_accumulation_request(accumulation_body(currentAge=17, desiredAge=desired_age))

    assert not result.is_valid
    assert any("between 18 and 80" in message for message in result.errors)


@pytest.mark.parametrize("current_age", [30.5, "30", True, None, 81])
def test_current_age_must_be_integer_in_range(current_age):
    result = validate_accumulation_request(accumulation_body(currentAge=current_age))
    assert any("Current age" in message for message in result.errors)


def test_current_age_integral_float_accepted():
    assert validate_accumulation_request(accumulation_body(currentAge=30.0)).is_valid


@pytest.mark.parametrize("age", [18, 45, 80])
def test_desired_age_equal_to_current_age_rejected(age):
    result = validate_accumulation_request(accumulation_body(currentAge=age, desiredAge=age))
    assert any("must be greater" in message for message in result.errors)


def test_desired_age_above_100_rejected():
    result = validate_accumulation_request(accumulation_body(desiredAge=101))
    assert result.errors == ["Desired age must be greater than current age and at most 100"]


def test_desired_age_one_year_ahead_allowed_by_default():
    assert validate_accumulation_request(accumulation_body(currentAge=30, desiredAge=31)).is_valid


def test_desired_age_floor_when_configured():
    rules = ValidationRules(desired_age_floor=50)

    result = validate_accumulation_request(accumulation_body(currentAge=30, desiredAge=45), rules)
    assert result.errors == ["Desired age must be at least 50"]
    assert validate_accumulation_request(accumulation_body(currentAge=30, desiredAge=50), rules).is_valid


@pytest.mark.parametrize("amount", [-1, "1000", None, math.inf, math.nan, False])
def test_monthly_contribution_must_be_non_negative_number(amount):
    result = validate_accumulation_request(accumulation_body(monthlyContribution=amount))
    assert result.errors == ["Monthly contribution must be a non-negative number"]


def test_monthly_contribution_zero_allowed():
    assert validate_accumulation_request(accumulation_body(monthlyContribution=0)).is_valid


def test_initial_amount_optional():
    body = accumulation_body()
    del body["initialAmount"]
    assert validate_accumulation_request(body).is_valid
    assert validate_accumulation_request(accumulation_body(initialAmount=None)).is_valid


@pytest.mark.parametrize("amount", [-0.01, "5000", math.nan])
def test_initial_amount_must_be_non_negative_number(amount):
    result = validate_accumulation_request(accumulation_body(initialAmount=amount))
    assert result.errors == ["Initial amount must be a non-negative number"]


def test_accumulation_errors_are_accumulated():
    body = {"currentAge": 10, "desiredAge": 5, "monthlyContribution": -5, "initialAmount": -1}
    result = validate_accumulation_request(body)

    assert len(result.errors) == 4


@pytest.mark.parametrize("body", [None, [], "text", 42])
def test_non_object_body(body):
    assert validate_accumulation_request(body).errors == [NOT_AN_OBJECT]
    assert validate_withdrawal_request(body).errors == [NOT_AN_OBJECT]


def test_valid_withdrawal_request():
    assert validate_withdrawal_request(withdrawal_body()).is_valid


@pytest.mark.parametrize("values", [[1, 2], [1, 2, 3, 4], "123", None])
def test_accumulated_values_must_have_three_elements(values):
    result = validate_withdrawal_request(withdrawal_body(accumulatedValues=values))
    assert result.errors == ["accumulatedValues must be an array with 3 elements"]


def test_accumulated_value_elements_checked_individually():
    result = validate_withdrawal_request(withdrawal_body(accumulatedValues=[100, -1, "x"]))
    assert result.errors == [
        "accumulatedValues 2 (moderate) must be a non-negative number",
        "accumulatedValues 3 (aggressive) must be a non-negative number",
    ]


def test_rates_bounded_between_zero_and_one():
    result = validate_withdrawal_request(withdrawal_body(rates=[0, 1, 1.5]))
    assert result.errors == ["rates 3 (aggressive) must be between 0 and 1"]


@pytest.mark.parametrize("age", [49, 101, 65.5, "65", None])
def test_retirement_age_range(age):
    result = validate_withdrawal_request(withdrawal_body(retirementAge=age))
    assert result.errors == ["Retirement age must be an integer between 50 and 100"]


def test_withdrawal_errors_are_accumulated():
    result = validate_withdrawal_request({"accumulatedValues": [], "rates": None, "retirementAge": 10})
    assert len(result.errors) == 3


def test_parse_accumulation_request_builds_typed_request():
    body = accumulation_body(currentAge=30.0)
    del body["initialAmount"]
    request = parse_accumulation_request(body)

    assert request.current_age == 30
    assert request.initial_amount == 0.0
    assert request.years == 30


def test_parse_accumulation_request_raises_with_every_error():
    with pytest.raises(RequestValidationError) as exc_info:
        parse_accumulation_request({"currentAge": 17, "desiredAge": 17, "monthlyContribution": -1})

    assert len(exc_info.value.errors) == 3


def test_parse_withdrawal_request_keys_by_portfolio():
    request = parse_withdrawal_request(withdrawal_body())

    assert request.accumulated_values == {
        PortfolioKey.CONSERVATIVE: 1_000_000,
        PortfolioKey.MODERATE: 1_500_000,
        PortfolioKey.AGGRESSIVE: 2_000_000,
    }
    assert request.rates[PortfolioKey.MODERATE] == 0.085
    assert request.retirement_age == 65


def test_integers_too_large_for_float_are_reported_not_raised():
    result = validate_accumulation_request(accumulation_body(currentAge=10**400, monthlyContribution=10**400))
    assert result.errors == [
        "Current age must be an integer between 18 and 80",
        "Monthly contribution must be a non-negative number",
    ]

    result = validate_withdrawal_request(withdrawal_body(accumulatedValues=[10**400, 1, 1]))
    assert result.errors == ["accumulatedValues 1 (conservative) must be a non-negative number"]


def test_amounts_above_cap_rejected():
    result = validate_accumulation_request(accumulation_body(monthlyContribution=1e308, initialAmount=1e13))
    assert result.errors == [
        "Monthly contribution must not exceed 1,000,000,000,000",
        "Initial amount must not exceed 1,000,000,000,000",
    ]

    result = validate_withdrawal_request(withdrawal_body(accumulatedValues=[1, 1e13, 1]))
    assert result.errors == ["accumulatedValues 2 (moderate) must not exceed 1,000,000,000,000"]


def test_amounts_at_cap_accepted():
    assert validate_accumulation_request(
        accumulation_body(monthlyContribution=1e12, initialAmount=1_000_000_000_000)
    ).is_valid
    assert validate_withdrawal_request(withdrawal_body(accumulatedValues=[1e12, 1e12, 1e12])).is_valid
