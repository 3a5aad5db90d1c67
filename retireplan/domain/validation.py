"""
Request validation for the projection endpoints.

Both validators check every rule and report all violations at once; they
never raise on bad input. Callers that want an exception use
`parse_accumulation_request` / `parse_withdrawal_request`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from retireplan.domain.portfolios import DEFAULT_ENGINE_CONFIG, PortfolioKey
from retireplan.schemas.accumulation import AccumulationRequest
from retireplan.schemas.withdrawal import WithdrawalRequest

NOT_AN_OBJECT = "Request body must be a JSON object"


class RequestValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise RequestValidationError(self.errors)


@dataclass(frozen=True)
class ValidationRules:
    """Bounds enforced on incoming requests."""

    current_age_min: int = 18
    current_age_max: int = 80
    desired_age_max: int = 100
    # one client variant also required desired age >= 50; off unless configured
    desired_age_floor: Optional[int] = None
    retirement_age_min: int = 50
    retirement_age_max: int = 100
    # caps every monetary input so compounding to the max age stays finite
    max_amount: float = 1_000_000_000_000
    portfolio_keys: Sequence[PortfolioKey] = DEFAULT_ENGINE_CONFIG.portfolio_keys


DEFAULT_RULES = ValidationRules()


def is_number(value: Any) -> bool:
    # bool is a subclass of int but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # JSON integers too large for a float
        return False


def is_integer(value: Any) -> bool:
    return is_number(value) and float(value).is_integer()


def validate_accumulation_request(body: Any, rules: ValidationRules = DEFAULT_RULES) -> ValidationResult:
    if not isinstance(body, dict):
        return ValidationResult(errors=[NOT_AN_OBJECT])

    errors: List[str] = []
    current_age = body.get("currentAge")
    desired_age = body.get("desiredAge")
    monthly_contribution = body.get("monthlyContribution")
    initial_amount = body.get("initialAmount")

    current_ok = is_integer(current_age) and rules.current_age_min <= current_age <= rules.current_age_max
    if not current_ok:
        errors.append(
            f"Current age must be an integer between {rules.current_age_min} and {rules.current_age_max}"
        )

    if (
        not is_integer(desired_age)
        or desired_age > rules.desired_age_max
        or (is_number(current_age) and desired_age <= current_age)
    ):
        errors.append(
            f"Desired age must be greater than current age and at most {rules.desired_age_max}"
        )
    elif rules.desired_age_floor is not None and desired_age < rules.desired_age_floor:
        errors.append(f"Desired age must be at least {rules.desired_age_floor}")

    if not is_number(monthly_contribution) or monthly_contribution < 0:
        errors.append("Monthly contribution must be a non-negative number")
    elif monthly_contribution > rules.max_amount:
        errors.append(f"Monthly contribution must not exceed {rules.max_amount:,.0f}")

    if initial_amount is not None and (not is_number(initial_amount) or initial_amount < 0):
        errors.append("Initial amount must be a non-negative number")
    elif initial_amount is not None and initial_amount > rules.max_amount:
        errors.append(f"Initial amount must not exceed {rules.max_amount:,.0f}")

    return ValidationResult(errors=errors)


def _check_portfolio_values(
    values: Any,
    label: str,
    keys: Sequence[PortfolioKey],
    upper: Optional[float],
    cap: Optional[float] = None,
) -> List[str]:
    expected = len(keys)
    if not isinstance(values, list) or len(values) != expected:
        return [f"{label} must be an array with {expected} elements"]

    errors: List[str] = []
    for index, (key, value) in enumerate(zip(keys, values), start=1):
        if not is_number(value) or value < 0 or (upper is not None and value > upper):
            bound = f"between 0 and {upper:g}" if upper is not None else "a non-negative number"
            errors.append(f"{label} {index} ({key.value}) must be {bound}")
        elif cap is not None and value > cap:
            errors.append(f"{label} {index} ({key.value}) must not exceed {cap:,.0f}")
    return errors


def validate_withdrawal_request(body: Any, rules: ValidationRules = DEFAULT_RULES) -> ValidationResult:
    if not isinstance(body, dict):
        return ValidationResult(errors=[NOT_AN_OBJECT])

    errors: List[str] = []
    errors.extend(
        _check_portfolio_values(
            body.get("accumulatedValues"), "accumulatedValues", rules.portfolio_keys, None, rules.max_amount
        )
    )
    errors.extend(_check_portfolio_values(body.get("rates"), "rates", rules.portfolio_keys, 1.0))

    retirement_age = body.get("retirementAge")
    if not (
        is_integer(retirement_age) and rules.retirement_age_min <= retirement_age <= rules.retirement_age_max
    ):
        errors.append(
            f"Retirement age must be an integer between {rules.retirement_age_min} and {rules.retirement_age_max}"
        )

    return ValidationResult(errors=errors)


def parse_accumulation_request(body: Any, rules: ValidationRules = DEFAULT_RULES) -> AccumulationRequest:
    validate_accumulation_request(body, rules).raise_for_errors()
    return AccumulationRequest(
        current_age=int(body["currentAge"]),
        desired_age=int(body["desiredAge"]),
        initial_amount=body.get("initialAmount") or 0.0,
        monthly_contribution=body["monthlyContribution"],
    )


def parse_withdrawal_request(body: Any, rules: ValidationRules = DEFAULT_RULES) -> WithdrawalRequest:
    validate_withdrawal_request(body, rules).raise_for_errors()
    return WithdrawalRequest.from_positional(
        rules.portfolio_keys,
        body["accumulatedValues"],
        body["rates"],
        int(body["retirementAge"]),
    )
