"""Data contracts for retirement withdrawal scenarios."""

from __future__ import annotations

from typing import Dict, List, Sequence

from pydantic import ConfigDict, Field, model_validator

from retireplan.domain.portfolios import PortfolioKey
from retireplan.schemas.accumulation import CamelModel


class WithdrawalRequest(CamelModel):
    """
    Accumulated balance and annual rate per portfolio, keyed by portfolio.

    The wire format sends both as arrays in portfolio order; use
    `from_positional` to turn them into keyed mappings so nothing downstream
    depends on array position.
    """

    accumulated_values: Dict[PortfolioKey, float]
    rates: Dict[PortfolioKey, float]
    retirement_age: int = Field(..., ge=0)

    @model_validator(mode="after")
    def ensure_matching_keys(self) -> "WithdrawalRequest":
        if set(self.accumulated_values) != set(self.rates):
            raise ValueError("accumulated_values and rates must cover the same portfolios")
        for key, value in self.accumulated_values.items():
            if value < 0:
                raise ValueError(f"{key.value} accumulated value must be non-negative")
        for key, rate in self.rates.items():
            if not 0 <= rate <= 1:
                raise ValueError(f"{key.value} rate must be between 0 and 1")
        return self

    @classmethod
    def from_positional(
        cls,
        keys: Sequence[PortfolioKey],
        accumulated_values: Sequence[float],
        rates: Sequence[float],
        retirement_age: int,
    ) -> "WithdrawalRequest":
        if not len(keys) == len(accumulated_values) == len(rates):
            raise ValueError("expected one accumulated value and one rate per portfolio")
        return cls(
            accumulated_values=dict(zip(keys, accumulated_values)),
            rates=dict(zip(keys, rates)),
            retirement_age=retirement_age,
        )


class WithdrawalScenarioOut(CamelModel):
    """One withdrawal tier; each configured portfolio key is an extra field holding its yearly balances."""

    model_config = ConfigDict(extra="allow")

    withdrawal: float

    @model_validator(mode="after")
    def ensure_balance_series(self) -> "WithdrawalScenarioOut":
        for key, balances in (self.model_extra or {}).items():
            if not isinstance(balances, list):
                raise ValueError(f"{key} balances must be a list")
        return self


class WithdrawalResponse(CamelModel):
    """Payload returned by POST /withdrawal-scenarios."""

    scenarios: List[WithdrawalScenarioOut]
    retirement_age: int
    max_age: int
