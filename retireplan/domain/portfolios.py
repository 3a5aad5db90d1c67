"""Fixed portfolio table and engine constants."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PortfolioKey(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class Allocation(BaseModel):
    """One slice of a portfolio's asset mix (informational only)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    category: str
    percentage: int = Field(gt=0, le=100)
    color: str


class Portfolio(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    key: PortfolioKey
    name: str
    annual_rate: float = Field(gt=0, lt=1)
    color: str
    composition: Tuple[Allocation, ...] = ()

    @model_validator(mode="after")
    def ensure_composition_total(self) -> "Portfolio":
        if self.composition and sum(a.percentage for a in self.composition) != 100:
            raise ValueError(f"{self.key.value} composition must add up to 100%")
        return self


class EngineConfig(BaseModel):
    """
    Everything the projection engine treats as a constant.

    The portfolio order is part of the public contract: charts and the
    positional withdrawal arrays both rely on it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    portfolios: Tuple[Portfolio, ...]
    withdrawal_amounts: Tuple[float, ...]
    max_age: int = Field(gt=0)

    @model_validator(mode="after")
    def ensure_unique_keys(self) -> "EngineConfig":
        keys = [p.key for p in self.portfolios]
        if len(set(keys)) != len(keys):
            raise ValueError("portfolio keys must be unique")
        return self

    @property
    def portfolio_keys(self) -> Tuple[PortfolioKey, ...]:
        return tuple(p.key for p in self.portfolios)


PORTFOLIOS: Tuple[Portfolio, ...] = (
    Portfolio(
        key=PortfolioKey.CONSERVATIVE,
        name="Conservative Portfolio",
        annual_rate=0.06,
        color="#3498db",
        composition=(
            Allocation(category="Fixed Income", percentage=90, color="#3498db"),
            Allocation(category="Domestic Equities", percentage=10, color="#2980b9"),
        ),
    ),
    Portfolio(
        key=PortfolioKey.MODERATE,
        name="Moderate Portfolio",
        annual_rate=0.085,
        color="#f39c12",
        composition=(
            Allocation(category="Fixed Income", percentage=70, color="#f39c12"),
            Allocation(category="Domestic Equities", percentage=20, color="#e67e22"),
            Allocation(category="US Equities", percentage=10, color="#d35400"),
        ),
    ),
    Portfolio(
        key=PortfolioKey.AGGRESSIVE,
        name="Aggressive Portfolio",
        annual_rate=0.11,
        color="#e74c3c",
        composition=(
            Allocation(category="Fixed Income", percentage=30, color="#e74c3c"),
            Allocation(category="Domestic Equities", percentage=30, color="#c0392b"),
            Allocation(category="US Equities", percentage=20, color="#a93226"),
            Allocation(category="Crypto and Alternatives", percentage=20, color="#922b21"),
        ),
    ),
)

WITHDRAWAL_AMOUNTS: Tuple[float, ...] = (2500, 5000, 7500, 10000, 12000, 15000)
MAX_AGE = 110

DEFAULT_ENGINE_CONFIG = EngineConfig(
    portfolios=PORTFOLIOS,
    withdrawal_amounts=WITHDRAWAL_AMOUNTS,
    max_age=MAX_AGE,
)
