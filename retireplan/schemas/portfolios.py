"""Data contracts for the portfolio catalogue."""

from __future__ import annotations

from typing import List

from retireplan.schemas.accumulation import CamelModel


class AllocationOut(CamelModel):
    category: str
    percentage: int
    color: str


class PortfolioOut(CamelModel):
    key: str
    name: str
    annual_rate: float
    color: str
    composition: List[AllocationOut]


class PortfoliosResponse(CamelModel):
    portfolios: List[PortfolioOut]
    withdrawal_amounts: List[float]
    max_age: int
