"""
Accumulation projections and retirement drawdown simulations.

Conventions:
  - Contributions are monthly and paid at the END of each month (ordinary annuity).
  - The lump sum compounds annually at the portfolio rate; contributions compound
    at the equivalent monthly rate, so both grow at the same effective annual rate.
  - Values are kept at full precision while computing and rounded to cents only
    when they are recorded in a result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from retireplan.core.valuation import monthly_rate, portfolio_value, round_money
from retireplan.domain.portfolios import DEFAULT_ENGINE_CONFIG, EngineConfig, Portfolio, PortfolioKey
from retireplan.schemas.accumulation import AccumulationRequest
from retireplan.schemas.withdrawal import WithdrawalRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortfolioScenario:
    key: PortfolioKey
    name: str
    future_value: float
    color: str


@dataclass(frozen=True)
class YearlySeries:
    labels: List[str]
    per_portfolio: Dict[PortfolioKey, List[float]]


@dataclass(frozen=True)
class ProjectionResult:
    scenarios: List[PortfolioScenario]
    yearly_series: YearlySeries
    total_contributed: List[float]


@dataclass(frozen=True)
class WithdrawalScenario:
    withdrawal_amount: float
    balances: Dict[PortfolioKey, List[float]] = field(default_factory=dict)


@dataclass(frozen=True)
class WithdrawalProjection:
    scenarios: List[WithdrawalScenario]
    retirement_age: int
    max_age: int


def age_label(age: int) -> str:
    return f"{age} years"


def yearly_growth(
    initial_amount: float,
    monthly_contribution: float,
    annual_rate: float,
    years: int,
) -> List[float]:
    """Balance at the end of each year 0..years (inclusive); year 0 is the untouched lump sum."""
    series = [initial_amount]
    for year in range(1, years + 1):
        value = portfolio_value(initial_amount, monthly_contribution, annual_rate, year)
        series.append(round_money(value))
    return series


def total_contributed(initial_amount: float, monthly_contribution: float, years: int) -> List[float]:
    """Straight-line sum of money put in, no growth. Used as a chart baseline."""
    return [initial_amount + monthly_contribution * 12 * year for year in range(years + 1)]


def simulate_withdrawal(
    initial_balance: float,
    withdrawal_amount: float,
    annual_rate: float,
    max_years: int,
) -> List[float]:
    """
    Year-end balances while withdrawing `withdrawal_amount` every month.

    Each month the balance grows at the monthly-equivalent rate, then the
    withdrawal is taken. The balance is floored at zero; once the portfolio is
    exhausted it stays exhausted.
    """
    rate = monthly_rate(annual_rate)
    balances = [initial_balance]
    balance = initial_balance

    for _ in range(1, max_years + 1):
        if balance <= 0:
            balances.append(0.0)
            continue
        for _month in range(12):
            balance = max(0.0, balance * (1 + rate) - withdrawal_amount)
        balances.append(round_money(balance))

    return balances


class ProjectionEngine:
    """Stateless calculator bound to one immutable `EngineConfig`."""

    def __init__(self, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> None:
        self.config = config

    @property
    def portfolios(self) -> tuple[Portfolio, ...]:
        return self.config.portfolios

    def project_accumulation(self, request: AccumulationRequest) -> ProjectionResult:
        years = request.years
        logger.debug(
            "Projecting %s years (initial=%s, monthly=%s)",
            years,
            request.initial_amount,
            request.monthly_contribution,
        )

        scenarios = [
            PortfolioScenario(
                key=portfolio.key,
                name=portfolio.name,
                future_value=round_money(
                    portfolio_value(
                        request.initial_amount,
                        request.monthly_contribution,
                        portfolio.annual_rate,
                        years,
                    )
                ),
                color=portfolio.color,
            )
            for portfolio in self.portfolios
        ]

        series = YearlySeries(
            labels=[age_label(request.current_age + year) for year in range(years + 1)],
            per_portfolio={
                portfolio.key: yearly_growth(
                    request.initial_amount,
                    request.monthly_contribution,
                    portfolio.annual_rate,
                    years,
                )
                for portfolio in self.portfolios
            },
        )

        return ProjectionResult(
            scenarios=scenarios,
            yearly_series=series,
            total_contributed=total_contributed(request.initial_amount, request.monthly_contribution, years),
        )

    def project_withdrawal_scenarios(self, request: WithdrawalRequest) -> WithdrawalProjection:
        max_years = self.config.max_age - request.retirement_age
        logger.debug("Simulating withdrawals over %s years from age %s", max_years, request.retirement_age)

        scenarios = []
        for amount in self.config.withdrawal_amounts:
            balances = {
                portfolio.key: simulate_withdrawal(
                    request.accumulated_values[portfolio.key],
                    amount,
                    request.rates[portfolio.key],
                    max_years,
                )
                for portfolio in self.portfolios
            }
            scenarios.append(WithdrawalScenario(withdrawal_amount=amount, balances=balances))

        return WithdrawalProjection(
            scenarios=scenarios,
            retirement_age=request.retirement_age,
            max_age=self.config.max_age,
        )

    def portfolio_compositions(self) -> Dict[PortfolioKey, tuple]:
        return {portfolio.key: portfolio.composition for portfolio in self.portfolios}
