"""HTTP routes for the Flask API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, jsonify, request

from retireplan.core.health import get_health_status
from retireplan.core.projection import ProjectionEngine, ProjectionResult, WithdrawalProjection
from retireplan.domain.validation import (
    RequestValidationError,
    ValidationRules,
    parse_accumulation_request,
    parse_withdrawal_request,
)
from retireplan.schemas.accumulation import AccumulationResponse, DatasetOut, GraphDataOut, ScenarioOut
from retireplan.schemas.health import HealthResponse
from retireplan.schemas.portfolios import AllocationOut, PortfolioOut, PortfoliosResponse
from retireplan.schemas.withdrawal import WithdrawalResponse, WithdrawalScenarioOut

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _engine() -> ProjectionEngine:
    return current_app.extensions["retireplan.engine"]


def _rules() -> ValidationRules:
    return current_app.extensions["retireplan.rules"]


def _json_body() -> Any:
    # content type is ignored on purpose: any body is parsed as JSON.
    # raises BadRequest on malformed JSON; handled at app level
    return request.get_json(force=True, silent=False)


@api_bp.errorhandler(RequestValidationError)
def _handle_validation_error(exc: RequestValidationError):
    """Convert request validation failures into JSON responses."""
    logger.info("Validation failed for %s with %d error(s)", request.path, len(exc.errors))
    return jsonify({"error": "Validation failed", "details": exc.errors}), HTTPStatus.BAD_REQUEST


def accumulation_payload(result: ProjectionResult) -> AccumulationResponse:
    return AccumulationResponse(
        scenarios=[
            ScenarioOut(name=scenario.name, fv=scenario.future_value, color=scenario.color)
            for scenario in result.scenarios
        ],
        graph_data=GraphDataOut(
            labels=result.yearly_series.labels,
            datasets=[
                DatasetOut(
                    label=scenario.name,
                    data=result.yearly_series.per_portfolio[scenario.key],
                    color=scenario.color,
                )
                for scenario in result.scenarios
            ],
        ),
        total_contributions_data=result.total_contributed,
    )


def withdrawal_payload(projection: WithdrawalProjection) -> WithdrawalResponse:
    return WithdrawalResponse(
        scenarios=[
            WithdrawalScenarioOut(
                withdrawal=scenario.withdrawal_amount,
                **{key.value: balances for key, balances in scenario.balances.items()},
            )
            for scenario in projection.scenarios
        ],
        retirement_age=projection.retirement_age,
        max_age=projection.max_age,
    )


@api_bp.get("/health")
def health() -> Any:
    """Liveness probe."""
    response = HealthResponse(**get_health_status())
    return jsonify(response.model_dump())


@api_bp.get("/portfolios")
def portfolios() -> Any:
    """Portfolio catalogue: rates, chart colors and asset mix."""
    engine = _engine()
    config = engine.config
    compositions = engine.portfolio_compositions()
    response = PortfoliosResponse(
        portfolios=[
            PortfolioOut(
                key=portfolio.key.value,
                name=portfolio.name,
                annual_rate=portfolio.annual_rate,
                color=portfolio.color,
                composition=[AllocationOut(**allocation.model_dump()) for allocation in compositions[portfolio.key]],
            )
            for portfolio in config.portfolios
        ],
        withdrawal_amounts=list(config.withdrawal_amounts),
        max_age=config.max_age,
    )
    return jsonify(response.model_dump(by_alias=True))


@api_bp.post("/calculate")
def calculate() -> Any:
    """Project savings for every portfolio up to the desired age."""
    payload = parse_accumulation_request(_json_body(), _rules())
    result = _engine().project_accumulation(payload)
    return jsonify(accumulation_payload(result).model_dump(by_alias=True))


@api_bp.post("/withdrawal-scenarios")
def withdrawal_scenarios() -> Any:
    """Simulate each withdrawal tier against every portfolio until the max age."""
    payload = parse_withdrawal_request(_json_body(), _rules())
    projection = _engine().project_withdrawal_scenarios(payload)
    return jsonify(withdrawal_payload(projection).model_dump(by_alias=True))
