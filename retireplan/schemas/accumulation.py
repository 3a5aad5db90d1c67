"""Data contracts for the accumulation projection."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class AccumulationRequest(CamelModel):
    """Inputs for a savings projection across every portfolio."""

    current_age: int = Field(..., ge=0, description="Age today, in whole years.")
    desired_age: int = Field(..., description="Age at which contributions stop.")
    initial_amount: float = Field(0.0, ge=0, description="Lump sum invested today.")
    monthly_contribution: float = Field(
        ...,
        ge=0,
        description="Contribution made at the end of every month.",
    )

    @model_validator(mode="after")
    def ensure_horizon(self) -> "AccumulationRequest":
        if self.desired_age <= self.current_age:
            raise ValueError("desired_age must be greater than current_age")
        return self

    @property
    def years(self) -> int:
        return self.desired_age - self.current_age


class ScenarioOut(CamelModel):
    name: str
    fv: float
    color: str


class DatasetOut(CamelModel):
    label: str
    data: List[float]
    color: str


class GraphDataOut(CamelModel):
    labels: List[str]
    datasets: List[DatasetOut]


class AccumulationResponse(CamelModel):
    """Payload returned by POST /calculate."""

    scenarios: List[ScenarioOut]
    graph_data: GraphDataOut
    total_contributions_data: List[float]
