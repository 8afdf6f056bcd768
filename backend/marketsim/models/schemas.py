"""Pydantic schemas for API models."""
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from marketsim.models.report import Solution


# Request schemas
class SimulationRequest(BaseModel):
    company_info: str = Field(max_length=10000)
    market_challenge: str = Field(max_length=10000)
    api_key: Optional[str] = None


class ParseRequest(BaseModel):
    scenarios: str = ""
    personas: str = ""
    feedback: str = ""
    max_solutions: Optional[int] = Field(default=None, ge=1, le=10)


# Response schemas
class RawDocuments(BaseModel):
    scenarios: str
    personas: str
    feedback: str


class SimulationResponse(BaseModel):
    solutions: List[Solution]
    raw: Optional[RawDocuments] = None


class ErrorDetail(BaseModel):
    message: str
    code: str = "UNKNOWN_ERROR"


class PersonaSummary(BaseModel):
    name: str
    age: Optional[str] = None
    role: Optional[str] = None
    description: Optional[str] = None


class ScoreSummary(BaseModel):
    title: str
    feasibility: int
    return_score: int = Field(alias="return")

    model_config = ConfigDict(populate_by_name=True)


# Stream events: one variant per stage, discriminated on ``type``
class StatusEvent(BaseModel):
    type: Literal["status"] = "status"
    stage: str
    message: str
    progress: int = Field(ge=0, le=100)


class ScenariosEvent(BaseModel):
    type: Literal["scenarios"] = "scenarios"
    titles: List[str]


class PersonasEvent(BaseModel):
    type: Literal["personas"] = "personas"
    personas: List[PersonaSummary]


class ScoresEvent(BaseModel):
    type: Literal["scores"] = "scores"
    scores: List[ScoreSummary]


class CompleteEvent(BaseModel):
    type: Literal["complete"] = "complete"
    result: SimulationResponse


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    error: ErrorDetail


SimulationEvent = Annotated[
    Union[StatusEvent, ScenariosEvent, PersonasEvent, ScoresEvent, CompleteEvent, ErrorEvent],
    Field(discriminator="type"),
]
