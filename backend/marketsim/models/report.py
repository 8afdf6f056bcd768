"""Immutable records produced by the report parsing pipeline."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

NO_DESCRIPTION = "No description available"


class Persona(BaseModel):
    """A market persona recovered from the personas document."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    age: Optional[str] = None
    role: Optional[str] = None
    description: str = ""
    audience: Optional[str] = None

    @computed_field
    @property
    def full_details(self) -> str:
        parts = [self.name]
        if self.age:
            parts.append(self.age)
        if self.role:
            parts.append(self.role)
        return ", ".join(parts)


class SolutionOutline(BaseModel):
    """Title, description and bullet lists of one proposed solution."""

    model_config = ConfigDict(frozen=True)

    index: int
    title: str
    description: str = NO_DESCRIPTION
    advantages: Tuple[str, ...] = ()
    challenges: Tuple[str, ...] = ()


class PersonaFeedbackEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    persona_name_raw: str
    raw_text: str
    quote: Optional[str] = None


class AnalysisBlock(BaseModel):
    """Per-solution analysis: title, percentage fields and persona reactions."""

    model_config = ConfigDict(frozen=True)

    title: str
    score_fields: Dict[str, int] = Field(default_factory=dict)
    persona_feedback: Tuple[PersonaFeedbackEntry, ...] = ()


class DerivedScores(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    feasibility: int
    return_score: int = Field(alias="return")


class Quote(BaseModel):
    """A persona quote or an analytical insight attached to a solution."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    quote: str
    is_persona: bool = Field(default=False, alias="isPersona")
    sentiment: Optional[str] = None
    age: Optional[str] = None
    role: Optional[str] = None
    description: Optional[str] = None
    full_persona_details: Optional[str] = Field(default=None, alias="fullPersonaDetails")


class Solution(BaseModel):
    """A ranked solution ready for the report view."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str = NO_DESCRIPTION
    feasibility: int
    return_score: int = Field(alias="return")
    feedback_quotes: Tuple[Quote, ...] = Field(alias="feedbackQuotes")
    label: Optional[str] = None
