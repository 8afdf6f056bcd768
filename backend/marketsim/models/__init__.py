"""Domain records and API schemas."""
from marketsim.models.report import (
    AnalysisBlock,
    DerivedScores,
    Persona,
    PersonaFeedbackEntry,
    Quote,
    Solution,
    SolutionOutline,
)
from marketsim.models.schemas import (
    ParseRequest,
    SimulationRequest,
    SimulationResponse,
)

__all__ = [
    "AnalysisBlock",
    "DerivedScores",
    "Persona",
    "PersonaFeedbackEntry",
    "Quote",
    "Solution",
    "SolutionOutline",
    "ParseRequest",
    "SimulationRequest",
    "SimulationResponse",
]
