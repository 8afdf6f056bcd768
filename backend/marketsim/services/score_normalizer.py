"""Feasibility/return derivation from the percentage fields of an analysis block."""
from typing import Mapping, Optional

from marketsim.models.report import DerivedScores
from marketsim.services.text_segments import round_half_up, to_number

# Score field labels as they appear in the feedback document
FEASIBILITY_SCORE = "Feasibility Score"
RETURN_SCORE = "Return Score"
RISK_SCORE = "Risk Score"
MARKET_READINESS = "Market readiness"
RESOURCE_REQUIREMENTS = "Resource requirements"

SCORE_LABELS = (
    FEASIBILITY_SCORE,
    RETURN_SCORE,
    RISK_SCORE,
    MARKET_READINESS,
    RESOURCE_REQUIREMENTS,
)

# Product-tuned defaults and blend weights
DEFAULT_FEASIBILITY = 75
DEFAULT_RETURN = 65
FEASIBILITY_BASE_WEIGHT = 0.6
MARKET_READINESS_WEIGHT = 0.4
RETURN_BASE_WEIGHT = 0.7
RISK_ADJUSTMENT_WEIGHT = 0.3
BLENDED_RETURN_FLOOR = 35
BLENDED_RETURN_CEILING = 95

# Composite ranking weights
FEASIBILITY_RANK_WEIGHT = 0.5
RETURN_RANK_WEIGHT = 0.5

SCORE_MIN = 0
SCORE_MAX = 100


def _clamp(value: float, low: int = SCORE_MIN, high: int = SCORE_MAX) -> int:
    return max(low, min(high, round_half_up(value)))


def _field(score_fields: Mapping[str, object], label: str) -> Optional[float]:
    """Look a field up by label, ignoring case; junk and NaN read as absent."""
    if label in score_fields:
        return to_number(score_fields[label])
    lowered = label.lower()
    for key, value in score_fields.items():
        if isinstance(key, str) and key.lower() == lowered:
            return to_number(value)
    return None


def derive_feasibility(score_fields: Mapping[str, object]) -> int:
    direct = _field(score_fields, FEASIBILITY_SCORE)
    if direct is not None:
        return _clamp(direct)

    risk = _field(score_fields, RISK_SCORE)
    feasibility = float(SCORE_MAX - risk) if risk is not None else float(DEFAULT_FEASIBILITY)

    market_readiness = _field(score_fields, MARKET_READINESS)
    if market_readiness is not None:
        feasibility = feasibility * FEASIBILITY_BASE_WEIGHT + market_readiness * MARKET_READINESS_WEIGHT
    return _clamp(feasibility)


def derive_return(score_fields: Mapping[str, object]) -> int:
    direct = _field(score_fields, RETURN_SCORE)
    if direct is not None:
        return _clamp(direct)

    resources = _field(score_fields, RESOURCE_REQUIREMENTS)
    if resources is None:
        return DEFAULT_RETURN

    return_score = float(SCORE_MAX - resources)
    risk = _field(score_fields, RISK_SCORE)
    if risk is None:
        return _clamp(return_score)

    blended = return_score * RETURN_BASE_WEIGHT + (SCORE_MAX - risk) * RISK_ADJUSTMENT_WEIGHT
    return _clamp(blended, BLENDED_RETURN_FLOOR, BLENDED_RETURN_CEILING)


def derive_scores(score_fields: Optional[Mapping[str, object]]) -> DerivedScores:
    """
    Resolve feasibility and return percentages.

    Feasibility: direct score, else ``100 - risk``, else 75; blended 60/40 with
    market readiness whenever the direct score was not used.
    Return: direct score, else ``100 - resource requirements`` (blended 70/30
    with inverted risk and held to 35..95 when risk is known), else 65.
    """
    fields = score_fields or {}
    return DerivedScores(feasibility=derive_feasibility(fields), return_score=derive_return(fields))


def composite_score(feasibility: float, return_score: float) -> float:
    return feasibility * FEASIBILITY_RANK_WEIGHT + return_score * RETURN_RANK_WEIGHT
