"""Ordered fallback chains for joining independently generated documents.

Each matcher is a small pure function returning a hit or ``None``;
``first_match`` walks a chain and returns the first hit.
"""
from typing import Callable, Dict, Optional, Sequence, TypeVar

from marketsim.models.report import Persona, SolutionOutline
from marketsim.services.text_segments import normalize_key, split_parenthetical

T = TypeVar("T")
C = TypeVar("C")


def first_match(query: str, candidates: C, matchers: Sequence[Callable[[str, C], Optional[T]]]) -> Optional[T]:
    for matcher in matchers:
        hit = matcher(query, candidates)
        if hit is not None:
            return hit
    return None


# =============================================================================
# PERSONA NAME MATCHERS
# =============================================================================

def persona_lookup_key(raw_name: str) -> str:
    """``"**Maria Chen (Early Adopter):**"`` -> ``"maria chen"``."""
    name, _ = split_parenthetical(normalize_key(raw_name))
    return name.strip(" :")


def match_persona_exact(raw_name: str, personas: Dict[str, Persona]) -> Optional[Persona]:
    key = persona_lookup_key(raw_name)
    if not key:
        return None
    return personas.get(key)


def match_persona_key_contains_name(raw_name: str, personas: Dict[str, Persona]) -> Optional[Persona]:
    key = persona_lookup_key(raw_name)
    if not key:
        return None
    for persona_key, persona in personas.items():
        if key in persona_key:
            return persona
    return None


def match_persona_name_contains_key(raw_name: str, personas: Dict[str, Persona]) -> Optional[Persona]:
    key = persona_lookup_key(raw_name)
    if not key:
        return None
    for persona_key, persona in personas.items():
        if persona_key and persona_key in key:
            return persona
    return None


PERSONA_MATCHERS = (
    match_persona_exact,
    match_persona_key_contains_name,
    match_persona_name_contains_key,
)


def resolve_persona(raw_name: str, personas: Dict[str, Persona]) -> Optional[Persona]:
    return first_match(raw_name, personas, PERSONA_MATCHERS)


# =============================================================================
# SOLUTION TITLE MATCHERS
# =============================================================================

def title_key(title: str) -> str:
    return normalize_key(title).strip(" \"'“”")


def match_title_exact(title: str, outlines: Sequence[SolutionOutline]) -> Optional[SolutionOutline]:
    key = title_key(title)
    if not key:
        return None
    for outline in outlines:
        if title_key(outline.title) == key:
            return outline
    return None


def match_outline_contains_title(title: str, outlines: Sequence[SolutionOutline]) -> Optional[SolutionOutline]:
    key = title_key(title)
    if not key:
        return None
    for outline in outlines:
        if key in title_key(outline.title):
            return outline
    return None


def match_title_contains_outline(title: str, outlines: Sequence[SolutionOutline]) -> Optional[SolutionOutline]:
    key = title_key(title)
    if not key:
        return None
    for outline in outlines:
        outline_key = title_key(outline.title)
        if outline_key and outline_key in key:
            return outline
    return None


TITLE_MATCHERS = (
    match_title_exact,
    match_outline_contains_title,
    match_title_contains_outline,
)


def resolve_outline(title: str, outlines: Sequence[SolutionOutline]) -> Optional[SolutionOutline]:
    return first_match(title, outlines, TITLE_MATCHERS)
