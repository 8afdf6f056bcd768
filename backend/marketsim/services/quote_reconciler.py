"""Turn persona reactions into display quotes, synthesizing them when needed."""
import logging
import re
from typing import Dict, List, Optional, Sequence

from marketsim.models.report import AnalysisBlock, Persona, Quote, SolutionOutline
from marketsim.services.matchers import resolve_persona
from marketsim.services.text_segments import ensure_quoted, find_field

logger = logging.getLogger(__name__)

POSITIVE = "positive"
CONCERN = "concern"

BENEFIT_LABELS = ("Potential benefits", "Benefits")
CONCERN_LABELS = ("Key concerns", "Concerns")

KEY_INSIGHT_NAME = "Key Insight"
CONSIDERATION_NAME = "Consideration"
GENERIC_INSIGHT_NAME = "Market Analysis"
GENERIC_INSIGHT_TEMPLATE = "{title} offers significant market potential but requires careful implementation."

POSITIVE_KEYWORDS = ("like", "great", "benefit", "hope", "potential", "love", "excited", "appreciate")
CONCERN_KEYWORDS = ("concerned", "worried", "risk", "problem", "hesitant", "expensive", "unsure")

_SUBJECT = r"(?:he|she|they|the persona|this persona)"
# Analytical third-person phrasing -> first person, applied in order, first hit wins
PHRASE_SUBSTITUTIONS = (
    (re.compile(rf"^{_SUBJECT}\s+(?:hopes?|is hoping|are hoping)\s+(?:for\s+)?", re.I), "I'm really hoping for "),
    (re.compile(rf"^{_SUBJECT}\s+(?:is|are)\s+(?:concerned|worried)\s+(?:about\s+)?", re.I), "I'm worried about "),
    (re.compile(rf"^{_SUBJECT}\s+(?:fears?|worries?)\s+(?:about\s+)?(?:that\s+)?", re.I), "I'm worried about "),
    (re.compile(rf"^{_SUBJECT}\s+(?:appreciates?|values?)\s+", re.I), "I really value "),
    (re.compile(rf"^{_SUBJECT}\s+(?:likes?|loves?|enjoys?)\s+", re.I), "I love "),
    (re.compile(rf"^{_SUBJECT}\s+(?:wants?|needs?|expects?)\s+", re.I), "I want "),
    (re.compile(rf"^{_SUBJECT}\s+(?:would|could|might|may)\s+", re.I), "I would "),
    (re.compile(rf"^{_SUBJECT}\s+(?:sees?|views?)\s+", re.I), "I see "),
    (re.compile(rf"^{_SUBJECT}\s+(?:is|are)\s+", re.I), "I'm "),
)
_POSSESSIVES = re.compile(r"\b(?:his|her|their)\b", re.I)


def classify_sentiment(quote: str) -> str:
    """Keyword guess: positive unless the text reads as a worry."""
    lowered = quote.lower()
    if any(word in lowered for word in POSITIVE_KEYWORDS):
        return POSITIVE
    if any(word in lowered for word in CONCERN_KEYWORDS):
        return CONCERN
    return POSITIVE


def _lower_first(text: str) -> str:
    if len(text) > 1 and text[1].isupper():
        return text
    return text[:1].lower() + text[1:]


def to_first_person(text: str, sentiment: str) -> str:
    """
    Rewrite an analytical statement as a first-person quote.

    ``"He hopes for faster onboarding"`` becomes
    ``"I'm really hoping for faster onboarding."``; statements without a
    recognised subject get a sentiment-specific lead-in instead.
    """
    statement = text.strip().rstrip(".").strip()
    for pattern, replacement in PHRASE_SUBSTITUTIONS:
        if pattern.search(statement):
            statement = pattern.sub(replacement, statement, count=1)
            statement = _POSSESSIVES.sub("my", statement)
            return statement + "."
    lead_in = "I'm excited about " if sentiment == POSITIVE else "I'm concerned about "
    return lead_in + _POSSESSIVES.sub("my", _lower_first(statement)) + "."


def _persona_quote(persona: Persona, text: str, sentiment: str) -> Quote:
    return Quote(
        name=persona.name,
        quote=ensure_quoted(text),
        is_persona=True,
        sentiment=sentiment,
        age=persona.age,
        role=persona.role,
        description=persona.description or None,
        full_persona_details=persona.full_details,
    )


def reconcile_quotes(block: AnalysisBlock, personas: Dict[str, Persona]) -> List[Quote]:
    """
    Cross-reference a block's persona reactions against the persona map.

    Entries whose persona cannot be resolved are skipped. A captured direct
    quote is used as-is; otherwise benefit and concern fields are templated
    into up to two first-person quotes.
    """
    quotes: List[Quote] = []
    for entry in block.persona_feedback:
        persona = resolve_persona(entry.persona_name_raw, personas)
        if persona is None:
            logger.debug("No persona matches %r in %r", entry.persona_name_raw, block.title)
            continue

        if entry.quote:
            quotes.append(_persona_quote(persona, entry.quote, classify_sentiment(entry.quote)))
            continue

        benefits = find_field(entry.raw_text, BENEFIT_LABELS)
        if benefits:
            quotes.append(_persona_quote(persona, to_first_person(benefits, POSITIVE), POSITIVE))
        concerns = find_field(entry.raw_text, CONCERN_LABELS)
        if concerns:
            quotes.append(_persona_quote(persona, to_first_person(concerns, CONCERN), CONCERN))
    return quotes


def insight_quotes(title: str, outline: Optional[SolutionOutline]) -> List[Quote]:
    """Non-persona quotes built from the solution's own advantages and challenges."""
    quotes = []
    if outline is not None:
        for advantage in outline.advantages:
            quotes.append(Quote(name=KEY_INSIGHT_NAME, quote=ensure_quoted(advantage), sentiment=POSITIVE))
        for challenge in outline.challenges:
            quotes.append(Quote(name=CONSIDERATION_NAME, quote=ensure_quoted(challenge), sentiment=CONCERN))
    if not quotes:
        quotes.append(Quote(
            name=GENERIC_INSIGHT_NAME,
            quote=GENERIC_INSIGHT_TEMPLATE.format(title=title),
            sentiment=POSITIVE,
        ))
    return quotes


def quotes_for_solution(
    block: AnalysisBlock,
    personas: Dict[str, Persona],
    outline: Optional[SolutionOutline],
) -> Sequence[Quote]:
    """Persona quotes, or insight quotes when no persona quote could be built."""
    quotes = reconcile_quotes(block, personas)
    if quotes:
        return quotes
    logger.debug("No persona quotes for %r; using solution insights", block.title)
    return insight_quotes(block.title, outline)
