"""Per-solution analysis blocks from the generated feedback document."""
import logging
import re
from typing import Dict, List, Optional, Tuple

from marketsim.models.report import AnalysisBlock, PersonaFeedbackEntry
from marketsim.services.score_normalizer import SCORE_LABELS, derive_scores
from marketsim.services.text_segments import (
    PERSONA_FEEDBACK_MARKERS,
    SOLUTION_ANALYSIS_MARKERS,
    find_field,
    first_nonempty_line,
    parse_percent,
    split_delimited,
    split_parenthetical,
    strip_markup,
    unquote,
)

logger = logging.getLogger(__name__)

# Bold labels inside a persona reaction that are fields, not persona names
FEEDBACK_FIELD_LABELS = {
    "initial reaction",
    "potential benefits",
    "benefits",
    "key concerns",
    "concerns",
    "likely use cases",
    "suggested improvements",
    "adoption timeframe",
    "price expectation",
    "price expectations",
    "overall sentiment",
    "sentiment",
    "first person quote",
    "quote",
    "persona",
    "persona name",
    "name",
    "reaction",
    "likelihood of adoption",
}
_NON_PERSONA_LABEL_WORDS = (
    "score", "analysis", "feedback", "solution", "strategy", "readiness", "requirements",
    "timeframe", "concern", "worries", "benefit", "expectation", "improvement", "use case",
    "reaction", "likelihood", "sentiment", "quote",
)

_ANALYSIS_HEADER = re.compile(
    r"Analysis[ \t]+for[ \t]+(?:Solution|Strategy)[ \t]+\d+[ \t]*\**[ \t]*:[ \t]*(.+)",
    re.IGNORECASE,
)
_FALLBACK_SPLIT = re.compile(r"(?=Analysis[ \t]+for[ \t]+(?:Solution|Strategy))|^[ \t]*-{3,}[ \t]*$", re.MULTILINE)
_PERSONA_FEEDBACK_HEADING = re.compile(r"Persona[ \t]+Feedback[ \t]*\**[ \t]*:?", re.IGNORECASE)
_OVERALL_ANALYSIS_HEADING = re.compile(r"Overall[ \t]+Analysis", re.IGNORECASE)
_BOLD_HEADING = re.compile(r"^[ \t]*([-*•][ \t]*)?(?:#+[ \t]*)?\*\*(.+?)\*\*[ \t]*:?[ \t]*(.*)$")
_DASH_NAME_HEADING = re.compile(r"^[ \t]*[-*•][ \t]*([A-Z][\w.'-]*(?:[ \t]+[A-Z][\w.'-]*){0,3})[ \t]*\(")
_FIRST_PERSON_QUOTE = re.compile(r"\[[ \t]*First[ \t-]*Person[ \t]+Quote[ \t]*\][ \t]*:?[ \t]*(.*)", re.IGNORECASE)
_BOLD_QUOTED = re.compile(r"\*\*[^*\n]+\*\*[ \t]*:?[ \t]*[\"“]([^\"”\n]+)[\"”]")


# =============================================================================
# PERSONA SUB-BLOCKS
# =============================================================================

def _is_persona_label(label: str) -> bool:
    cleaned, _ = split_parenthetical(strip_markup(label).rstrip(":").strip())
    lowered = cleaned.lower().strip(" :")
    if not lowered or lowered[0] in "\"“[":
        return False
    if lowered in FEEDBACK_FIELD_LABELS:
        return False
    return not any(word in lowered for word in _NON_PERSONA_LABEL_WORDS)


def _persona_heading(line: str) -> Optional[str]:
    """Return the raw persona label when a line opens a persona sub-block."""
    match = _BOLD_HEADING.match(line)
    if match:
        bulleted, label, rest = match.groups()
        rest = rest.strip()
        # "- **Adoption timeframe:** 6 months" is a field; a quote or an audience note may follow a name
        is_field = bool(bulleted) and bool(rest) and rest[0] not in "\"“("
        if not is_field and _is_persona_label(label):
            return strip_markup(label).rstrip(":").strip()
    match = _DASH_NAME_HEADING.match(line)
    if match and _is_persona_label(match.group(1)):
        return match.group(1).strip()
    return None


def _persona_label(block: str) -> Optional[str]:
    for line in block.splitlines():
        label = _persona_heading(line)
        if label:
            return label
    named = find_field(block, ("Persona", "Persona Name", "Name"))
    if named:
        return named
    first = first_nonempty_line(block)
    if first and not first.startswith("[") and len(first) <= 80:
        candidate = strip_markup(first.split(":", 1)[0])
        if _is_persona_label(candidate):
            return candidate
    return None


def _extract_quote(block: str) -> Optional[str]:
    tagged = _FIRST_PERSON_QUOTE.search(block)
    if tagged:
        value = unquote(strip_markup(tagged.group(1)))
        if value:
            return value
    bold = _BOLD_QUOTED.search(block)
    if bold:
        value = unquote(bold.group(1))
        if value:
            return value
    field = find_field(block, ("First Person Quote", "Quote"))
    if field:
        value = unquote(field)
        if value:
            return value
    return None


def _entry_from_block(block: str) -> Optional[PersonaFeedbackEntry]:
    name = _persona_label(block)
    if not name:
        return None
    return PersonaFeedbackEntry(persona_name_raw=name, raw_text=block, quote=_extract_quote(block))


def persona_feedback_slice(section: str) -> str:
    """Text between a ``Persona Feedback`` heading and ``Overall Analysis``."""
    start = _PERSONA_FEEDBACK_HEADING.search(section)
    body = section[start.end():] if start else section
    end = _OVERALL_ANALYSIS_HEADING.search(body)
    if end:
        body = body[: end.start()]
    return body


def split_persona_segments(section: str) -> List[Tuple[str, str]]:
    """Split a persona feedback slice into ``(label, segment)`` pairs."""
    segments: List[Tuple[str, List[str]]] = []
    for line in persona_feedback_slice(section).splitlines():
        label = _persona_heading(line)
        if label:
            segments.append((label, [line]))
        elif segments:
            segments[-1][1].append(line)
    return [(label, "\n".join(lines).strip()) for label, lines in segments]


def _entries_from_headings(section: str) -> Tuple[PersonaFeedbackEntry, ...]:
    return tuple(
        PersonaFeedbackEntry(persona_name_raw=label, raw_text=segment, quote=_extract_quote(segment))
        for label, segment in split_persona_segments(section)
    )


# =============================================================================
# ANALYSIS BLOCKS
# =============================================================================

def extract_analysis_title(section: str) -> Optional[str]:
    match = _ANALYSIS_HEADER.search(section)
    if not match:
        return None
    return strip_markup(match.group(1)).strip(" -:") or None


def extract_score_fields(section: str) -> Dict[str, int]:
    """Run each percentage probe independently; absent fields are omitted."""
    fields = {}
    for label in SCORE_LABELS:
        value = parse_percent(section, label)
        if value is not None:
            fields[label] = value
    return fields


def _delimited_block(block: str) -> Optional[AnalysisBlock]:
    title = extract_analysis_title(block)
    if not title:
        return None
    nested = split_delimited(block, PERSONA_FEEDBACK_MARKERS)
    if nested:
        entries = tuple(entry for entry in (_entry_from_block(item) for item in nested) if entry is not None)
    else:
        entries = _entries_from_headings(block)
    return AnalysisBlock(title=title, score_fields=extract_score_fields(block), persona_feedback=entries)


def _fallback_sections(feedback_text: str) -> List[str]:
    return [section for section in _FALLBACK_SPLIT.split(feedback_text) if section and section.strip()]


def _fallback_block(section: str) -> Optional[AnalysisBlock]:
    title = extract_analysis_title(section)
    if not title:
        return None
    return AnalysisBlock(
        title=title,
        score_fields=extract_score_fields(section),
        persona_feedback=_entries_from_headings(section),
    )


def extract_feedback_blocks(feedback_text: str) -> List[AnalysisBlock]:
    """
    Parse the feedback document into per-solution analysis blocks.

    ``[SOLUTION_ANALYSIS_START]``/``[SOLUTION_ANALYSIS_END]`` blocks are used
    when present. Otherwise the text is split on ``Analysis for Solution``
    headings and ``---`` rules, and persona reactions are recovered from the
    bold sub-headings under ``Persona Feedback``.
    """
    if not feedback_text:
        return []

    delimited = split_delimited(feedback_text, SOLUTION_ANALYSIS_MARKERS)
    if delimited:
        parsed = [_delimited_block(block) for block in delimited]
    else:
        logger.debug("No SOLUTION_ANALYSIS markers; splitting on headings and rules")
        parsed = [_fallback_block(section) for section in _fallback_sections(feedback_text)]
    return [block for block in parsed if block is not None]


# =============================================================================
# TARGETED LOOKUPS
# =============================================================================

def find_analysis_section(feedback_text: str, title: str) -> Optional[str]:
    """Return the first analysis section whose text mentions ``title``."""
    needle = (title or "").strip().lower()
    if not feedback_text or not needle:
        return None
    sections = split_delimited(feedback_text, SOLUTION_ANALYSIS_MARKERS) or _fallback_sections(feedback_text)
    for section in sections:
        if needle in section.lower():
            return section
    return None


def find_persona_segment(section: str, persona_name: str) -> Optional[str]:
    """Locate one persona's reaction inside an analysis section."""
    needle = (persona_name or "").strip().lower()
    if not section or not needle:
        return None
    segments = split_persona_segments(section)
    for label, segment in segments:
        lowered = label.lower()
        if needle in lowered or (lowered and lowered in needle):
            return segment
    for _, segment in segments:
        if needle in segment.lower():
            return segment
    return None


def extract_score_summaries(feedback_text: str) -> List[Dict[str, object]]:
    """Title plus derived scores per block, for early progress updates."""
    summaries = []
    for block in extract_feedback_blocks(feedback_text):
        scores = derive_scores(block.score_fields)
        summaries.append({
            "title": block.title,
            "feasibility": scores.feasibility,
            "return": scores.return_score,
        })
    return summaries
