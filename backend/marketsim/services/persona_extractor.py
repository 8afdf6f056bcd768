"""Persona extraction from the generated personas document."""
import logging
import re
from typing import Dict, List, Optional, Tuple

from marketsim.models.report import Persona
from marketsim.services.text_segments import (
    PERSONA_MARKERS,
    bold_phrases,
    find_field,
    first_nonempty_line,
    split_delimited,
    split_parenthetical,
    strip_markup,
)

logger = logging.getLogger(__name__)

BASIC_INFO_LABELS = ("Basic Information", "Basic Info")
DELIMITED_DESCRIPTION_LABELS = ("Background and Context", "Background", "Context")
HEADING_DESCRIPTION_LABELS = ("Background", "Context", "Background and Context")

# Bold phrases that are field labels, never persona names
FIELD_LABELS = {
    "basic information",
    "basic info",
    "background",
    "context",
    "background and context",
    "key characteristics",
    "goals",
    "goals and objectives",
    "pain points",
    "pain points and challenges",
    "tech savviness",
    "tech savviness level",
    "market segment",
    "adoption likelihood",
    "name",
    "age",
    "occupation",
    "role",
}

SUMMARY_DESCRIPTION_CHARS = 160

_PERSONA_HEADING = re.compile(r"(?im)^[ \t]*(?:#+[ \t]*)?\**[ \t]*Persona[ \t]+\d+[ \t]*\**[ \t]*:")
_PERSONA_PREFIX = re.compile(r"(?i)^\s*Persona\s+\d+\s*:\s*")
_AGE_PREFIX = re.compile(r"(?i)^\s*age\s*:?\s*")
_NAME_PREFIX = re.compile(r"(?i)^\s*name\s*:?\s*")


def parse_basic_information(value: str) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """Split ``"Name, Age, Role"``; the role keeps any further commas."""
    parts = [strip_markup(part) for part in value.split(",")]
    parts = [part for part in parts if part]
    if not parts:
        return None, None, None
    name = _NAME_PREFIX.sub("", parts[0]).strip() or None
    age = None
    role = None
    if len(parts) > 1:
        age = _AGE_PREFIX.sub("", parts[1]).strip() or None
    if len(parts) > 2:
        role = ", ".join(parts[2:]).strip() or None
    return name, age, role


def _basic_details(text: str) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    basic = find_field(text, BASIC_INFO_LABELS)
    if basic:
        name, age, role = parse_basic_information(basic)
    else:
        name, age, role = find_field(text, ("Name",)), None, None
    # Separate "Age:" / "Occupation:" lines fill whatever Basic Information left out
    age = age or find_field(text, ("Age",))
    role = role or find_field(text, ("Occupation", "Role"))
    return name, age, role


def _header_name(header: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    if not header:
        return None, None
    cleaned = _PERSONA_PREFIX.sub("", strip_markup(header))
    name, audience = split_parenthetical(cleaned)
    name = strip_markup(name).rstrip(":").strip()
    return (name or None), audience


def _first_name_like_bold(section: str) -> Optional[str]:
    for phrase in bold_phrases(section):
        candidate = _PERSONA_PREFIX.sub("", phrase).rstrip(":").strip()
        candidate, _ = split_parenthetical(candidate)
        if not candidate or candidate.lower() in FIELD_LABELS or phrase.endswith(":"):
            continue
        return candidate
    return None


def _build_persona(
    name: Optional[str],
    age: Optional[str],
    role: Optional[str],
    description: Optional[str],
    audience: Optional[str],
) -> Optional[Persona]:
    if not name:
        return None
    return Persona(
        key=name.strip().lower(),
        name=name.strip(),
        age=age,
        role=role,
        description=description or "",
        audience=audience,
    )


def _parse_delimited_block(block: str) -> Optional[Persona]:
    header = first_nonempty_line(block)
    header_name, audience = _header_name(header)
    name, age, role = _basic_details(block)
    description = find_field(block, DELIMITED_DESCRIPTION_LABELS)
    return _build_persona(name or header_name, age, role, description, audience)


def _parse_heading_section(section: str) -> Optional[Persona]:
    # The heading itself was consumed by the split; its remainder is the first line
    header_remainder = section.split("\n", 1)[0]
    header_name, audience = _header_name(header_remainder)
    name, age, role = _basic_details(section)
    if not name:
        name = _first_name_like_bold(section) or header_name
    description = find_field(section, HEADING_DESCRIPTION_LABELS)
    return _build_persona(name, age, role, description, audience)


def _heading_sections(text: str) -> List[str]:
    matches = list(_PERSONA_HEADING.finditer(text))
    sections = []
    for position, match in enumerate(matches):
        end = matches[position + 1].start() if position + 1 < len(matches) else len(text)
        sections.append(text[match.end():end])
    return sections


def extract_personas(personas_text: str) -> Dict[str, Persona]:
    """
    Parse the personas document into a mapping keyed by lower-cased name.

    Delimited ``[PERSONA_START]``/``[PERSONA_END]`` blocks are preferred; when
    none exist the text is split on numbered ``Persona N:`` headings instead.
    Duplicate names keep the last occurrence.
    """
    personas: Dict[str, Persona] = {}
    if not personas_text:
        return personas

    blocks = split_delimited(personas_text, PERSONA_MARKERS)
    if blocks:
        parsed = [_parse_delimited_block(block) for block in blocks]
    else:
        logger.debug("No delimited persona blocks; falling back to Persona N: headings")
        parsed = [_parse_heading_section(section) for section in _heading_sections(personas_text)]

    for persona in parsed:
        if persona is not None:
            personas[persona.key] = persona
    return personas


def summarize_personas(personas_text: str) -> List[Dict[str, Optional[str]]]:
    """Lightweight persona cards for progress updates."""
    summaries = []
    for persona in extract_personas(personas_text).values():
        description = persona.description
        if len(description) > SUMMARY_DESCRIPTION_CHARS:
            description = description[: SUMMARY_DESCRIPTION_CHARS - 3].rstrip() + "..."
        summaries.append({
            "name": persona.name,
            "age": persona.age,
            "role": persona.role,
            "description": description,
        })
    return summaries
