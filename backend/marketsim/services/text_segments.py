"""Pure helpers for slicing LLM prose into fields and blocks.

Every function takes plain strings and returns new strings, lists or
``None``; nothing here raises on malformed input.
"""
import math
import re
from typing import Iterable, List, Optional, Tuple

# Delimiter pairs requested from the generator
PERSONA_MARKERS = ("[PERSONA_START]", "[PERSONA_END]")
SOLUTION_ANALYSIS_MARKERS = ("[SOLUTION_ANALYSIS_START]", "[SOLUTION_ANALYSIS_END]")
PERSONA_FEEDBACK_MARKERS = ("[PERSONA_FEEDBACK_START]", "[PERSONA_FEEDBACK_END]")

# Edge markup: emphasis and quote markers at the start, emphasis only at the end
_LEADING_MARKUP = "*>#\t "
_TRAILING_MARKUP = "*\t "
_BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")
_PARENTHETICAL_TAIL = re.compile(r"\s*\(([^()]*)\)\s*$")
# A sibling bullet field such as "- Advantages:", indented no deeper than {depth}
_SIBLING_FIELD = r"\n[ \t]{{0,{depth}}}[-*•][ \t]*\**[A-Z][A-Za-z/&' ]{{0,40}}?\**[ \t]*:"
_SECTION_BREAK = r"\n[ \t]*\n[ \t]*\n"
_LIST_ITEM_PREFIX = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")
_LEADING_CONJUNCTION = re.compile(r"^(?:and|or)\s+", re.IGNORECASE)


def split_delimited(text: str, markers: Tuple[str, str]) -> List[str]:
    """Return the stripped bodies found between a start/end marker pair."""
    if not text:
        return []
    start, end = markers
    pattern = re.compile(re.escape(start) + r"(.*?)" + re.escape(end), re.DOTALL)
    return [body.strip() for body in pattern.findall(text)]


def strip_markup(value: str) -> str:
    """Drop markdown emphasis/heading characters and surrounding whitespace."""
    cleaned = value.strip().lstrip(_LEADING_MARKUP).rstrip(_TRAILING_MARKUP)
    cleaned = cleaned.replace("**", "")
    return re.sub(r"\s+", " ", cleaned).strip()


def split_parenthetical(value: str) -> Tuple[str, Optional[str]]:
    """Split ``"Maria Chen (Current Audience)"`` into name and annotation."""
    match = _PARENTHETICAL_TAIL.search(value)
    if not match:
        return value.strip(), None
    annotation = match.group(1).strip() or None
    return value[: match.start()].strip(), annotation


def first_nonempty_line(text: str) -> Optional[str]:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return None


def _field_line_pattern(label: str) -> re.Pattern:
    # "- **Basic Information:** value", "Basic Information: value", "**Background**: value"
    return re.compile(
        r"^[ \t]*(?:[-*•][ \t]*)?\**[ \t]*" + re.escape(label) + r"[ \t]*\**[ \t]*:[ \t]*\**[ \t]*(.*)$",
        re.IGNORECASE,
    )


def find_field(text: str, labels: Iterable[str]) -> Optional[str]:
    """Return the single-line value of the first label present.

    Labels are tried in order. When the label stands alone on its line the
    next non-empty line is taken as the value.
    """
    if not text:
        return None
    lines = text.splitlines()
    for label in labels:
        pattern = _field_line_pattern(label)
        for position, line in enumerate(lines):
            match = pattern.match(line)
            if not match:
                continue
            value = strip_markup(match.group(1))
            if value:
                return value
            for following in lines[position + 1:]:
                if following.strip():
                    return strip_markup(_LIST_ITEM_PREFIX.sub("", following))
            return None
    return None


def find_bullet_section(text: str, label: str) -> Optional[str]:
    """Return the body of a ``- <label>:`` field up to the next sibling field.

    A following bullet field ends the body when it is indented no deeper
    than the opening field; deeper bullets are the field's own list items.
    """
    if not text:
        return None
    opening = re.compile(
        r"(?:^|\n)([ \t]*)[-*•]?[ \t]*\**[ \t]*" + re.escape(label) + r"[ \t]*\**[ \t]*:[ \t]*\**",
        re.IGNORECASE,
    )
    match = opening.search(text)
    if not match:
        return None
    depth = max(len(match.group(1).expandtabs(4)), 1)
    closing = re.compile(
        r"(.*?)(?=" + _SIBLING_FIELD.format(depth=depth) + "|" + _SECTION_BREAK + r"|\Z)",
        re.DOTALL,
    )
    body = closing.match(text, match.end()).group(1).strip()
    return body or None


def split_list_items(section: str, limit: Optional[int] = None) -> List[str]:
    """Turn a bullet field body into items.

    Nested bullets win; a single line is split on semicolons or commas.
    """
    if not section:
        return []
    lines = [line for line in section.splitlines() if line.strip()]
    bulleted = [line for line in lines if _LIST_ITEM_PREFIX.match(line)]
    if bulleted:
        items = [strip_markup(_LIST_ITEM_PREFIX.sub("", line)) for line in bulleted]
    else:
        joined = " ".join(line.strip() for line in lines)
        separator = ";" if ";" in joined else ","
        items = [strip_markup(part) for part in joined.split(separator)]
    items = [_LEADING_CONJUNCTION.sub("", item).rstrip(".") for item in items if item]
    if limit is not None:
        items = items[:limit]
    return items


def parse_percent(text: str, label: str) -> Optional[int]:
    """Probe ``"<label>: <number>%"`` and return the rounded value."""
    if not text:
        return None
    pattern = re.compile(
        re.escape(label) + r"(?:[ \t]+score)?[ \t]*\**[ \t]*:[ \t]*\**[ \t]*(-?\d+(?:\.\d+)?)[ \t]*%",
        re.IGNORECASE,
    )
    match = pattern.search(text)
    if not match:
        return None
    value = to_number(match.group(1))
    if value is None:
        return None
    return round_half_up(value)


def to_number(value) -> Optional[float]:
    """Coerce to float; ``None``, junk and NaN all mean absent."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def bold_phrases(text: str) -> List[str]:
    return [strip_markup(phrase) for phrase in _BOLD_PATTERN.findall(text or "")]


def ensure_quoted(text: str) -> str:
    """Wrap a quote in double quotation marks unless it already is."""
    cleaned = text.strip()
    if len(cleaned) >= 2 and cleaned[0] in "\"“" and cleaned[-1] in "\"”":
        return cleaned
    return f'"{unquote(cleaned)}"'


def unquote(text: str) -> str:
    return text.strip().strip("\"“”").strip()


def normalize_key(value: str) -> str:
    """Lower-cased, markup-free, whitespace-collapsed comparison key."""
    return strip_markup(value or "").strip(" :.-\"'").lower()
