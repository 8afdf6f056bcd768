"""Solution/strategy extraction from the generated scenarios document."""
import re
from typing import List

from marketsim.models.report import NO_DESCRIPTION, SolutionOutline
from marketsim.services.text_segments import find_bullet_section, split_list_items, strip_markup

# Insight fallback quotes use at most this many bullets from each list
MAX_LIST_ITEMS = 2

# Keyword is case-sensitive; the numeral is required
_SOLUTION_HEADING = re.compile(
    r"^[ \t#*>\-]*(?:Solution|Strategy)[ \t]+(\d+)[ \t]*\**[ \t]*:[ \t]*(.*)$",
    re.MULTILINE,
)


def _clean_title(raw: str) -> str:
    return strip_markup(raw).strip(" -:")


def extract_solution_titles_and_descriptions(scenarios_text: str) -> List[SolutionOutline]:
    """
    Split the scenarios document on ``Solution N:`` / ``Strategy N:`` headings.

    Returns:
        One outline per heading, in document order. Missing descriptions fall
        back to ``"No description available"``.
    """
    if not scenarios_text:
        return []

    headings = list(_SOLUTION_HEADING.finditer(scenarios_text))
    outlines = []
    for position, heading in enumerate(headings):
        end = headings[position + 1].start() if position + 1 < len(headings) else len(scenarios_text)
        body = scenarios_text[heading.end():end]
        number = int(heading.group(1))
        title = _clean_title(heading.group(2)) or f"Solution {number}"

        description = find_bullet_section(body, "Description")
        description = strip_markup(" ".join(description.split())) if description else NO_DESCRIPTION

        outlines.append(SolutionOutline(
            index=number,
            title=title,
            description=description or NO_DESCRIPTION,
            advantages=tuple(split_list_items(find_bullet_section(body, "Advantages") or "", MAX_LIST_ITEMS)),
            challenges=tuple(split_list_items(find_bullet_section(body, "Challenges") or "", MAX_LIST_ITEMS)),
        ))
    return outlines


def extract_solution_titles(scenarios_text: str) -> List[str]:
    """Titles only, for early progress updates."""
    return [outline.title for outline in extract_solution_titles_and_descriptions(scenarios_text)]
