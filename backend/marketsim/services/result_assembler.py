"""Join the parsed documents into ranked, labelled solutions."""
import logging
from typing import Dict, List, Sequence

from marketsim.models.report import NO_DESCRIPTION, AnalysisBlock, Persona, Solution, SolutionOutline
from marketsim.services.feedback_extractor import extract_feedback_blocks
from marketsim.services.matchers import resolve_outline
from marketsim.services.persona_extractor import extract_personas
from marketsim.services.quote_reconciler import quotes_for_solution
from marketsim.services.scenario_extractor import extract_solution_titles_and_descriptions
from marketsim.services.score_normalizer import composite_score, derive_scores

logger = logging.getLogger(__name__)

MAX_SOLUTIONS = 3

RECOMMENDED_LABEL = "Recommended Solution"
LEAST_RISKY_LABEL = "Least Risky Solution"
WILDCARD_LABEL = "Wildcard Solution"
ALTERNATIVE_LABEL = "Alternative Solution"


def solution_label(index: int, total: int) -> str:
    """Report label for the solution at ``index`` of a ranked list of ``total``."""
    if index == 0:
        return RECOMMENDED_LABEL
    if index == 1 or (index > 0 and total == 2):
        return LEAST_RISKY_LABEL
    if index == total - 1 and index > 1:
        return WILDCARD_LABEL
    return ALTERNATIVE_LABEL


def assemble(
    outlines: Sequence[SolutionOutline],
    blocks: Sequence[AnalysisBlock],
    personas: Dict[str, Persona],
    max_solutions: int = MAX_SOLUTIONS,
) -> List[Solution]:
    """
    Build one solution per analysis block, rank and truncate.

    Ranking is a stable descending sort on ``feasibility*0.5 + return*0.5``;
    fewer than ``max_solutions`` results are returned as-is.
    """
    drafts = []
    for block in blocks:
        outline = resolve_outline(block.title, outlines)
        if outline is None:
            logger.debug("Analysis %r has no matching solution outline", block.title)
        scores = derive_scores(block.score_fields)
        drafts.append({
            "title": block.title,
            "description": outline.description if outline is not None else NO_DESCRIPTION,
            "feasibility": scores.feasibility,
            "return_score": scores.return_score,
            "feedback_quotes": tuple(quotes_for_solution(block, personas, outline)),
        })

    # sorted() is stable with reverse=True, so ties keep document order
    ranked = sorted(drafts, key=lambda d: composite_score(d["feasibility"], d["return_score"]), reverse=True)
    ranked = ranked[:max(0, max_solutions)]
    return [
        Solution(label=solution_label(index, len(ranked)), **draft)
        for index, draft in enumerate(ranked)
    ]


def parse_simulation_report(
    scenarios_text: str,
    personas_text: str,
    feedback_text: str,
    max_solutions: int = MAX_SOLUTIONS,
) -> List[Solution]:
    """Run the whole extraction pipeline over the three generated documents."""
    for name, value in (
        ("scenarios_text", scenarios_text),
        ("personas_text", personas_text),
        ("feedback_text", feedback_text),
    ):
        if not isinstance(value, str):
            raise TypeError(f"{name} must be a string, got {type(value).__name__}")

    personas = extract_personas(personas_text)
    outlines = extract_solution_titles_and_descriptions(scenarios_text)
    blocks = extract_feedback_blocks(feedback_text)
    solutions = assemble(outlines, blocks, personas, max_solutions=max_solutions)
    logger.info(
        "Parsed %d personas, %d outlines, %d analysis blocks -> %d solutions",
        len(personas), len(outlines), len(blocks), len(solutions),
    )
    return solutions
