"""Runs the three generation steps and parses the result into a report."""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterator, Optional, Union

from marketsim.config import get_settings
from marketsim.models.schemas import (
    CompleteEvent,
    ErrorDetail,
    ErrorEvent,
    PersonasEvent,
    PersonaSummary,
    RawDocuments,
    ScenariosEvent,
    ScoresEvent,
    ScoreSummary,
    SimulationResponse,
    StatusEvent,
)
from marketsim.services.feedback_extractor import extract_score_summaries
from marketsim.services.llm_client import OpenAIChatClient, get_llm_client
from marketsim.services.llm_exceptions import LLMClientError
from marketsim.services.persona_extractor import summarize_personas
from marketsim.services.prompts import (
    FEEDBACK_SYSTEM_PROMPT,
    PERSONAS_SYSTEM_PROMPT,
    SCENARIOS_SYSTEM_PROMPT,
    build_feedback_prompt,
    build_personas_prompt,
    build_scenarios_prompt,
)
from marketsim.services.result_assembler import parse_simulation_report
from marketsim.services.scenario_extractor import extract_solution_titles

logger = logging.getLogger(__name__)

SimulationStreamEvent = Union[StatusEvent, ScenariosEvent, PersonasEvent, ScoresEvent, CompleteEvent, ErrorEvent]

SCENARIOS = "scenarios"
PERSONAS = "personas"


def _require_inputs(company_info: str, market_challenge: str) -> None:
    if not (company_info or "").strip() or not (market_challenge or "").strip():
        raise ValueError("Both company information and market challenge are required")


def _max_solutions(max_solutions: Optional[int]) -> int:
    return max_solutions if max_solutions is not None else get_settings().max_solutions


def _build_response(documents: RawDocuments, max_solutions: Optional[int]) -> SimulationResponse:
    solutions = parse_simulation_report(
        documents.scenarios,
        documents.personas,
        documents.feedback,
        max_solutions=_max_solutions(max_solutions),
    )
    return SimulationResponse(solutions=solutions, raw=documents)


def _submit_first_stage(executor, client, company_info: str, market_challenge: str, api_key: Optional[str]):
    # Scenarios and personas are independent; feedback needs both
    return {
        executor.submit(
            client.generate,
            build_scenarios_prompt(company_info, market_challenge),
            SCENARIOS_SYSTEM_PROMPT,
            api_key,
        ): SCENARIOS,
        executor.submit(
            client.generate,
            build_personas_prompt(company_info, market_challenge),
            PERSONAS_SYSTEM_PROMPT,
            api_key,
        ): PERSONAS,
    }


def generate_documents(
    company_info: str,
    market_challenge: str,
    api_key: Optional[str] = None,
    client: Optional[OpenAIChatClient] = None,
) -> RawDocuments:
    """Generate scenarios and personas concurrently, then the feedback document."""
    _require_inputs(company_info, market_challenge)
    client = client or get_llm_client()

    with ThreadPoolExecutor(max_workers=2) as executor:
        futures = _submit_first_stage(executor, client, company_info, market_challenge, api_key)
        outputs = {stage: future.result() for future, stage in futures.items()}

    feedback = client.generate(
        build_feedback_prompt(outputs[SCENARIOS], outputs[PERSONAS]),
        FEEDBACK_SYSTEM_PROMPT,
        api_key,
    )
    return RawDocuments(scenarios=outputs[SCENARIOS], personas=outputs[PERSONAS], feedback=feedback)


def run_simulation(
    company_info: str,
    market_challenge: str,
    api_key: Optional[str] = None,
    client: Optional[OpenAIChatClient] = None,
    max_solutions: Optional[int] = None,
) -> SimulationResponse:
    """
    Generate the three documents and parse them into ranked solutions.

    Raises:
        ValueError: blank company information or market challenge
        LLMClientError: any generation failure; parsing is skipped
    """
    documents = generate_documents(company_info, market_challenge, api_key=api_key, client=client)
    return _build_response(documents, max_solutions)


def stream_simulation(
    company_info: str,
    market_challenge: str,
    api_key: Optional[str] = None,
    client: Optional[OpenAIChatClient] = None,
    max_solutions: Optional[int] = None,
) -> Iterator[SimulationStreamEvent]:
    """
    Yield staged progress events, ending with ``complete`` or ``error``.

    Titles, persona summaries and scores are projected from each document as
    soon as it arrives; the final report is parsed from scratch at the end.
    """
    try:
        _require_inputs(company_info, market_challenge)
        client = client or get_llm_client()
        yield StatusEvent(stage="generating", message="Generating solutions and personas...", progress=5)

        outputs = {}
        with ThreadPoolExecutor(max_workers=2) as executor:
            futures = _submit_first_stage(executor, client, company_info, market_challenge, api_key)
            for future in as_completed(futures):
                stage = futures[future]
                outputs[stage] = future.result()
                if stage == SCENARIOS:
                    yield ScenariosEvent(titles=extract_solution_titles(outputs[stage]))
                else:
                    yield PersonasEvent(
                        personas=[PersonaSummary(**summary) for summary in summarize_personas(outputs[stage])]
                    )

        yield StatusEvent(stage="feedback", message="Collecting persona feedback...", progress=50)
        feedback = client.generate(
            build_feedback_prompt(outputs[SCENARIOS], outputs[PERSONAS]),
            FEEDBACK_SYSTEM_PROMPT,
            api_key,
        )
        yield ScoresEvent(scores=[ScoreSummary(**summary) for summary in extract_score_summaries(feedback)])

        yield StatusEvent(stage="parsing", message="Building the report...", progress=90)
        documents = RawDocuments(scenarios=outputs[SCENARIOS], personas=outputs[PERSONAS], feedback=feedback)
        yield CompleteEvent(result=_build_response(documents, max_solutions))

    except LLMClientError as exc:
        yield ErrorEvent(error=ErrorDetail(message=exc.message, code=exc.code))
    except ValueError as exc:
        yield ErrorEvent(error=ErrorDetail(message=str(exc), code="INVALID_REQUEST"))
    except Exception as exc:  # noqa: BLE001
        logger.exception("Simulation stream failed")
        yield ErrorEvent(error=ErrorDetail(message=str(exc) or "Unknown stream error", code="UNKNOWN_ERROR"))
