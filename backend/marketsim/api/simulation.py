"""Simulation API endpoints."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse, StreamingResponse

from marketsim.config import get_settings
from marketsim.models.schemas import (
    ParseRequest,
    SimulationRequest,
    SimulationResponse,
)
from marketsim.services.llm_exceptions import LLMClientError
from marketsim.services.result_assembler import parse_simulation_report
from marketsim.services.simulation import run_simulation, stream_simulation

router = APIRouter()


def _resolve_api_key(request: SimulationRequest) -> str:
    api_key = (request.api_key or "").strip() or get_settings().openai_api_key.strip()
    if not api_key:
        raise HTTPException(status_code=400, detail="OpenAI API key is required")
    return api_key


def _validate_inputs(request: SimulationRequest) -> None:
    if not request.company_info.strip() or not request.market_challenge.strip():
        raise HTTPException(
            status_code=400,
            detail="Both company information and market challenge are required",
        )


def _format_sse(payload: str) -> str:
    return f"event: message\ndata: {payload}\n\n"


@router.post("/run", response_model=SimulationResponse)
def run(request: SimulationRequest):
    """
    Generate solutions, personas and feedback, then return the ranked report.
    Upstream generation failures are returned as ``{error, code}``.
    """
    _validate_inputs(request)
    api_key = _resolve_api_key(request)

    try:
        return run_simulation(
            request.company_info.strip(),
            request.market_challenge.strip(),
            api_key=api_key,
        )
    except LLMClientError as exc:
        return JSONResponse(status_code=exc.http_status, content={"error": exc.message, "code": exc.code})


@router.post("/stream")
def stream(request: SimulationRequest):
    """Stream staged progress as server-sent events."""
    _validate_inputs(request)
    api_key = _resolve_api_key(request)

    def event_source():
        for event in stream_simulation(
            request.company_info.strip(),
            request.market_challenge.strip(),
            api_key=api_key,
        ):
            yield _format_sse(event.model_dump_json(by_alias=True))
            if event.type in ("complete", "error"):
                break

    return StreamingResponse(
        event_source(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.post("/parse", response_model=SimulationResponse)
def parse(request: ParseRequest):
    """Parse already generated documents without calling the generator."""
    max_solutions = request.max_solutions or get_settings().max_solutions
    solutions = parse_simulation_report(
        request.scenarios,
        request.personas,
        request.feedback,
        max_solutions=max_solutions,
    )
    return SimulationResponse(solutions=solutions)
