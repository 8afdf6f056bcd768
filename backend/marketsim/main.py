"""Main FastAPI application."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketsim.api import simulation
from marketsim.config import get_settings

APP_VERSION = "1.0.0"

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Market Entry Simulator API",
    description="Persona-driven market entry simulation",
    version=APP_VERSION,
    debug=settings.debug,
)

# Wildcard origins cannot be combined with credentials
allow_all_origins = settings.cors_allow_all or "*" in settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all_origins else settings.cors_origins,
    allow_credentials=not allow_all_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

SIMULATION_PREFIX = f"/api/{settings.api_version}/simulation"


@app.get("/")
async def root():
    """Service banner with the active simulation settings."""
    return {
        "message": "Market Entry Simulator API",
        "version": APP_VERSION,
        "status": "running",
        "simulation": SIMULATION_PREFIX,
        "model": settings.openai_model,
        "max_solutions": settings.max_solutions,
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(simulation.router, prefix=SIMULATION_PREFIX, tags=["simulation"])
