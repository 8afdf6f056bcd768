"""Serve the simulator API with uvicorn using the values from Settings."""
import logging
from pathlib import Path

import uvicorn

from marketsim.config import get_settings

logger = logging.getLogger("marketsim.run_backend")


def main() -> None:
    settings = get_settings()
    package_dir = Path(__file__).resolve().parent / "marketsim"

    logging.basicConfig(level=logging.INFO)
    logger.info(
        "Market entry simulator on http://%s:%d/api/%s/simulation (model %s, up to %d solutions)",
        settings.backend_host,
        settings.backend_port,
        settings.api_version,
        settings.openai_model,
        settings.max_solutions,
    )
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; requests must carry their own api_key")

    uvicorn.run(
        "marketsim.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.backend_reload,
        reload_dirs=[str(package_dir)] if settings.backend_reload else None,
        app_dir=str(package_dir.parent),
    )


if __name__ == "__main__":
    main()
