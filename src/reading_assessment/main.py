"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reading_assessment.api.routes import router
from reading_assessment.assessment.scorer import select_scorer
from reading_assessment.config import get_settings, load_tunables

logger = structlog.get_logger()


def configure_logging() -> None:
    """Configure structlog: JSON in production, console output otherwise."""
    is_production = os.getenv("ENV", "development").lower() == "production"

    if is_production:
        renderer = structlog.processors.JSONRenderer()
        level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        level = logging.DEBUG

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Refuse to start with an unknown score version
    tunables = load_tunables()
    select_scorer(tunables.score_version)
    logger.info(
        "scoring_configured",
        score_version=tunables.score_version,
        fluency_cap=tunables.fluency_cap,
        accuracy_hard_floor=tunables.accuracy_hard_floor,
    )
    yield


configure_logging()

app = FastAPI(title="Reading Assessment Scoring", version="0.1.0", lifespan=lifespan)
_allowed_origins_env = os.getenv(
    "ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
)
allowed_origins = [o.strip() for o in _allowed_origins_env.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


def main() -> None:
    """Run the application."""
    settings = get_settings()
    uvicorn.run(
        "reading_assessment.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    main()
