"""
api/main.py — punkt wejścia FastAPI.

Lifespan:
  - Tworzy raz bezstanowe adaptery (parser, ewaluator, sampler)
  - Są współdzielone przez wszystkie żądania; drzewa są niezmienne, bez blokad

Błędy:
  ParseError / EvaluationError / RangeError / ResolutionLimitError
    → 422 z {"error", "detail"}
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.domain_sampler.grid_sampler import GridSampler
from adapters.evaluator.float_evaluator import FloatEvaluator
from adapters.expression_parser.descent_parser import DescentExpressionParser
from api.routers import evaluate, parse, sample
from api.schemas import HealthResponse
from config import Settings
from contracts import EvaluationError, ParseError, RangeError, ResolutionLimitError

logger = logging.getLogger("plotfn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    evaluator = FloatEvaluator()
    app.state.parser = DescentExpressionParser()
    app.state.evaluator = evaluator
    app.state.sampler = GridSampler(evaluator=evaluator)

    logger.info("plotfn API gotowe.")
    yield
    logger.info("Zamykanie.")


async def _expression_error_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=422,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(parse.router)
    app.include_router(evaluate.router)
    app.include_router(sample.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(status="ok", version=settings.app_version)

    # Globalne handlery błędów wyrażeń
    for exc_type in (ParseError, EvaluationError, RangeError, ResolutionLimitError):
        app.add_exception_handler(exc_type, _expression_error_handler)

    return app


app = create_app()
