"""FastAPI app entry point for the Wheel Size Calculator."""

import time
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.deps import get_form_session
from app.api.routes import router
from app.core.config import get_settings, validate_settings
from app.core.logging import log_request, log_response, logger
from app.services.form import FormSession

# Validate settings on startup
try:
    validate_settings()
except ValueError as e:
    logger.error(f"Configuration error: {e}")
    raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: load the vehicle dataset once."""
    logger.info("Starting Wheel Size Calculator...")
    outcome = await get_form_session().load()
    logger.info(f"Dataset {outcome.status.value}: {outcome.record_count} records")
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="Wheel Size Calculator API",
    description="Factory wheel specs and maximum wheel size by make, model, year and trim",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    log_request(request.method, request.url.path)

    response = await call_next(request)

    duration_ms = (time.time() - start) * 1000
    log_response(request.method, request.url.path, response.status_code, duration_ms)

    return response


# Routes
app.include_router(router, prefix="/api")


@app.get("/health")
async def health(session: Annotated[FormSession, Depends(get_form_session)]):
    return {
        "status": "ok",
        "service": "wheel-size-calculator",
        "dataset": session.load_outcome.status.value,
    }
