"""
FastAPI application for the PDF summarizer service.

Provides a single endpoint:
- POST /summarize: fetch a PDF by URL and return a JSON summary
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .exceptions import ValidationError
from .models import MISSING_FIELDS_MESSAGE, REQUEST_TOO_LARGE_MESSAGE
from .pipeline import SummaryPipeline
from .routers import summarize

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting PDF Summarizer Service...")
    # Refuse to serve traffic without an API key
    app.state.settings.require_credentials()
    logger.info(
        "Service initialized (model=%s, max_document_chars=%d)",
        app.state.settings.openai_model,
        app.state.settings.max_document_chars,
    )
    yield
    logger.info("Shutting down PDF Summarizer Service...")


def create_app(
    settings: Settings | None = None,
    pipeline: SummaryPipeline | None = None,
) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Optional settings override. If None, loads from environment.
        pipeline: Optional pre-built pipeline (used by tests).
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings.log_level)

    app = FastAPI(
        title="PDF Summarizer API",
        description="Summarizes remote PDF documents using AI",
        version="1.0.0",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.pipeline = pipeline or SummaryPipeline.from_settings(settings)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Enforce the request body limit and log each request."""
        start = time.perf_counter()
        request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex

        max_bytes = settings.max_request_bytes
        if max_bytes > 0:
            content_length = request.headers.get("content-length")
            if content_length and content_length.isdigit():
                too_large = int(content_length) > max_bytes
            else:
                too_large = len(await request.body()) > max_bytes
            if too_large:
                logger.warning(
                    "Rejected %s %s: body over %d bytes",
                    request.method,
                    request.url.path,
                    max_bytes,
                )
                return JSONResponse(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    content={"error": REQUEST_TOO_LARGE_MESSAGE},
                    headers={"X-Request-Id": request_id},
                )

        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.2fms request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )
        return response

    # Any origin may call the endpoint; only JSON POSTs are expected
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(summarize.router)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Answer malformed bodies with the same 400 as missing fields."""
        logger.warning("Invalid request body for %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": MISSING_FIELDS_MESSAGE},
        )

    @app.exception_handler(ValidationError)
    async def missing_fields_handler(request: Request, exc: ValidationError):
        """Answer requests rejected by the route gate with a 400."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": MISSING_FIELDS_MESSAGE},
        )

    return app


# Default app instance for uvicorn (uvicorn app.summarizer.main:app)
app = create_app()
