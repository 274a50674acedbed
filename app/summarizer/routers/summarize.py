"""
Router for the summarize endpoint.

Handles:
- Request validation (url and title present)
- Running the summarization pipeline
- Mapping pipeline failures to a single 500 response
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from ..exceptions import ValidationError
from ..models import (
    ERROR_DETAILS,
    MISSING_FIELDS_MESSAGE,
    PROCESSING_FAILED_MESSAGE,
    ErrorResponse,
    SummaryRequest,
    SummaryResult,
)
from ..pipeline import SummaryPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["summarize"])


def get_pipeline(request: Request) -> SummaryPipeline:
    """Return the pipeline built for this application."""
    return request.app.state.pipeline


@router.post(
    "/summarize",
    response_model=SummaryResult,
    responses={
        400: {"model": ErrorResponse, "description": "Missing 'url' or 'title'."},
        413: {"model": ErrorResponse, "description": "Request body too large."},
        500: {
            "model": ErrorResponse,
            "description": "Document could not be fetched/read or the model output was unusable.",
        },
    },
)
async def summarize(
    body: SummaryRequest,
    pipeline: Annotated[SummaryPipeline, Depends(get_pipeline)],
) -> JSONResponse:
    """
    Summarize a remote PDF.

    Downloads the PDF at `url`, extracts its text and returns the model's
    JSON summary (gist, keyPoints, relevance) verbatim.
    """
    if not body.is_complete():
        logger.warning("Rejected summary request with missing url or title")
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    run = await pipeline.run(body.url.strip(), body.title)

    if run.failed:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": PROCESSING_FAILED_MESSAGE,
                "details": ERROR_DETAILS[run.error.category],
            },
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=run.result)
