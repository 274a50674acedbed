"""
Pydantic models and enums for the summarization pipeline.

Defines the request body, the documented response shapes, and the
enums that tag pipeline stages and error categories.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PipelineStage(str, Enum):
    """States a summary request moves through."""

    RECEIVED = "received"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    GENERATING = "generating"
    NORMALIZING = "normalizing"
    RESPONDED = "responded"
    FAILED = "failed"


class ErrorCategory(str, Enum):
    """Coarse failure category exposed to clients."""

    DOCUMENT = "document"  # fetch or extraction
    MODEL_OUTPUT = "model_output"  # generation or parse


MISSING_FIELDS_MESSAGE = "Missing 'url' or 'title' in request body."
PROCESSING_FAILED_MESSAGE = "Failed to process document or generate summary."
REQUEST_TOO_LARGE_MESSAGE = "Request body too large."

ERROR_DETAILS: dict[ErrorCategory, str] = {
    ErrorCategory.DOCUMENT: "External PDF access failure.",
    ErrorCategory.MODEL_OUTPUT: "AI structure error or malformed response.",
}


class SummaryRequest(BaseModel):
    """
    Body of POST /summarize.

    Both fields are optional at the schema level so that a missing field
    is answered with the service's own 400 message rather than a
    framework validation error.

    Attributes:
        url: Location of the PDF to summarize.
        title: Document title, used as prompt context.
    """

    url: str | None = Field(
        default=None,
        description="URL of the PDF document",
        examples=["https://example.com/report.pdf"],
    )
    title: str | None = Field(
        default=None,
        description="Human-readable document title",
        examples=["Annual Report 2024"],
    )

    def is_complete(self) -> bool:
        """Return True when both url and title are non-empty."""
        return bool(self.url and self.url.strip() and self.title and self.title.strip())


class SummaryResult(BaseModel):
    """
    Summary as produced by the model.

    Only used to document the happy-path response; the service returns
    the model's JSON verbatim, so missing or extra keys pass through.
    """

    model_config = ConfigDict(extra="allow")

    gist: str | None = Field(default=None, description="Two-sentence overview")
    keyPoints: str | None = Field(
        default=None, description="HTML bullet list with five key points"
    )
    relevance: str | None = Field(
        default=None, description="Who needs this document"
    )


class ErrorResponse(BaseModel):
    """Error body returned for 4xx/5xx responses."""

    error: str
    details: str | None = None
