"""
Shared exceptions for the summarizer service.

Pipeline errors carry the stage they were raised in and an explicit
category, so the request handler never has to inspect error messages to
decide what to report to the client.
"""

from .models import ErrorCategory, PipelineStage


class SummarizerError(Exception):
    """Base class for all summarizer errors."""

    pass


class ValidationError(SummarizerError):
    """Raised when a summary request is missing its url or title."""

    pass


class StartupError(SummarizerError):
    """Raised when the service cannot start (e.g. missing API key)."""

    pass


class PipelineError(SummarizerError):
    """Raised when a pipeline stage fails."""

    stage: PipelineStage = PipelineStage.RECEIVED
    category: ErrorCategory = ErrorCategory.DOCUMENT


class FetchError(PipelineError):
    """Raised when the remote PDF cannot be downloaded."""

    stage = PipelineStage.FETCHING
    category = ErrorCategory.DOCUMENT


class ExtractionError(PipelineError):
    """Raised when the downloaded bytes are not a readable PDF."""

    stage = PipelineStage.EXTRACTING
    category = ErrorCategory.DOCUMENT


class GenerationError(PipelineError):
    """Raised when the OpenAI call fails."""

    stage = PipelineStage.GENERATING
    category = ErrorCategory.MODEL_OUTPUT


class ParseError(PipelineError):
    """Raised when the model output is not valid JSON."""

    stage = PipelineStage.NORMALIZING
    category = ErrorCategory.MODEL_OUTPUT
