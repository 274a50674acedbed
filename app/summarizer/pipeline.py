"""
Summarization pipeline.

Runs fetch -> extract -> prompt -> generate -> normalize strictly in
sequence for one request. The first failing stage short-circuits the
rest and is recorded on the PipelineRun; nothing is retried.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi.concurrency import run_in_threadpool

from .config import Settings
from .exceptions import (
    ExtractionError,
    FetchError,
    GenerationError,
    ParseError,
    PipelineError,
)
from .models import PipelineStage
from .services.ai_service import SummaryGenerator
from .services.fetcher import DocumentFetcher
from .services.normalizer import normalize_response
from .services.pdf_service import PDFService
from .services.prompt import DEFAULT_MAX_DOCUMENT_CHARS, build_summary_prompt

logger = logging.getLogger(__name__)

# Error raised for an unexpected exception inside each stage
_STAGE_ERRORS: dict[PipelineStage, type[PipelineError]] = {
    PipelineStage.FETCHING: FetchError,
    PipelineStage.EXTRACTING: ExtractionError,
    PipelineStage.GENERATING: GenerationError,
    PipelineStage.NORMALIZING: ParseError,
}


@dataclass
class PipelineRun:
    """State of one summary request as it moves through the pipeline."""

    url: str
    title: str
    stage: PipelineStage = PipelineStage.RECEIVED
    history: list[PipelineStage] = field(
        default_factory=lambda: [PipelineStage.RECEIVED]
    )
    result: Any = None
    error: PipelineError | None = None
    failed_stage: PipelineStage | None = None

    @property
    def succeeded(self) -> bool:
        return self.stage == PipelineStage.RESPONDED

    @property
    def failed(self) -> bool:
        return self.stage == PipelineStage.FAILED

    def advance(self, stage: PipelineStage) -> None:
        logger.debug("Pipeline %s -> %s", self.stage.value, stage.value)
        self.stage = stage
        self.history.append(stage)

    def fail(self, error: PipelineError) -> None:
        self.failed_stage = self.stage
        self.error = error
        self.advance(PipelineStage.FAILED)


class SummaryPipeline:
    """
    Orchestrates the summarization stages for a single document.

    Holds only immutable collaborators, so one instance is shared by all
    requests.
    """

    def __init__(
        self,
        fetcher: DocumentFetcher,
        extractor: PDFService,
        generator: SummaryGenerator,
        max_document_chars: int = DEFAULT_MAX_DOCUMENT_CHARS,
    ):
        self.fetcher = fetcher
        self.extractor = extractor
        self.generator = generator
        self.max_document_chars = max_document_chars

    @classmethod
    def from_settings(cls, settings: Settings) -> "SummaryPipeline":
        """Build a pipeline wired to the configured services."""
        return cls(
            fetcher=DocumentFetcher(
                timeout=settings.fetch_timeout_seconds,
                max_bytes=settings.max_document_bytes,
            ),
            extractor=PDFService(),
            generator=SummaryGenerator(
                api_key=settings.openai_api_key,
                model=settings.openai_model,
                timeout=settings.generation_timeout_seconds,
                base_url=settings.openai_base_url,
            ),
            max_document_chars=settings.max_document_chars,
        )

    async def run(self, url: str, title: str) -> PipelineRun:
        """
        Summarize the document at url.

        Never raises for stage failures: the returned run is either
        RESPONDED with a result or FAILED with the originating error.
        """
        run = PipelineRun(url=url, title=title)

        try:
            run.advance(PipelineStage.FETCHING)
            pdf_bytes = await self.fetcher.fetch(url)

            run.advance(PipelineStage.EXTRACTING)
            text = await run_in_threadpool(self.extractor.extract_text, pdf_bytes)

            run.advance(PipelineStage.GENERATING)
            prompt = build_summary_prompt(text, title, self.max_document_chars)
            raw = await self.generator.generate(prompt)

            run.advance(PipelineStage.NORMALIZING)
            run.result = normalize_response(raw)

        except PipelineError as e:
            run.fail(e)
        except Exception as e:
            logger.exception("Unexpected error during %s", run.stage.value)
            run.fail(_STAGE_ERRORS[run.stage](f"Unexpected error: {e}"))
        else:
            run.advance(PipelineStage.RESPONDED)
            logger.info("Summarized %s (%s)", url, title)
            return run

        logger.error(
            "Pipeline failed at %s for %s: %s: %s",
            run.failed_stage.value,
            url,
            type(run.error).__name__,
            run.error,
        )
        return run
