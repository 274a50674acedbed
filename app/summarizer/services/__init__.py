"""
Services package for the PDF summarizer.

Contains:
- fetcher: remote document download (httpx)
- pdf_service: PDF text extraction (pypdf)
- prompt: summary prompt construction
- ai_service: OpenAI JSON-mode generation
- normalizer: fence stripping and JSON parsing of model output
"""

from .ai_service import SummaryGenerator
from .fetcher import DocumentFetcher
from .normalizer import normalize_response
from .pdf_service import PDFService
from .prompt import build_summary_prompt

__all__ = [
    "DocumentFetcher",
    "PDFService",
    "SummaryGenerator",
    "build_summary_prompt",
    "normalize_response",
]
