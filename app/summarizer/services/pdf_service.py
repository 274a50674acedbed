"""
PDF processing service using pypdf.

Handles extraction of the plain text layer from PDF documents.
"""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ..exceptions import ExtractionError

logger = logging.getLogger(__name__)


class PDFService:
    """
    Service for PDF processing operations.

    Extraction is best-effort text-stream concatenation: no OCR and no
    layout or table reconstruction.
    """

    def __init__(self, page_separator: str = "\n"):
        """
        Initialize the PDF service.

        Args:
            page_separator: String placed between the text of consecutive pages.
        """
        self.page_separator = page_separator

    def _open(self, pdf_bytes: bytes) -> PdfReader:
        if not pdf_bytes:
            raise ExtractionError("Empty PDF file provided")

        # Validate PDF magic bytes
        if not pdf_bytes[:4] == b"%PDF":
            raise ExtractionError("Invalid PDF file: does not start with PDF header")

        try:
            reader = PdfReader(io.BytesIO(pdf_bytes))
        except PdfReadError as e:
            logger.error("PDF read error: %s", e)
            raise ExtractionError(f"Invalid or corrupted PDF file: {e}") from e
        except Exception as e:
            logger.exception("Unexpected error while opening PDF")
            raise ExtractionError(f"PDF could not be opened: {e}") from e

        if reader.is_encrypted:
            raise ExtractionError("Encrypted PDF files are not supported")

        return reader

    def extract_text(self, pdf_bytes: bytes) -> str:
        """
        Extract the text layer of every page.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Page texts joined by the page separator. May be empty for
            scanned (image-only) documents.

        Raises:
            ExtractionError: If the bytes are not a readable PDF.
        """
        reader = self._open(pdf_bytes)

        try:
            page_texts = [page.extract_text() or "" for page in reader.pages]
        except PdfReadError as e:
            logger.error("PDF syntax error: %s", e)
            raise ExtractionError(f"Invalid or corrupted PDF file: {e}") from e
        except Exception as e:
            logger.exception("Unexpected error during PDF text extraction")
            raise ExtractionError(f"PDF text extraction failed: {e}") from e

        text = self.page_separator.join(t for t in page_texts if t)
        logger.info(
            "Extracted %d characters from %d page(s)", len(text), len(page_texts)
        )
        return text
