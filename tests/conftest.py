"""Pytest configuration and fixtures."""

import json
from types import SimpleNamespace
from typing import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from app.summarizer.config import Settings
from app.summarizer.main import create_app
from app.summarizer.pipeline import SummaryPipeline
from app.summarizer.services.ai_service import SummaryGenerator
from app.summarizer.services.fetcher import DocumentFetcher
from app.summarizer.services.pdf_service import PDFService

_SUMMARY = {
    "gist": "The report is clear. It is useful.",
    "keyPoints": "<ul><li>One</li><li>Two</li><li>Three</li><li>Four</li><li>Five</li></ul>",
    "relevance": "Policy analysts.",
}


def _build_pdf(text: str | None = "Hello summary world") -> bytes:
    """
    Build a small single-page PDF with a correct xref table.

    With text=None the page has no content stream (like a scanned page
    without a text layer).
    """
    if text is None:
        page = b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] >>"
        objects = [
            b"<< /Type /Catalog /Pages 2 0 R >>",
            b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
            page,
        ]
    else:
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
        objects = [
            b"<< /Type /Catalog /Pages 2 0 R >>",
            b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
            b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


class FakeCompletions:
    """Stands in for AsyncOpenAI().chat.completions."""

    def __init__(self, content: str | None = None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAIClient:
    """Minimal async OpenAI client double."""

    def __init__(self, content: str | None = None, error: Exception | None = None):
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records every outbound request."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def pdf_url() -> str:
    """URL the stubbed transports serve the sample PDF from."""
    return "https://docs.example.com/report.pdf"


@pytest.fixture
def summary() -> dict:
    """The summary the default fake model answers with."""
    return dict(_SUMMARY)


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Factory building single-page PDFs with the given text layer."""
    return _build_pdf


@pytest.fixture
def make_openai_client() -> Callable[..., FakeOpenAIClient]:
    """Factory building fake OpenAI clients with a canned reply or error."""
    return FakeOpenAIClient


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory building recording transports around a request handler."""
    return RecordingTransport


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """A minimal valid PDF containing the text 'Hello summary world'."""
    return _build_pdf()


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


@pytest.fixture
def settings() -> Settings:
    """Settings with a dummy API key and no .env lookup."""
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        openai_model="test-model",
    )


@pytest.fixture
def pdf_transport(sample_pdf_bytes: bytes) -> RecordingTransport:
    """Transport that serves the sample PDF for any URL."""
    return RecordingTransport(
        lambda request: httpx.Response(
            200,
            content=sample_pdf_bytes,
            headers={"Content-Type": "application/pdf"},
        )
    )


@pytest.fixture
def openai_client() -> FakeOpenAIClient:
    """Fake OpenAI client answering with a fenced JSON summary."""
    return FakeOpenAIClient(content="```json\n" + json.dumps(_SUMMARY) + "\n```")


@pytest.fixture
def make_client(settings: Settings):
    """Factory building a TestClient around a pipeline with the given doubles."""
    clients: list[TestClient] = []

    def factory(
        transport: httpx.AsyncBaseTransport,
        openai_client: FakeOpenAIClient,
    ) -> TestClient:
        pipeline = SummaryPipeline(
            fetcher=DocumentFetcher(transport=transport),
            extractor=PDFService(),
            generator=SummaryGenerator(model="test-model", client=openai_client),
            max_document_chars=settings.max_document_chars,
        )
        client = TestClient(create_app(settings, pipeline))
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(
    make_client, pdf_transport: RecordingTransport, openai_client: FakeOpenAIClient
) -> Generator[TestClient, None, None]:
    """Test client whose fetcher and model are both stubbed."""
    yield make_client(pdf_transport, openai_client)
