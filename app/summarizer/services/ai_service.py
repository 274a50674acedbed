"""
AI service for document summarization.

Uses the OpenAI Chat Completions API in JSON mode
(response_format={"type": "json_object"}) and returns the raw text.
"""

import logging
from typing import Any

from openai import APIError, AsyncOpenAI

from ..exceptions import GenerationError

logger = logging.getLogger(__name__)


class SummaryGenerator:
    """
    Service that sends a summary prompt to OpenAI.

    One outbound call per request, no retries and no caching.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4.1-mini",
        timeout: float = 60.0,
        base_url: str | None = None,
        client: Any | None = None,
    ):
        """
        Initialize the generator.

        Args:
            api_key: OpenAI API key.
            model: Chat model identifier.
            timeout: Seconds allowed for one completion call.
            base_url: Optional OpenAI-compatible endpoint.
            client: Pre-built async client (used by tests).
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.base_url = base_url
        self._client = client

    @property
    def client(self) -> Any:
        """Lazy-load the OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise GenerationError(
                    "OpenAI API key not provided. Set OPENAI_API_KEY environment variable."
                )
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def generate(self, prompt: str) -> str:
        """
        Generate a JSON summary for a prompt.

        Args:
            prompt: Full instruction plus document text.

        Returns:
            The model's raw text output (expected to be JSON, possibly fenced).

        Raises:
            GenerationError: If the OpenAI call fails or returns no content.
        """
        logger.info(
            "Requesting summary from %s (%d prompt chars)", self.model, len(prompt)
        )

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
            )
        except APIError as e:
            logger.error("OpenAI request failed: %s", e)
            raise GenerationError(f"OpenAI request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not isinstance(content, str) or not content.strip():
            raise GenerationError("Empty response from OpenAI")

        return content
