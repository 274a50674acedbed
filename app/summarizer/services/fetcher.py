"""
Remote document fetcher using httpx.

Downloads the raw PDF bytes for a summary request with a bounded timeout
and a maximum body size.
"""

import logging
from urllib.parse import urlparse

import httpx

from ..exceptions import FetchError

logger = logging.getLogger(__name__)


class DocumentFetcher:
    """
    Service for downloading documents over HTTP(S).

    A fresh AsyncClient is opened per fetch so requests never share
    connection state.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_bytes: int = 25 * 1024 * 1024,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Seconds allowed for connect, read and write operations.
            max_bytes: Largest response body accepted, in bytes.
            transport: Optional httpx transport (used by tests).
        """
        self.timeout = timeout
        self.max_bytes = max_bytes
        self._transport = transport

    async def fetch(self, url: str) -> bytes:
        """
        Download the document at url.

        Args:
            url: Absolute http(s) URL of the document.

        Returns:
            The response body as bytes.

        Raises:
            FetchError: On invalid URL, network failure, timeout,
                non-2xx status or oversize body.
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise FetchError(f"Invalid document URL: {url!r}")

        logger.info("Fetching document from %s", url)

        body = bytearray()
        too_large = False

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()

                    content_length = response.headers.get("content-length")
                    if content_length and content_length.isdigit():
                        too_large = int(content_length) > self.max_bytes

                    if not too_large:
                        async for chunk in response.aiter_bytes():
                            body.extend(chunk)
                            if len(body) > self.max_bytes:
                                too_large = True
                                break

        except httpx.HTTPStatusError as e:
            logger.error("Document fetch returned HTTP %d", e.response.status_code)
            raise FetchError(
                f"Document fetch failed with status {e.response.status_code}"
            ) from e

        except httpx.TimeoutException as e:
            logger.error("Document fetch timed out after %.1fs", self.timeout)
            raise FetchError(f"Document fetch timed out: {e}") from e

        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid document URL: {e}") from e

        except httpx.HTTPError as e:
            logger.error("Document fetch failed: %s", e)
            raise FetchError(f"Document fetch failed: {e}") from e

        if too_large:
            logger.error("Document at %s exceeds %d bytes", url, self.max_bytes)
            raise FetchError(f"Document exceeds {self.max_bytes} bytes")

        logger.info("Fetched %d bytes from %s", len(body), url)
        return bytes(body)
