"""
Embedding client task.

Sends one chunk per request to the external embedding endpoint and returns
its vector. No batching and no retries.

Dependencies: httpx
System role: Embedding stage of the document pipeline
"""

import logging
from numbers import Real

import httpx

from docflow.core.exceptions import EmbeddingRequestFailed

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Call the embedding service for a single chunk."""

    def __init__(
        self,
        api_url: str,
        timeout: float | None = None,
        dimensions: int | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            api_url: Endpoint accepting {"text": ...} and returning {"embedding": [...]}
            timeout: Request timeout in seconds (None waits indefinitely)
            dimensions: Expected vector length, if fixed
            client: Shared HTTP client (a short-lived one is opened per call if None)
        """
        self.api_url = api_url
        self.timeout = timeout
        self.dimensions = dimensions
        self._client = client

    async def embed(self, text: str) -> list[float]:
        """
        Embed one chunk of text.

        Args:
            text: Chunk text

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingRequestFailed: Transport error, non-2xx status or malformed body
        """
        try:
            if self._client is not None:
                response = await self._client.post(
                    self.api_url, json={"text": text}, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.api_url, json={"text": text})
        except httpx.HTTPError as e:
            raise EmbeddingRequestFailed(
                "Embedding request failed",
                details={"error": str(e), "url": self.api_url},
            ) from e

        if not response.is_success:
            logger.warning(
                "Embedding service returned an error status",
                extra={"status_code": response.status_code, "url": self.api_url},
            )
            raise EmbeddingRequestFailed(
                "Embedding request failed", status_code=response.status_code
            )

        return self._parse_embedding(response)

    def _parse_embedding(self, response: httpx.Response) -> list[float]:
        try:
            embedding = response.json()["embedding"]
        except (ValueError, KeyError, TypeError) as e:
            raise EmbeddingRequestFailed(
                "Embedding response is missing 'embedding'",
                status_code=response.status_code,
            ) from e

        if not isinstance(embedding, list) or not all(
            isinstance(v, Real) and not isinstance(v, bool) for v in embedding
        ):
            raise EmbeddingRequestFailed(
                "Embedding response is not a numeric vector",
                status_code=response.status_code,
            )
        if self.dimensions is not None and len(embedding) != self.dimensions:
            raise EmbeddingRequestFailed(
                f"Expected {self.dimensions}-dimensional embedding, got {len(embedding)}",
                status_code=response.status_code,
            )
        return [float(v) for v in embedding]
