"""
OCR client task.

Posts a rendered page to the external OCR endpoint and returns its text.

Dependencies: httpx
System role: Text extraction stage for PDF pages
"""

import logging
from pathlib import Path

import httpx

from docflow.core.exceptions import OcrRequestFailed

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


class OcrTask:
    """Call the OCR service for a single page file."""

    def __init__(
        self,
        api_url: str,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self._client = client

    async def recognize(self, image_path: str) -> str:
        """
        Run OCR on a page file.

        Args:
            image_path: Rendered page path

        Returns:
            str: Recognized text

        Raises:
            OcrRequestFailed: Unreadable file, transport error, non-2xx status or malformed body
        """
        path = Path(image_path)
        try:
            body = path.read_bytes()
        except OSError as e:
            raise OcrRequestFailed(
                "OCR request failed: page file is unreadable",
                details={"image_path": image_path, "error": str(e)},
            ) from e

        headers = {
            "Content-Type": CONTENT_TYPES.get(path.suffix.lower(), "application/octet-stream")
        }
        try:
            if self._client is not None:
                response = await self._client.post(
                    self.api_url, content=body, headers=headers, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.api_url, content=body, headers=headers)
        except httpx.HTTPError as e:
            raise OcrRequestFailed(
                "OCR request failed",
                details={"error": str(e), "url": self.api_url},
            ) from e

        if not response.is_success:
            logger.warning(
                "OCR service returned an error status",
                extra={"status_code": response.status_code, "image_path": image_path},
            )
            raise OcrRequestFailed("OCR request failed", status_code=response.status_code)

        try:
            text = response.json()["text"]
        except (ValueError, KeyError, TypeError) as e:
            raise OcrRequestFailed(
                "OCR response is missing 'text'", status_code=response.status_code
            ) from e
        if not isinstance(text, str):
            raise OcrRequestFailed(
                "OCR response 'text' is not a string", status_code=response.status_code
            )
        return text
