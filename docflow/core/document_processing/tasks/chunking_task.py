"""
Paragraph chunking task.

Packs blank-line separated paragraphs greedily into chunks bounded by a
maximum length. A paragraph longer than the maximum is never split; it
becomes a chunk of its own.

Dependencies: re (stdlib)
System role: Chunking stage of the document pipeline
"""

import re

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
PARAGRAPH_SEPARATOR = "\n\n"
DEFAULT_MAX_CHUNK_LENGTH = 500


def paragraph_chunk(text: str, max_length: int = DEFAULT_MAX_CHUNK_LENGTH) -> list[str]:
    """
    Split text into paragraph-aligned chunks of at most max_length characters.

    Args:
        text: Extracted document text
        max_length: Maximum chunk length

    Returns:
        list[str]: Non-empty chunks in original text order

    Raises:
        ValueError: max_length is not positive
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")

    chunks: list[str] = []
    current = ""

    for paragraph in PARAGRAPH_BREAK.split(text):
        trimmed = paragraph.strip()
        if not trimmed:
            continue

        candidate = (current + PARAGRAPH_SEPARATOR + trimmed).strip()
        if len(candidate) <= max_length:
            current = candidate
            continue

        if current:
            chunks.append(current)
        if len(trimmed) > max_length:
            chunks.append(trimmed)
            current = ""
        else:
            current = trimmed

    if current:
        chunks.append(current)
    return chunks


class ChunkingTask:
    """Split extracted text into paragraph-aligned chunks."""

    def __init__(self, max_length: int = DEFAULT_MAX_CHUNK_LENGTH) -> None:
        """
        Initialize chunking task.

        Args:
            max_length: Maximum chunk size in characters
        """
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")
        self.max_length = max_length

    def chunk(self, text: str) -> list[str]:
        """Split text into chunks; empty or blank text yields no chunks."""
        return paragraph_chunk(text, self.max_length)
