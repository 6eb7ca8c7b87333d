"""
HTML text extraction task using BeautifulSoup.

Block-level elements are separated by a blank line in the extracted text, so
paragraph chunking sees one paragraph per block.

Dependencies: bs4
System role: Extraction stage for HTML documents
"""

import re

from bs4 import BeautifulSoup

from docflow.core.exceptions import ParsingError

NON_TEXT_TAGS = ("script", "style", "noscript", "template")

BLOCK_TAGS = (
    "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5",
    "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
    "table", "tr", "ul",
)

PARAGRAPH_BREAK = "\n\n"
BLANK_LINES = re.compile(r"\n[^\S\n]*(?:\n[^\S\n]*)+")


class HtmlExtractionTask:
    """Extract the body text content of an HTML document."""

    def __init__(self, parser: str = "html.parser") -> None:
        self._parser = parser

    def extract(self, html_content: str) -> str:
        """
        Parse markup and return its trimmed body text.

        Falls back to the whole document when there is no <body>. Runs of
        blank lines collapse to a single paragraph break.

        Args:
            html_content: Raw HTML

        Returns:
            str: Text content, possibly empty

        Raises:
            ParsingError: When the markup cannot be parsed
        """
        try:
            soup = BeautifulSoup(html_content, self._parser)
        except Exception as e:
            raise ParsingError(f"Failed to parse HTML: {e}", file_type="html") from e

        for tag in soup(NON_TEXT_TAGS):
            tag.decompose()

        root = soup.body if soup.body is not None else soup
        for block in root.find_all(BLOCK_TAGS):
            block.insert_before(PARAGRAPH_BREAK)
            block.insert_after(PARAGRAPH_BREAK)

        text = BLANK_LINES.sub(PARAGRAPH_BREAK, root.get_text())
        return text.strip()
