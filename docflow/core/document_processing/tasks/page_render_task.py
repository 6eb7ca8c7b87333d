"""
PDF page rendering task using PyMuPDF.

Rasterises PDF pages to JPEG images that the OCR service accepts. The
document is opened once per job and pages are rendered from the open handle.

Dependencies: fitz (PyMuPDF)
System role: Page preparation stage for PDF documents
"""

import logging
from pathlib import Path

import fitz  # PyMuPDF

from docflow.core.exceptions import ParsingError

logger = logging.getLogger(__name__)

DEFAULT_ZOOM = 2.0


class PageRenderTask:
    """Render PDF pages to images for OCR."""

    def __init__(self, pages_directory: str | Path, zoom: float = DEFAULT_ZOOM) -> None:
        """
        Initialize renderer.

        Args:
            pages_directory: Directory receiving rendered page images
            zoom: Scale factor applied to the page (2.0 renders at 144 dpi)
        """
        self.pages_directory = Path(pages_directory)
        self.zoom = zoom

    def open(self, pdf_path: str) -> fitz.Document:
        """
        Open a PDF for rendering. The caller closes the document.

        Raises:
            ParsingError: File missing, unreadable or not a PDF
        """
        try:
            document = fitz.open(pdf_path)
        except (RuntimeError, OSError, ValueError) as e:
            raise ParsingError(f"Failed to read PDF: {e}", file_type="pdf") from e

        if not document.is_pdf:
            document.close()
            raise ParsingError("File is not a PDF", file_type="pdf")
        return document

    def render(self, document: fitz.Document, page_number: int) -> str:
        """
        Rasterise one page to '<pdf stem>_page_<n>.jpg'.

        Args:
            document: Open PDF document
            page_number: 1-based page number

        Returns:
            str: Path of the rendered image

        Raises:
            ParsingError: Page out of range or rendering failed
        """
        if not 1 <= page_number <= document.page_count:
            raise ParsingError(
                f"Page {page_number} out of range (1-{document.page_count})",
                file_type="pdf",
            )

        self.pages_directory.mkdir(parents=True, exist_ok=True)
        output = self.pages_directory / f"{Path(document.name).stem}_page_{page_number}.jpg"
        try:
            pixmap = document[page_number - 1].get_pixmap(
                matrix=fitz.Matrix(self.zoom, self.zoom)
            )
            pixmap.save(str(output))
        except (RuntimeError, OSError, ValueError) as e:
            raise ParsingError(
                f"Failed to render page {page_number}: {e}", file_type="pdf"
            ) from e

        logger.debug(
            "Rendered PDF page",
            extra={"pdf_path": document.name, "page_number": page_number, "output": str(output)},
        )
        return str(output)
