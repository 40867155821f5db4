"""pdfplumber client for extracting the text layer of a PDF."""

import io
import os
from pathlib import Path
from typing import List, Optional

import pdfplumber

DEFAULT_MAX_PAGES = 2

# Appended after every page so page boundaries show up as a blank line
PAGE_SEPARATOR = "\n\n"


class NoExtractableTextError(ValueError):
    """Raised when a PDF has no text layer (image-only or empty)."""


class PDFTextResult:
    """Container for PDF text extraction results."""

    def __init__(
        self,
        full_text: str,
        page_count: int,
        pages_processed: int,
        warnings: List[str]
    ):
        """
        Initialize PDF text result.

        Args:
            full_text: Concatenated text of the processed pages
            page_count: Number of pages in the document
            pages_processed: Number of pages read
            warnings: Pages without text and similar notes
        """
        self.full_text = full_text
        self.page_count = page_count
        self.pages_processed = pages_processed
        self.warnings = warnings

    def __repr__(self) -> str:
        return (f"PDFTextResult(full_text_length={len(self.full_text)}, "
                f"pages={self.pages_processed}/{self.page_count})")


class PDFTextClient:
    """Client reading the text of the first pages of a PDF with pdfplumber."""

    def __init__(self, max_pages: Optional[int] = None):
        """
        Initialize PDF text client.

        Args:
            max_pages: Number of leading pages to read. If None, uses the
                       PDF_MAX_PAGES env var, else 2.
        """
        if max_pages is None:
            max_pages = int(os.getenv("PDF_MAX_PAGES", DEFAULT_MAX_PAGES))
        if max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {max_pages}")
        self.max_pages = max_pages

    def extract_text(self, pdf_path: str) -> PDFTextResult:
        """
        Extract text from a PDF file.

        Args:
            pdf_path: Path to the PDF file

        Returns:
            PDFTextResult with the text of the first pages

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a PDF
            NoExtractableTextError: If the pages have no text layer
        """
        path = Path(pdf_path)
        if not path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")
        if path.suffix.lower() != '.pdf':
            raise ValueError(f"Unsupported file format: {path.suffix}. Use PDF.")

        with pdfplumber.open(str(path)) as pdf:
            return self._read_pages(pdf)

    def extract_text_from_bytes(self, pdf_bytes: bytes) -> PDFTextResult:
        """
        Extract text from PDF bytes (for use with uploaded files).

        Args:
            pdf_bytes: PDF file bytes

        Returns:
            PDFTextResult with the text of the first pages
        """
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            return self._read_pages(pdf)

    def _read_pages(self, pdf) -> PDFTextResult:
        pages = pdf.pages
        to_process = pages[:self.max_pages]
        warnings = []
        full_text = ""

        for number, page in enumerate(to_process, 1):
            page_text = page.extract_text() or ""
            if not page_text.strip():
                warnings.append(f"Page {number} has no text layer")
            full_text += page_text + PAGE_SEPARATOR

        if not full_text.strip():
            raise NoExtractableTextError(
                "Could not extract any text from the PDF. "
                "The file might be image-based or empty."
            )

        return PDFTextResult(
            full_text=full_text,
            page_count=len(pages),
            pages_processed=len(to_process),
            warnings=warnings
        )
