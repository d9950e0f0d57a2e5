"""
PDF text extraction.

- extract_document_text(pdf_path, backend) -> DocumentText with pages joined by form feeds
- backends: PyMuPDF (default) and pdfplumber
- a missing or unreadable file is fatal; nothing is retried
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import fitz  # PyMuPDF
import pdfplumber

from .compare_text import split_pages
from .models import DocumentText

logger = logging.getLogger(__name__)

PAGE_BREAK = "\f"
DEFAULT_BACKEND = "pymupdf"


class ExtractionError(RuntimeError):
    """Raised when a document exists but its text cannot be read."""


def _pages_pymupdf(pdf_path: str) -> List[str]:
    with fitz.open(pdf_path) as doc:
        return [page.get_text("text") or "" for page in doc]


def _pages_pdfplumber(pdf_path: str) -> List[str]:
    with pdfplumber.open(pdf_path) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


BACKENDS: Dict[str, Callable[[str], List[str]]] = {
    "pymupdf": _pages_pymupdf,
    "pdfplumber": _pages_pdfplumber,
}


def extract_text_pages(pdf_path: str, backend: str = DEFAULT_BACKEND) -> List[Tuple[int, str]]:
    """Extract text per page.

    Returns list of (page_number starting at 1, text)
    """
    try:
        reader = BACKENDS[backend]
    except KeyError:
        raise ValueError(f"unknown extraction backend: {backend!r} (choose from {sorted(BACKENDS)})") from None

    path = Path(pdf_path)
    if not path.is_file():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    try:
        pages = reader(str(path))
    except Exception as e:
        raise ExtractionError(f"Failed to extract text from {pdf_path}: {e}") from e

    logger.debug("Extracted %d page(s) from %s with %s", len(pages), pdf_path, backend)
    return list(enumerate(pages, start=1))


def _terminated(text: str) -> str:
    # pdfplumber omits the final newline; without it adjacent pages share a line
    text = text.rstrip(PAGE_BREAK)
    return text if text.endswith("\n") else text + "\n"


def extract_document_text(pdf_path: str, backend: str = DEFAULT_BACKEND) -> DocumentText:
    """Extract a whole document as one string, pages separated by form feeds."""
    pages = extract_text_pages(pdf_path, backend=backend)
    return DocumentText(
        path=str(pdf_path),
        text=PAGE_BREAK.join(_terminated(text) for _, text in pages),
        page_count=len(pages),
    )


def document_from_text(text: str, name: str = "<text>") -> DocumentText:
    """Wrap already-extracted text; the page count is taken from its page breaks."""
    return DocumentText(path=name, text=text, page_count=len(split_pages(text)))
