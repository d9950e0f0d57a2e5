"""
End-to-end tests on small PDFs generated with PyMuPDF:
- extraction returns one form-feed separated string with the physical page count
- comparing a PDF with itself is IDENTICAL
- a page present in only one PDF is reported once
- unreadable and missing inputs are fatal
"""

from __future__ import annotations

import pytest

from diff_utils.extractor import ExtractionError, extract_document_text, extract_text_pages
from diff_utils.models import DifferenceKind, Verdict
from diff_utils.table_detect import extract_tables
from pdf_diff import compare_pdfs


def test_extract_text_pages(make_pdf):
    a = make_pdf("sample_P001.pdf", ["Hello A\nThis is sample PDF A.", "Second page"])

    pages = extract_text_pages(str(a))

    assert [p for p, _ in pages] == [1, 2]
    assert "Hello A" in pages[0][1]
    assert "Second page" in pages[1][1]


def test_extract_document_text_joins_pages_with_form_feed(make_pdf):
    a = make_pdf("doc.pdf", ["First page", "Second page", "Third page"])

    doc = extract_document_text(str(a))

    assert doc.page_count == 3
    assert doc.text.count("\f") == 2
    assert doc.path == str(a)


@pytest.mark.parametrize("backend", ["pymupdf", "pdfplumber"])
def test_compare_identical_pdfs(make_pdf, backend):
    a = make_pdf("a.pdf", ["Policy declarations", "Schedule of forms"])
    b = make_pdf("b.pdf", ["Policy declarations", "Schedule of forms"])

    report = compare_pdfs(str(a), str(b), backend=backend, keywords=[])

    assert report.verdict is Verdict.IDENTICAL
    assert report.total_differences == 0
    assert report.stats.total_pages_a == 2
    assert report.stats.total_pages_b == 2
    assert report.stats.text_matches == 2


def test_compare_pdf_with_extra_page(make_pdf):
    a = make_pdf("a.pdf", ["Cover letter", "Declarations", "Endorsements"])
    b = make_pdf("b.pdf", ["Cover letter", "Declarations"])

    report = compare_pdfs(str(a), str(b), keywords=[])

    missing = [d for d in report.differences if d.kind is DifferenceKind.PAGE_MISSING]
    assert len(missing) == 1
    assert missing[0].page == 3
    assert missing[0].description == "Page 3 exists only in document A"
    assert report.verdict is Verdict.MOSTLY_SIMILAR


def test_missing_file_is_fatal(tmp_path, make_pdf):
    a = make_pdf("a.pdf", ["Cover letter"])
    with pytest.raises(FileNotFoundError):
        compare_pdfs(str(a), str(tmp_path / "nope.pdf"))


def test_corrupt_file_is_fatal(tmp_path):
    bad = tmp_path / "broken.pdf"
    bad.write_bytes(b"this is not a pdf")
    with pytest.raises(ExtractionError):
        extract_document_text(str(bad))


def test_unknown_backend(make_pdf):
    a = make_pdf("a.pdf", ["Cover letter"])
    with pytest.raises(ValueError):
        extract_document_text(str(a), backend="ocr")


@pytest.mark.parametrize("backend", ["pymupdf", "pdfplumber"])
def test_page_boundaries_do_not_merge_lines(make_pdf, backend):
    a = make_pdf("a.pdf", ["Cover letter", "Declarations"])

    doc = extract_document_text(str(a), backend=backend)
    headings = extract_tables(doc.text).headings

    assert "Cover letter" in headings
    assert "Declarations" in headings
    assert not any("\f" in h for h in headings)
