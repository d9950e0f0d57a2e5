"""
pdf_diff.engine

Document comparison pipeline: extract -> split pages -> page diff + table
match -> report. Every call owns its own accumulators, so a single process can
run comparisons back to back or side by side.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from diff_utils.compare_table import TableComparison, check_expected_tables, match_tables
from diff_utils.compare_text import PageComparison, compare_pages, split_pages
from diff_utils.env import expected_table_keywords
from diff_utils.extractor import DEFAULT_BACKEND, extract_document_text
from diff_utils.models import (
    ComparisonReport,
    ComparisonStats,
    DocumentText,
    ExpectedTableCheck,
    TableExtraction,
)
from diff_utils.policy import DetectionPolicy, MatchPolicy, VerdictPolicy, default_verdict
from diff_utils.table_detect import extract_tables

logger = logging.getLogger(__name__)


def build_report(
    doc_a: DocumentText,
    doc_b: DocumentText,
    pages: PageComparison,
    tables_a: TableExtraction,
    tables_b: TableExtraction,
    table_cmp: TableComparison,
    expected: Sequence[ExpectedTableCheck],
    verdict_policy: VerdictPolicy = default_verdict,
) -> ComparisonReport:
    """Aggregate stage outputs into one report and classify it."""
    differences = tuple(pages.differences) + tuple(table_cmp.differences)
    matches = tuple(pages.matches) + tuple(table_cmp.matches)
    stats = ComparisonStats(
        total_pages_a=doc_a.page_count,
        total_pages_b=doc_b.page_count,
        tables_found_a=len(tables_a.tables),
        tables_found_b=len(tables_b.tables),
        table_matches=table_cmp.table_matches,
        table_mismatches=table_cmp.table_mismatches,
        text_matches=pages.text_matches,
        text_mismatches=pages.text_mismatches,
    )
    headings = tuple(dict.fromkeys(tables_a.headings + tables_b.headings))
    return ComparisonReport(
        generated_at=datetime.now(timezone.utc).isoformat(),
        verdict=verdict_policy(len(differences)),
        stats=stats,
        differences=differences,
        matches=matches,
        tables=tuple(table_cmp.outcomes),
        expected_tables=tuple(expected),
        headings=headings,
        file_a=doc_a.path,
        file_b=doc_b.path,
    )


def compare_texts(
    doc_a: DocumentText,
    doc_b: DocumentText,
    *,
    keywords: Optional[Sequence[str]] = None,
    detection: Optional[DetectionPolicy] = None,
    matching: Optional[MatchPolicy] = None,
    verdict_policy: VerdictPolicy = default_verdict,
) -> ComparisonReport:
    """Compare two already-extracted documents."""
    detection = detection or DetectionPolicy()
    matching = matching or MatchPolicy()
    if keywords is None:
        keywords = expected_table_keywords()

    pages_a = split_pages(doc_a.text)
    pages_b = split_pages(doc_b.text)
    logger.info("Comparing %d vs %d page(s)", len(pages_a), len(pages_b))
    pages = compare_pages(pages_a, pages_b, matching)

    tables_a = extract_tables(doc_a.text, detection)
    tables_b = extract_tables(doc_b.text, detection)
    logger.info("Tables found: %d vs %d", len(tables_a.tables), len(tables_b.tables))
    table_cmp = match_tables(tables_a.tables, tables_b.tables, detection, matching)

    candidates = [t.title for t in tables_a.tables if t.title]
    candidates += [t.title for t in tables_b.tables if t.title]
    candidates += list(dict.fromkeys(tables_a.headings + tables_b.headings))
    expected = check_expected_tables(keywords, candidates, detection, matching)
    for check in expected:
        logger.debug("Expected table %r: %s (%.3f)", check.name, check.status.value, check.similarity)

    return build_report(doc_a, doc_b, pages, tables_a, tables_b, table_cmp, expected, verdict_policy)


def compare_pdfs(
    pdf_a: str,
    pdf_b: str,
    *,
    backend: Optional[str] = None,
    **kwargs,
) -> ComparisonReport:
    """Extract both PDFs, then compare them. Extraction errors propagate unchanged."""
    backend = backend or DEFAULT_BACKEND
    logger.info("Extracting from A: %s", pdf_a)
    doc_a = extract_document_text(pdf_a, backend=backend)
    logger.info("Extracting from B: %s", pdf_b)
    doc_b = extract_document_text(pdf_b, backend=backend)
    logger.info("Pages: %d vs %d", doc_a.page_count, doc_b.page_count)
    return compare_texts(doc_a, doc_b, **kwargs)
