"""
Page splitting and page-level text comparison.

- split_pages(text) breaks extracted text on form feeds, falling back to runs of blank lines
- compare_pages(pages_a, pages_b) pairs pages by index:
  - a page present on one side only -> PAGE_MISSING
  - whitespace-normalised equality -> PAGE_MATCH
  - otherwise line-by-line TEXT_MISMATCH entries, capped per page
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import Difference, DifferenceKind, Match, MatchKind, Severity
from .policy import MatchPolicy

_WS_RE = re.compile(r"\s+")
_GAP_RE = re.compile(r"\n{3,}")


@dataclass
class PageComparison:
    differences: List[Difference] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    text_matches: int = 0
    text_mismatches: int = 0


def split_pages(text: str) -> List[str]:
    pages = text.split("\f")
    if len(pages) == 1:
        pages = _GAP_RE.split(text)
    return [p for p in pages if p.strip()]


def normalize_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def _clip(value: str, limit: int) -> str:
    if len(value) > limit:
        return value[:limit] + "..."
    return value


def _content_lines(text: str) -> List[str]:
    return [line for line in text.split("\n") if line.strip()]


def diff_lines(page_a: str, page_b: str, page_num: int, policy: Optional[MatchPolicy] = None) -> List[Difference]:
    """Compare non-blank lines of two pages pairwise by index."""
    policy = policy or MatchPolicy()
    lines_a = _content_lines(page_a)
    lines_b = _content_lines(page_b)

    diffs: List[Difference] = []
    skipped = 0
    for i in range(max(len(lines_a), len(lines_b))):
        line_a = lines_a[i].strip() if i < len(lines_a) else ""
        line_b = lines_b[i].strip() if i < len(lines_b) else ""
        if line_a == line_b:
            continue
        if len(diffs) >= policy.max_line_diffs:
            skipped += 1
            continue
        diffs.append(
            Difference(
                kind=DifferenceKind.TEXT_MISMATCH,
                severity=Severity.MEDIUM,
                page=page_num,
                line=i + 1,
                location=f"Page {page_num}, Line {i + 1}",
                value_a=_clip(line_a, policy.max_value_chars),
                value_b=_clip(line_b, policy.max_value_chars),
            )
        )

    if skipped:
        diffs.append(
            Difference(
                kind=DifferenceKind.TEXT_MISMATCH,
                severity=Severity.INFO,
                page=page_num,
                location=f"Page {page_num}",
                description=f"... and {skipped} more line differences on this page",
            )
        )
    return diffs


def compare_pages(
    pages_a: Sequence[str],
    pages_b: Sequence[str],
    policy: Optional[MatchPolicy] = None,
) -> PageComparison:
    result = PageComparison()

    for i in range(max(len(pages_a), len(pages_b))):
        page_num = i + 1
        text_a = pages_a[i] if i < len(pages_a) else ""
        text_b = pages_b[i] if i < len(pages_b) else ""

        if not text_a or not text_b:
            lacking, present = ("A", "B") if not text_a else ("B", "A")
            result.differences.append(
                Difference(
                    kind=DifferenceKind.PAGE_MISSING,
                    severity=Severity.HIGH,
                    page=page_num,
                    location=f"Document {lacking}",
                    description=f"Page {page_num} exists only in document {present}",
                )
            )
            result.text_mismatches += 1
            continue

        if normalize_whitespace(text_a) == normalize_whitespace(text_b):
            result.matches.append(
                Match(kind=MatchKind.PAGE_MATCH, page=page_num, description=f"Page {page_num} matches exactly")
            )
            result.text_matches += 1
        else:
            result.differences.extend(diff_lines(text_a, text_b, page_num, policy))
            result.text_mismatches += 1

    return result
