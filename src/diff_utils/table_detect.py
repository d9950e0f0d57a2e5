"""
Heuristic table detection over plain extracted text.

Column layout is lost once a PDF is flattened to text, so a "table" here is a
run of lines that still contain wide gaps between values. Titles are guessed
from the short lines just above each run, and every short non-tabular line is
collected as a candidate heading for the expected-table check.
"""

from __future__ import annotations

import re
from collections import deque
from typing import Dict, Iterable, List, Optional

from .models import TableBlock, TableExtraction
from .policy import DetectionPolicy

_LETTER_RE = re.compile(r"[A-Za-z]")
_TITLE_TAIL_RE = re.compile(r"[:\-–]+$")


def is_table_line(line: str, policy: Optional[DetectionPolicy] = None) -> bool:
    """True for lines with a column gap and enough content to be a table row."""
    policy = policy or DetectionPolicy()
    has_gap = "\t" in line or re.search(r"\s{%d,}" % policy.min_gap_spaces, line) is not None
    return has_gap and len(line.strip()) > policy.min_row_chars


def looks_like_heading(text: str, policy: Optional[DetectionPolicy] = None) -> bool:
    policy = policy or DetectionPolicy()
    return (
        policy.heading_min_chars <= len(text) <= policy.heading_max_chars
        and len(text.split()) <= policy.heading_max_words
        and _LETTER_RE.search(text) is not None
    )


def infer_table_title(lookback: Iterable[str], policy: Optional[DetectionPolicy] = None) -> Optional[str]:
    """Return the most recent lookback line that reads like a heading."""
    policy = policy or DetectionPolicy()
    for line in reversed(list(lookback)):
        clean = _TITLE_TAIL_RE.sub("", line).strip()
        if looks_like_heading(clean, policy):
            return clean
    return None


def _make_block(rows: List[str], title: Optional[str], policy: DetectionPolicy) -> TableBlock:
    preview = "\n".join(rows[: policy.preview_rows])
    if len(rows) > policy.preview_rows:
        preview += "\n..."
    return TableBlock(content="\n".join(rows), preview=preview, row_count=len(rows), title=title)


def extract_tables(text: str, policy: Optional[DetectionPolicy] = None) -> TableExtraction:
    """Scan ``text`` line by line for table regions and headings.

    A region grows while lines look tabular. Once it holds at least
    ``min_table_rows`` lines, the next non-tabular line closes it; a blank or
    short line discards a region that is still too small.
    """
    policy = policy or DetectionPolicy()
    tables: List[TableBlock] = []
    headings: Dict[str, None] = {}
    lookback: deque = deque(maxlen=policy.lookback_size)
    current: List[str] = []
    context: List[str] = []

    def close():
        tables.append(_make_block(current, infer_table_title(context, policy), policy))

    for line in text.split("\n"):
        trimmed = line.strip()
        table_like = is_table_line(line, policy)

        if not table_like and looks_like_heading(trimmed, policy):
            headings.setdefault(trimmed, None)

        if table_like:
            if not current:
                context = list(lookback)
            current.append(line)
        elif len(current) >= policy.min_table_rows:
            close()
            current = []
        elif len(trimmed) <= policy.min_row_chars:
            current = []

        if trimmed:
            lookback.append(trimmed)

    if len(current) >= policy.min_table_rows:
        close()

    return TableExtraction(tables=tuple(tables), headings=tuple(headings))
