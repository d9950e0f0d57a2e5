"""
diff_utils.policy

Tunable heuristics for table detection, matching and the final verdict.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .models import Verdict


@dataclass(frozen=True)
class DetectionPolicy:
    """Thresholds for spotting table rows and headings in plain text.

    Row and word limits are exclusive (``len > limit``); heading limits are
    inclusive.
    """

    min_gap_spaces: int = 2
    min_row_chars: int = 10
    min_table_rows: int = 3
    lookback_size: int = 4
    heading_min_chars: int = 4
    heading_max_chars: int = 80
    heading_max_words: int = 12
    min_word_chars: int = 2
    preview_rows: int = 3

    def __post_init__(self):
        if self.min_gap_spaces < 1:
            raise ValueError("min_gap_spaces must be >= 1")
        if self.min_table_rows < 1:
            raise ValueError("min_table_rows must be >= 1")
        if self.heading_min_chars > self.heading_max_chars:
            raise ValueError("heading_min_chars must not exceed heading_max_chars")


@dataclass(frozen=True)
class MatchPolicy:
    match_threshold: float = 0.8
    partial_threshold: float = 0.5
    max_line_diffs: int = 10
    max_value_chars: int = 100

    def __post_init__(self):
        if not 0.0 <= self.partial_threshold <= self.match_threshold <= 1.0:
            raise ValueError("thresholds must satisfy 0 <= partial <= match <= 1")
        if self.max_line_diffs < 0:
            raise ValueError("max_line_diffs must be >= 0")


VerdictPolicy = Callable[[int], Verdict]


def threshold_verdict(significant_at: int = 5) -> VerdictPolicy:
    """Build a verdict policy: 0 -> identical, ``significant_at`` or more -> significant."""
    if significant_at < 1:
        raise ValueError("significant_at must be >= 1")

    def _verdict(difference_count: int) -> Verdict:
        if difference_count == 0:
            return Verdict.IDENTICAL
        if difference_count < significant_at:
            return Verdict.MOSTLY_SIMILAR
        return Verdict.SIGNIFICANT_DIFFERENCES

    return _verdict


default_verdict: VerdictPolicy = threshold_verdict(5)
