"""pdf_diff package

Comparison pipeline for two PDF documents: page diffs, heuristic table
matching, expected-table checks and a verdict.
"""

from diff_utils.models import ComparisonReport, Verdict  # noqa: F401
from diff_utils.policy import DetectionPolicy, MatchPolicy, default_verdict, threshold_verdict  # noqa: F401

from .engine import build_report, compare_pdfs, compare_texts  # noqa: F401

__all__ = [
	"ComparisonReport",
	"DetectionPolicy",
	"MatchPolicy",
	"Verdict",
	"build_report",
	"compare_pdfs",
	"compare_texts",
	"default_verdict",
	"threshold_verdict",
]
