"""
diff_utils.models

Immutable result types produced by one comparison run.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Severity(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    INFO = "INFO"


class DifferenceKind(str, Enum):
    PAGE_MISSING = "PAGE_MISSING"
    TEXT_MISMATCH = "TEXT_MISMATCH"
    TABLE_MISMATCH = "TABLE_MISMATCH"
    TABLE_PARTIAL_MATCH = "TABLE_PARTIAL_MATCH"
    TABLE_MISSING = "TABLE_MISSING"


class MatchKind(str, Enum):
    PAGE_MATCH = "PAGE_MATCH"
    TABLE_MATCH = "TABLE_MATCH"


class Verdict(str, Enum):
    IDENTICAL = "IDENTICAL"
    MOSTLY_SIMILAR = "MOSTLY_SIMILAR"
    SIGNIFICANT_DIFFERENCES = "SIGNIFICANT_DIFFERENCES"


class TableStatus(str, Enum):
    MATCH = "MATCH"
    PARTIAL = "PARTIAL"
    MISSING_IN_B = "MISSING_IN_B"
    MISSING_IN_A = "MISSING_IN_A"


class ExpectedStatus(str, Enum):
    FOUND = "FOUND"
    POSSIBLE_MATCH = "POSSIBLE_MATCH"
    MISSING = "MISSING"


@dataclass(frozen=True)
class DocumentText:
    """Plain text of one document; pages are separated by form feeds."""

    path: str
    text: str
    page_count: int


@dataclass(frozen=True)
class TableBlock:
    content: str
    preview: str
    row_count: int
    title: Optional[str] = None


@dataclass(frozen=True)
class TableExtraction:
    tables: Tuple[TableBlock, ...] = ()
    headings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Difference:
    kind: DifferenceKind
    severity: Severity
    description: str = ""
    page: Optional[int] = None
    line: Optional[int] = None
    location: Optional[str] = None
    table: Optional[str] = None
    value_a: Optional[str] = None
    value_b: Optional[str] = None
    content_a: Optional[str] = None
    content_b: Optional[str] = None

    @property
    def where(self) -> str:
        """Best human-readable location for tables and console output."""
        if self.location:
            return self.location
        if self.table:
            return self.table
        if self.page is not None:
            return f"Page {self.page}"
        return "-"


@dataclass(frozen=True)
class Match:
    kind: MatchKind
    description: str
    page: Optional[int] = None
    table: Optional[str] = None
    similarity: Optional[float] = None


@dataclass(frozen=True)
class TableOutcome:
    name: str
    status: TableStatus
    similarity: Optional[float] = None
    matched_with: Optional[str] = None


@dataclass(frozen=True)
class ExpectedTableCheck:
    name: str
    status: ExpectedStatus
    matched_with: Optional[str] = None
    similarity: float = 0.0


@dataclass(frozen=True)
class ComparisonStats:
    total_pages_a: int = 0
    total_pages_b: int = 0
    tables_found_a: int = 0
    tables_found_b: int = 0
    table_matches: int = 0
    table_mismatches: int = 0
    text_matches: int = 0
    text_mismatches: int = 0


@dataclass(frozen=True)
class ComparisonReport:
    generated_at: str
    verdict: Verdict
    stats: ComparisonStats
    differences: Tuple[Difference, ...] = ()
    matches: Tuple[Match, ...] = ()
    tables: Tuple[TableOutcome, ...] = ()
    expected_tables: Tuple[ExpectedTableCheck, ...] = ()
    headings: Tuple[str, ...] = ()
    file_a: Optional[str] = None
    file_b: Optional[str] = None

    @property
    def total_differences(self) -> int:
        return len(self.differences)

    @property
    def total_matches(self) -> int:
        return len(self.matches)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable view of the report."""
        return {
            "summary": {
                "timestamp": self.generated_at,
                "total_differences": self.total_differences,
                "total_matches": self.total_matches,
                "stats": asdict(self.stats),
            },
            "differences": [_plain(asdict(d)) for d in self.differences],
            "matches": [_plain(asdict(m)) for m in self.matches],
            "tables": [_plain(asdict(t)) for t in self.tables],
            "expected_tables": [_plain(asdict(c), keep_none=True) for c in self.expected_tables],
            "headings": list(self.headings),
            "verdict": self.verdict.value,
            "meta": {"file_a": self.file_a, "file_b": self.file_b},
        }


def _plain(d: Dict[str, Any], keep_none: bool = False) -> Dict[str, Any]:
    out = {}
    for k, v in d.items():
        if v is None and not keep_none:
            continue
        out[k] = v.value if isinstance(v, Enum) else v
    return out
