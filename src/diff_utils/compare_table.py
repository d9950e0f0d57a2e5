"""
Table matching between two documents.

- similarity(a, b): Jaccard index of lowercased word sets (short words ignored)
- match_tables(tables_a, tables_b): greedy best-match per A table, in A order
  - above the match threshold the B table is consumed
  - a partial match does not consume, so one B table may back several partials
  - leftovers on either side are reported as TABLE_MISSING
- check_expected_tables(keywords, candidates): fuzzy lookup of required table names
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from .models import (
    Difference,
    DifferenceKind,
    ExpectedStatus,
    ExpectedTableCheck,
    Match,
    MatchKind,
    Severity,
    TableBlock,
    TableOutcome,
    TableStatus,
)
from .policy import DetectionPolicy, MatchPolicy


@dataclass
class TableComparison:
    differences: List[Difference] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    outcomes: List[TableOutcome] = field(default_factory=list)
    table_matches: int = 0
    table_mismatches: int = 0


def _word_set(text: str, min_chars: int) -> Set[str]:
    return {w for w in text.lower().split() if len(w) > min_chars}


def similarity(a: str, b: str, policy: Optional[DetectionPolicy] = None) -> float:
    policy = policy or DetectionPolicy()
    words_a = _word_set(a, policy.min_word_chars)
    words_b = _word_set(b, policy.min_word_chars)
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def table_name(table: TableBlock, index: int) -> str:
    return table.title or f"Table {index + 1}"


def match_tables(
    tables_a: Sequence[TableBlock],
    tables_b: Sequence[TableBlock],
    detection: Optional[DetectionPolicy] = None,
    matching: Optional[MatchPolicy] = None,
) -> TableComparison:
    detection = detection or DetectionPolicy()
    matching = matching or MatchPolicy()
    result = TableComparison()
    consumed: Set[int] = set()

    for i, table_a in enumerate(tables_a):
        best: Optional[int] = None
        best_score = 0.0
        for j, table_b in enumerate(tables_b):
            if j in consumed:
                continue
            score = similarity(table_a.content, table_b.content, detection)
            if score > best_score:
                best, best_score = j, score

        name_a = table_name(table_a, i)
        name_b = table_name(tables_b[best], best) if best is not None else None

        if best is not None and best_score > matching.match_threshold:
            consumed.add(best)
            result.matches.append(
                Match(
                    kind=MatchKind.TABLE_MATCH,
                    table=name_a,
                    similarity=best_score,
                    description=f"{name_a} matches {name_b} ({best_score * 100:.1f}% similarity)",
                )
            )
            result.outcomes.append(TableOutcome(name_a, TableStatus.MATCH, best_score, name_b))
            result.table_matches += 1
        elif best is not None and best_score > matching.partial_threshold:
            result.differences.append(
                Difference(
                    kind=DifferenceKind.TABLE_PARTIAL_MATCH,
                    severity=Severity.MEDIUM,
                    table=name_a,
                    description=f"{name_a} partially matches {name_b} ({best_score * 100:.1f}% similarity)",
                    content_a=table_a.preview,
                    content_b=tables_b[best].preview,
                )
            )
            result.outcomes.append(TableOutcome(name_a, TableStatus.PARTIAL, best_score, name_b))
            result.table_mismatches += 1
        else:
            result.differences.append(
                Difference(
                    kind=DifferenceKind.TABLE_MISSING,
                    severity=Severity.HIGH,
                    table=name_a,
                    location="Document B",
                    description=f"{name_a} from document A has no match in document B",
                    content_a=table_a.preview,
                )
            )
            result.outcomes.append(TableOutcome(name_a, TableStatus.MISSING_IN_B))
            result.table_mismatches += 1

    for j, table_b in enumerate(tables_b):
        if j in consumed:
            continue
        name_b = table_name(table_b, j)
        result.differences.append(
            Difference(
                kind=DifferenceKind.TABLE_MISSING,
                severity=Severity.HIGH,
                table=name_b,
                location="Document A",
                description=f"{name_b} from document B has no match in document A",
                content_b=table_b.preview,
            )
        )
        result.outcomes.append(TableOutcome(name_b, TableStatus.MISSING_IN_A))
        result.table_mismatches += 1

    return result


def check_expected_tables(
    keywords: Sequence[str],
    candidates: Sequence[str],
    detection: Optional[DetectionPolicy] = None,
    matching: Optional[MatchPolicy] = None,
) -> List[ExpectedTableCheck]:
    """Look each expected table name up among detected titles and headings."""
    detection = detection or DetectionPolicy()
    matching = matching or MatchPolicy()
    checks: List[ExpectedTableCheck] = []
    for name in keywords:
        best: Optional[str] = None
        best_score = 0.0
        for candidate in candidates:
            score = similarity(name, candidate or "", detection)
            if score > best_score:
                best, best_score = candidate, score

        if best_score > matching.match_threshold:
            status = ExpectedStatus.FOUND
        elif best_score > matching.partial_threshold:
            status = ExpectedStatus.POSSIBLE_MATCH
        else:
            status = ExpectedStatus.MISSING
        checks.append(ExpectedTableCheck(name=name, status=status, matched_with=best, similarity=best_score))
    return checks
