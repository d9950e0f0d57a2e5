"""
Report generation utilities:
- render_html_report(report, out_path) renders a Jinja2 template with summary stat boxes,
  a colour-coded verdict banner, table outcomes, expected headers, differences and matches
- write_json_report(report, out_path) saves report.to_dict() as pretty JSON
- format_console_summary(report) returns the short text summary used by the CLI
"""

from __future__ import annotations

import json
import os
from typing import List, Optional

from jinja2 import Environment, select_autoescape

from .models import ComparisonReport

DEFAULT_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8" />
<title>PDF Comparison Report</title>
<style>
body { font-family: Arial, sans-serif; margin: 20px; background: #f5f5f5; }
.container { max-width: 1200px; margin: 0 auto; background: white; padding: 30px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
h1 { color: #1976d2; border-bottom: 3px solid #1976d2; padding-bottom: 10px; }
h2 { color: #333; margin-top: 30px; }
.summary { background: #e3f2fd; padding: 20px; border-radius: 5px; margin: 20px 0; }
.badge { display: inline-block; padding: 4px 10px; border-radius: 6px; background: #e5e7eb; margin-right: 6px; font-size: 14px; }
.stats { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 15px; margin: 20px 0; }
.stat-box { background: white; padding: 15px; border-radius: 5px; border-left: 4px solid #2196F3; }
.stat-box h3 { margin: 0 0 10px 0; color: #666; font-size: 14px; }
.stat-box .value { font-size: 28px; font-weight: bold; color: #1976d2; }
.verdict { padding: 15px; border-radius: 5px; font-weight: bold; text-align: center; margin: 20px 0; font-size: 18px; }
.verdict.IDENTICAL { background: #4CAF50; color: white; }
.verdict.MOSTLY_SIMILAR { background: #FFC107; color: #333; }
.verdict.SIGNIFICANT_DIFFERENCES { background: #f44336; color: white; }
table { width: 100%; border-collapse: collapse; margin: 20px 0; }
th { background: #2196F3; color: white; padding: 12px; text-align: left; }
td { padding: 10px; border-bottom: 1px solid #ddd; vertical-align: top; }
.severity-HIGH { color: #f44336; font-weight: bold; }
.severity-MEDIUM { color: #FF9800; }
.severity-INFO { color: #2196F3; }
.status-FOUND, .status-MATCH { color: #4CAF50; }
.status-POSSIBLE_MATCH, .status-PARTIAL { color: #FF9800; }
.status-MISSING, .status-MISSING_IN_A, .status-MISSING_IN_B { color: #f44336; }
.match { color: #4CAF50; }
.code { background: #f5f5f5; padding: 10px; border-radius: 3px; font-family: monospace; white-space: pre-wrap; margin: 5px 0; }
</style>
</head>
<body>
<div class="container">
<h1>PDF Comparison Report</h1>
<p>
  <span class="badge">A: {{ report.file_a or 'N/A' }}</span>
  <span class="badge">B: {{ report.file_b or 'N/A' }}</span>
</p>
<div class="summary">
  <p><strong>Generated:</strong> {{ report.generated_at }}</p>
  <p><strong>Total Differences:</strong> {{ report.total_differences }}</p>
  <p><strong>Total Matches:</strong> {{ report.total_matches }}</p>
</div>

<div class="verdict {{ report.verdict.value }}">{{ report.verdict.value|replace('_', ' ') }}</div>

<div class="stats">
{% for label, value in stat_boxes %}
  <div class="stat-box"><h3>{{ label }}</h3><div class="value">{{ value }}</div></div>
{% endfor %}
</div>

{% if report.tables %}
<h2>Table Outcomes ({{ report.tables|length }})</h2>
<table>
  <thead><tr><th>Table Name</th><th>Status</th><th>Matched With</th><th>Similarity</th></tr></thead>
  <tbody>
  {% for t in report.tables %}
    <tr>
      <td>{{ t.name }}</td>
      <td class="status-{{ t.status.value }}">{{ t.status.value|replace('_', ' ') }}</td>
      <td>{{ t.matched_with or '-' }}</td>
      <td>{{ '%.1f%%'|format(t.similarity * 100) if t.similarity else '-' }}</td>
    </tr>
  {% endfor %}
  </tbody>
</table>
{% endif %}

{% if report.expected_tables %}
<h2>Expected Headers ({{ report.expected_tables|length }})</h2>
<table>
  <thead><tr><th>Expected Name</th><th>Status</th><th>Matched With</th><th>Similarity</th></tr></thead>
  <tbody>
  {% for c in report.expected_tables %}
    <tr>
      <td>{{ c.name }}</td>
      <td class="status-{{ c.status.value }}">{{ c.status.value|replace('_', ' ') }}</td>
      <td>{{ c.matched_with or '-' }}</td>
      <td>{{ '%.1f%%'|format(c.similarity * 100) if c.similarity else '-' }}</td>
    </tr>
  {% endfor %}
  </tbody>
</table>
{% endif %}

{% if report.differences %}
<h2>Differences Found ({{ report.differences|length }})</h2>
<table>
  <thead><tr><th>Type</th><th>Location</th><th>Description</th><th>Severity</th></tr></thead>
  <tbody>
  {% for d in report.differences %}
    <tr>
      <td>{{ d.kind.value|replace('_', ' ') }}</td>
      <td>{{ d.where }}</td>
      <td>
        {{ d.description }}
        {% if d.value_a is not none %}<div class="code"><strong>Document A:</strong> {{ d.value_a }}</div>{% endif %}
        {% if d.value_b is not none %}<div class="code"><strong>Document B:</strong> {{ d.value_b }}</div>{% endif %}
        {% if d.content_a %}<div class="code"><strong>Document A content:</strong>
{{ d.content_a }}</div>{% endif %}
        {% if d.content_b %}<div class="code"><strong>Document B content:</strong>
{{ d.content_b }}</div>{% endif %}
      </td>
      <td class="severity-{{ d.severity.value }}">{{ d.severity.value }}</td>
    </tr>
  {% endfor %}
  </tbody>
</table>
{% endif %}

{% if report.matches %}
<h2>Matches Found ({{ report.matches|length }})</h2>
<table>
  <thead><tr><th>Type</th><th>Location</th><th>Description</th></tr></thead>
  <tbody>
  {% for m in report.matches %}
    <tr class="match">
      <td>{{ m.kind.value|replace('_', ' ') }}</td>
      <td>{{ m.table or ('Page %d'|format(m.page) if m.page else '-') }}</td>
      <td>{{ m.description }}</td>
    </tr>
  {% endfor %}
  </tbody>
</table>
{% endif %}

{% if report.headings %}
<h2>All Detected Headings ({{ report.headings|length }})</h2>
<table>
  <thead><tr><th>Heading Text</th></tr></thead>
  <tbody>
  {% for h in report.headings %}<tr><td>{{ h }}</td></tr>{% endfor %}
  </tbody>
</table>
{% endif %}
</div>
</body>
</html>
"""

_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))


def _stat_boxes(report: ComparisonReport):
    s = report.stats
    return [
        ("Pages (Document A)", s.total_pages_a),
        ("Pages (Document B)", s.total_pages_b),
        ("Tables Found (Document A)", s.tables_found_a),
        ("Tables Found (Document B)", s.tables_found_b),
        ("Table Matches", s.table_matches),
        ("Table Mismatches", s.table_mismatches),
        ("Text Matches", s.text_matches),
        ("Text Mismatches", s.text_mismatches),
    ]


def _write(text: str, out_path: str) -> None:
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(text)


def render_html_report(
    report: ComparisonReport,
    out_path: Optional[str] = None,
    template: str = DEFAULT_TEMPLATE,
) -> str:
    """Render an HTML string from a comparison report; if out_path provided, write to disk."""
    html = _env.from_string(template).render(report=report, stat_boxes=_stat_boxes(report))
    if out_path:
        _write(html, out_path)
    return html


def write_json_report(report: ComparisonReport, out_path: str) -> str:
    _write(json.dumps(report.to_dict(), indent=2, ensure_ascii=False), out_path)
    return out_path


def format_console_summary(report: ComparisonReport, limit: int = 5) -> List[str]:
    s = report.stats
    lines = [
        f"Verdict: {report.verdict.value.replace('_', ' ')}",
        f"Total Differences: {report.total_differences}",
        f"Total Matches: {report.total_matches}",
        f"Pages: {s.total_pages_a} vs {s.total_pages_b}",
        f"Tables: {s.tables_found_a} vs {s.tables_found_b} "
        f"(matches {s.table_matches}, mismatches {s.table_mismatches})",
    ]

    for c in report.expected_tables:
        lines.append(f"Expected table '{c.name}': {c.status.value} ({c.similarity * 100:.1f}%)")

    for idx, d in enumerate(report.differences[:limit], start=1):
        lines.append(f"{idx}. [{d.severity.value}] {d.kind.value.replace('_', ' ')} @ {d.where}: {d.description}")
        if d.value_a is not None:
            lines.append(f"   A: {d.value_a[:80]}")
        if d.value_b is not None:
            lines.append(f"   B: {d.value_b[:80]}")
    if report.total_differences > limit:
        lines.append(f"... and {report.total_differences - limit} more differences")

    for m in report.matches[:limit]:
        lines.append(f"+ {m.kind.value.replace('_', ' ')}: {m.description}")
    if report.total_matches > limit:
        lines.append(f"... and {report.total_matches - limit} more matches")
    return lines
