from __future__ import annotations

import json

from diff_utils.env import DEFAULT_EXPECTED_TABLES, expected_table_keywords, get_settings, parse_keywords
from diff_utils.extractor import document_from_text
from diff_utils.report import format_console_summary, render_html_report, write_json_report
from pdf_diff import compare_texts

TABLE = """Premium Schedule
  Item <A>      100      200
  Item B        300      400
  Item C        500      600
"""


def _report(a=TABLE, b=TABLE, keywords=("Premium Schedule",)):
    return compare_texts(document_from_text(a, "a.pdf"), document_from_text(b, "b.pdf"), keywords=list(keywords))


def test_render_html_report_writes_file(tmp_path):
    out = tmp_path / "nested" / "report.html"

    html = render_html_report(_report(), str(out))

    assert out.read_text(encoding="utf-8") == html
    assert 'class="verdict IDENTICAL"' in html
    assert "Table Outcomes (1)" in html
    assert "Expected Headers (1)" in html


def test_render_html_escapes_document_text():
    changed = TABLE.replace("Item <A>", "Item <script>")

    html = render_html_report(_report(b=changed))

    assert "&lt;script&gt;" in html
    assert "<script>" not in html
    assert 'class="severity-MEDIUM"' in html


def test_write_json_report(tmp_path):
    changed = TABLE + "\fSecond page"
    out = write_json_report(_report(a=changed), str(tmp_path / "report.json"))

    data = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
    assert out == str(tmp_path / "report.json")
    assert data["verdict"] == "MOSTLY_SIMILAR"
    assert data["summary"]["total_differences"] == 1
    assert data["summary"]["stats"]["total_pages_a"] == 2
    assert data["differences"][0]["kind"] == "PAGE_MISSING"
    assert data["differences"][0]["severity"] == "HIGH"
    assert data["expected_tables"][0]["status"] == "FOUND"
    assert data["meta"] == {"file_a": "a.pdf", "file_b": "b.pdf"}


def test_console_summary_limits_differences():
    a = "\f".join(f"page {i}" for i in range(1, 9))
    report = _report(a=a, b="page 1", keywords=())

    lines = format_console_summary(report, limit=5)

    assert lines[0] == "Verdict: SIGNIFICANT DIFFERENCES"
    assert "... and 2 more differences" in lines


def test_parse_keywords():
    assert parse_keywords(" A , ,B ,") == ["A", "B"]
    assert parse_keywords(None) == []


def test_expected_keywords_default(clean_env):
    assert expected_table_keywords() == list(DEFAULT_EXPECTED_TABLES)
    clean_env.setenv("EXPECTED_TABLE_KEYWORDS", " , ")
    assert expected_table_keywords() == list(DEFAULT_EXPECTED_TABLES)


def test_settings_from_dotenv(tmp_path, clean_env):
    (tmp_path / ".env").write_text("FAIL_ON_DIFF=true\nREPORT_DIR=out/reports\nPDF1_PATH=a.pdf\n", encoding="utf-8")
    clean_env.setenv("PDF1_PATH", "from-env.pdf")

    settings = get_settings(root=tmp_path)

    assert settings.fail_on_diff is True
    assert settings.report_dir == "out/reports"
    assert settings.pdf_a == "from-env.pdf"
    assert settings.pdf_b is None
    assert settings.backend == "pymupdf"
