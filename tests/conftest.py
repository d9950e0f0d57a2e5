from __future__ import annotations

from pathlib import Path
import sys
from typing import Sequence

import fitz  # PyMuPDF
import pytest

# Ensure src/ is on path
ROOT = Path(__file__).resolve().parents[1]
src_path = ROOT / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


def _make_pdf(path: Path, pages: Sequence[str]) -> Path:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def make_pdf(tmp_path):
    def _factory(name: str, pages: Sequence[str]) -> Path:
        return _make_pdf(tmp_path / name, pages)

    return _factory


@pytest.fixture
def clean_env(monkeypatch):
    """Remove comparison settings from the environment for the duration of a test."""
    names = ("PDF1_PATH", "PDF2_PATH", "EXPECTED_TABLE_KEYWORDS", "REPORT_DIR", "FAIL_ON_DIFF", "PDF_TEXT_BACKEND")
    for name in names:
        # setenv first so teardown also drops values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
