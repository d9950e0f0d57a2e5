"""
Environment loading helpers.

Settings come from, in order of precedence:
- Existing environment variables
- .env.local then .env files in the working directory (never overriding the above)

Recognised variables:
- PDF1_PATH / PDF2_PATH: default documents to compare
- EXPECTED_TABLE_KEYWORDS: comma-separated table names that must be present
- REPORT_DIR: where HTML/JSON reports are written
- FAIL_ON_DIFF: "true" to exit non-zero on significant differences
- PDF_TEXT_BACKEND: "pymupdf" (default) or "pdfplumber"
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_EXPECTED_TABLES: Tuple[str, ...] = (
    "State Coverage Summary",
    "Classification of Operations",
    "WC 00 03 13",
    "Waiver of Our Right to Recover from Others Endorsement",
)
DEFAULT_REPORT_DIR = os.path.join("test-results", "pdf-comparison")


@dataclass(frozen=True)
class Settings:
    pdf_a: Optional[str]
    pdf_b: Optional[str]
    report_dir: str
    fail_on_diff: bool
    backend: str
    keywords: Tuple[str, ...]


def load_env_files(root: Optional[Path] = None) -> None:
    root = root or Path.cwd()
    for fname in (".env.local", ".env"):
        fpath = root / fname
        if fpath.exists():
            load_dotenv(dotenv_path=str(fpath), override=False)


def parse_keywords(raw: Optional[str]) -> List[str]:
    return [k.strip() for k in (raw or "").split(",") if k.strip()]


def expected_table_keywords() -> List[str]:
    """Return EXPECTED_TABLE_KEYWORDS, or the built-in list when unset or empty."""
    keywords = parse_keywords(os.getenv("EXPECTED_TABLE_KEYWORDS"))
    return keywords or list(DEFAULT_EXPECTED_TABLES)


def get_settings(root: Optional[Path] = None) -> Settings:
    load_env_files(root)
    return Settings(
        pdf_a=os.getenv("PDF1_PATH") or None,
        pdf_b=os.getenv("PDF2_PATH") or None,
        report_dir=os.getenv("REPORT_DIR") or DEFAULT_REPORT_DIR,
        fail_on_diff=os.getenv("FAIL_ON_DIFF", "").strip().lower() == "true",
        backend=os.getenv("PDF_TEXT_BACKEND") or "pymupdf",
        keywords=tuple(expected_table_keywords()),
    )
