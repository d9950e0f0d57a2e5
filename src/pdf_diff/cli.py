"""
pdf_diff.cli

Command-line entry point: compare two PDFs, log a summary, save HTML and JSON
reports.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from datetime import datetime
from typing import List, Optional

from diff_utils.env import get_settings, parse_keywords
from diff_utils.extractor import BACKENDS, ExtractionError
from diff_utils.models import Verdict
from diff_utils.report import format_console_summary, render_html_report, write_json_report

from .engine import compare_pdfs

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SIGNIFICANT = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compare two PDF documents and report discrepancies")
    parser.add_argument("pdf_a", nargs="?", help="Path to first PDF (default: $PDF1_PATH)")
    parser.add_argument("pdf_b", nargs="?", help="Path to second PDF (default: $PDF2_PATH)")
    parser.add_argument("--out-dir", dest="out_dir", help="Report directory (default: $REPORT_DIR)")
    parser.add_argument("--backend", choices=sorted(BACKENDS), help="Text extraction backend")
    parser.add_argument("--keywords", help="Comma-separated expected table names")
    parser.add_argument(
        "--fail-on-diff",
        action="store_true",
        help="Exit with status 1 when the verdict is SIGNIFICANT_DIFFERENCES",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    pdf_a = args.pdf_a or settings.pdf_a
    pdf_b = args.pdf_b or settings.pdf_b
    if not pdf_a or not pdf_b:
        logger.error("Two PDF paths are required (arguments or PDF1_PATH/PDF2_PATH)")
        return EXIT_USAGE
    for label, path in (("PDF 1", pdf_a), ("PDF 2", pdf_b)):
        if not os.path.isfile(path):
            logger.error("%s not found: %s", label, path)
            return EXIT_USAGE

    keywords = parse_keywords(args.keywords) if args.keywords else list(settings.keywords)
    out_dir = args.out_dir or settings.report_dir

    backend = args.backend or settings.backend
    if backend not in BACKENDS:
        logger.error("Unknown extraction backend %r (choose from %s)", backend, ", ".join(sorted(BACKENDS)))
        return EXIT_USAGE

    start = time.perf_counter()
    try:
        report = compare_pdfs(pdf_a, pdf_b, backend=backend, keywords=keywords)
    except ExtractionError as e:
        logger.error("%s", e)
        return EXIT_USAGE
    logger.info("Comparison completed in %.2fs", time.perf_counter() - start)

    for line in format_console_summary(report):
        logger.info("%s", line)

    stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    base = os.path.join(out_dir, f"PDF_Comparison_Report_{stamp}")
    render_html_report(report, base + ".html")
    write_json_report(report, base + ".json")
    logger.info("Reports written to %s.{html,json}", base)

    if (args.fail_on_diff or settings.fail_on_diff) and report.verdict is Verdict.SIGNIFICANT_DIFFERENCES:
        logger.error("Documents have significant differences (%d found)", report.total_differences)
        return EXIT_SIGNIFICANT
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
