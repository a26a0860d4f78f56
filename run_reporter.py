#!/usr/bin/env python3
"""
Section 2 Advisor CLI

Parses a Lynis report and asks Gemini for a prioritized remediation plan.

Usage:
    python run_reporter.py <report_path> [--output <markdown_file>]
    python run_reporter.py --set-key <api_key>
    python run_reporter.py --clear-key
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

from src.section1_ingestion import Normalizer, ReportReadError
from src.section2_advisor.config import CredentialStore
from src.section2_advisor.exceptions import AdvisorError
from src.section2_advisor.reporter import Reporter


def analyze_file(report_file: str, store: CredentialStore, output_file: Optional[Path] = None) -> bool:
    """Analyze a single report file."""
    try:
        report = Normalizer().ingest(report_file)
    except ReportReadError as e:
        print(f"❌ {e}")
        return False

    if not report.has_findings:
        print("✓ No warnings or suggestions found in this report.")
        return True

    print(f"🔎 {report.warning_count} warnings, {report.suggestion_count} suggestions")
    print("Analyzing...")

    reporter = Reporter(api_key=store.load())

    try:
        result = asyncio.run(reporter.analyze(report))
    except AdvisorError as e:
        print(f"❌ {e}")
        return False

    if result.is_empty:
        print("⚠️ The model returned no text.")
        return True

    if output_file:
        output_file.write_text(result.markdown, encoding="utf-8")
        print(f"Saved analysis to: {output_file}")
    else:
        print()
        print(result.markdown)

    return True


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    store = CredentialStore()

    if sys.argv[1] == "--set-key":
        key = sys.argv[2] if len(sys.argv) > 2 else ""
        if store.save(key):
            print(f"✓ API key saved to {store.path}")
        else:
            print("API key removed.")
        sys.exit(0)

    if sys.argv[1] == "--clear-key":
        store.clear()
        print("API key removed.")
        sys.exit(0)

    output_file = None
    if "--output" in sys.argv:
        idx = sys.argv.index("--output")
        if idx + 1 < len(sys.argv):
            output_file = Path(sys.argv[idx + 1])

    success = analyze_file(sys.argv[1], store, output_file)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
