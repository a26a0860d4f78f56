#!/usr/bin/env python3
"""
Lynis Analyzer - Simple CLI Runner

Parses a Lynis report, lists its warnings and suggestions, and exports the
parsed key/value mapping as JSON.

Usage:
    python run.py <report_path> [--output-dir <path>]
    python run.py /var/log/lynis-report.dat
"""

import sys
from pathlib import Path

from src.section1_ingestion import Normalizer, ReportReadError


def print_findings(title: str, findings, show_details: bool = False) -> None:
    if not findings:
        return
    print(f"\n{title} ({len(findings)})")
    for finding in findings:
        line = f"  [{finding.id}] {finding.message}"
        if show_details and finding.details:
            line += f" ({finding.details})"
        print(line)


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    file_path = sys.argv[1]
    output_dir = Path("data/processed")
    if "--output-dir" in sys.argv:
        idx = sys.argv.index("--output-dir")
        if idx + 1 < len(sys.argv):
            output_dir = Path(sys.argv[idx + 1])

    print(f"Parsing: {file_path}")
    print("-" * 50)

    normalizer = Normalizer(output_dir=output_dir)

    try:
        report, output_path = normalizer.ingest_and_save(file_path)
    except ReportReadError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Source: {report.source_file}")
    print(f"Host: {report.hostname or 'unknown'}")
    print(f"OS: {report.os_fullname or 'unknown'}")
    print(f"Keys: {len(report.data)}")

    if not report.has_findings:
        print("\nNo warnings or suggestions found in this report.")
    print_findings("Warnings", report.warnings)
    print_findings("Suggestions", report.suggestions, show_details=True)

    print("-" * 50)
    print(f"Saved to: {output_path}")


if __name__ == "__main__":
    main()
