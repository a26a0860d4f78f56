"""
Section 1: Report Ingestion Pipeline

Reads Lynis audit reports (`lynis-report.dat`), parses the key=value
lines into a flat mapping, and decodes the warning/suggestion entries
into structured findings for display and downstream AI analysis.

Example:
    >>> from src.section1_ingestion import ingest_file, Normalizer
    >>>
    >>> # Quick usage
    >>> report = ingest_file("lynis-report.dat")
    >>>
    >>> # Parse and export JSON named after the host
    >>> normalizer = Normalizer(output_dir="data/processed")
    >>> report, path = normalizer.ingest_and_save("lynis-report.dat")
"""

from dotenv import load_dotenv

load_dotenv()

from .schemas import (
    Finding,
    FindingKind,
    IngestedReport,
    ParsedReport,
    ParserMetadata,
)
from .decoder import decode_item, decode_items
from .parsers import LynisReportParser, parse_report
from .normalizer import (
    IngestionError,
    Normalizer,
    ReportReadError,
    export_filename,
    ingest_file,
    ingest_to_json,
    read_report,
)

__all__ = [
    # Schemas
    "Finding",
    "FindingKind",
    "IngestedReport",
    "ParsedReport",
    "ParserMetadata",
    # Parsing and decoding
    "LynisReportParser",
    "parse_report",
    "decode_item",
    "decode_items",
    # Normalizer
    "IngestionError",
    "Normalizer",
    "ReportReadError",
    "export_filename",
    "ingest_file",
    "ingest_to_json",
    "read_report",
]
