"""
Parsers for audit report formats.

Each parser turns report text into a flat key/value mapping
(see `ParsedReport`). Reading the file is left to the caller.
"""

from .base_parser import BaseParser
from .lynis_parser import LynisReportParser, parse_report

__all__ = [
    "BaseParser",
    "LynisReportParser",
    "parse_report",
]
