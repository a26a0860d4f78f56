"""
Normalizer: Orchestrates reading, parsing and decoding of Lynis reports.

This module ties together the parser and the finding decoder and provides
a clean interface for ingesting files and producing IngestedReport objects.
"""

from pathlib import Path
from typing import Optional, Type
import json
import re

from .decoder import decode_items
from .schemas import FindingKind, IngestedReport, ParsedReport
from .parsers.base_parser import BaseParser
from .parsers.lynis_parser import LynisReportParser


UNKNOWN_HOST = "unknown-host"
UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class IngestionError(Exception):
    """Base class for Section 1 errors."""


class ReportReadError(IngestionError):
    """The report file could not be read."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Error reading file {self.path}: {reason}")


def read_report(file_path: str | Path, encoding: str = "utf-8") -> str:
    """
    Read a report file and return its text.

    Raises:
        ReportReadError: If the file is missing or cannot be decoded
    """
    file_path = Path(file_path)
    try:
        return file_path.read_text(encoding=encoding)
    except FileNotFoundError:
        raise ReportReadError(file_path, "file not found")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReportReadError(file_path, str(exc)) from exc


def _scalar(data: ParsedReport, key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _array(data: ParsedReport, key: str) -> list[str]:
    value = data.get(key)
    return list(value) if isinstance(value, list) else []


def export_filename(data: ParsedReport) -> str:
    """Name of the exported JSON artifact for a parsed report."""
    hostname = UNSAFE_FILENAME_CHARS.sub("_", _scalar(data, "hostname") or "")
    if hostname in ("", ".", ".."):
        hostname = UNKNOWN_HOST
    return f"lynis-report-{hostname}.json"


class Normalizer:
    """
    Main entry point for the ingestion pipeline.

    Takes raw report files (or text) and produces IngestedReport objects
    whose `data` mapping can be exported to JSON.

    Args:
        output_dir: Optional directory to save exported JSON reports
        parser_class: Parser to use for report text
    """

    def __init__(
        self,
        output_dir: Optional[str | Path] = None,
        parser_class: Type[BaseParser] = LynisReportParser,
    ):
        self.output_dir = Path(output_dir) if output_dir else None
        if self.output_dir:
            self.output_dir.mkdir(parents=True, exist_ok=True)

        self.parser_class = parser_class

    def ingest_text(self, text: str, source_file: str = "<memory>") -> IngestedReport:
        """
        Parse report text that has already been read.

        Args:
            text: Full report contents
            source_file: Name to record as the report's origin

        Returns:
            IngestedReport with parsed data and decoded findings
        """
        parser = self.parser_class()
        data, metadata = parser.run(text)

        return IngestedReport(
            source_file=source_file,
            source_hash=parser.get_text_hash(text),
            hostname=_scalar(data, "hostname"),
            os_fullname=_scalar(data, "os_fullname"),
            data=data,
            warnings=decode_items(_array(data, FindingKind.WARNING.value)),
            suggestions=decode_items(_array(data, FindingKind.SUGGESTION.value)),
            metadata=metadata,
        )

    def ingest(self, file_path: str | Path) -> IngestedReport:
        """
        Read and parse a report file.

        Raises:
            ReportReadError: If the file cannot be read
        """
        file_path = Path(file_path)
        text = read_report(file_path)
        return self.ingest_text(text, source_file=file_path.name)

    def export_json(self, report: IngestedReport, output_dir: Optional[str | Path] = None) -> Path:
        """
        Write the report's key/value mapping as pretty-printed JSON.

        The file is named after the report's hostname.

        Raises:
            ValueError: If no output directory is configured or given
        """
        output_dir = Path(output_dir) if output_dir else self.output_dir
        if not output_dir:
            raise ValueError("No output directory configured. Pass output_dir to constructor.")
        output_dir.mkdir(parents=True, exist_ok=True)

        output_file = output_dir / export_filename(report.data)
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(report.data, f, indent=2)

        return output_file

    def ingest_and_save(self, file_path: str | Path) -> tuple[IngestedReport, Path]:
        """
        Ingest a file and export its JSON mapping.

        Returns:
            Tuple of (IngestedReport, path to saved JSON file)
        """
        report = self.ingest(file_path)
        return report, self.export_json(report)


def ingest_file(file_path: str | Path) -> IngestedReport:
    """
    Convenience function to ingest a single file.

    Example:
        >>> report = ingest_file("lynis-report.dat")
        >>> print(report.warning_count)
    """
    normalizer = Normalizer()
    return normalizer.ingest(file_path)


def ingest_to_json(file_path: str | Path, output_path: Optional[str | Path] = None) -> str:
    """
    Ingest a file and return the pretty-printed JSON mapping.

    Args:
        file_path: Path to the report to ingest
        output_path: Optional path to save the JSON file
    """
    report = ingest_file(file_path)
    json_str = json.dumps(report.data, indent=2)

    if output_path:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(json_str)

    return json_str
