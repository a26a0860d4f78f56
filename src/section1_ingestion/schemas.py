"""
Pydantic schemas for Section 1: Ingestion Pipeline

These models define the structure of parsed Lynis reports that are
passed to Section 2 (AI Advisor).
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field


# Flat key -> value mapping produced by the report parser.
# Array keys ("suggestion[]") collapse into ordered lists.
ParsedReport = dict[str, Union[str, list[str]]]


class FindingKind(str, Enum):
    """Which report array a finding came from."""
    WARNING = "warning"
    SUGGESTION = "suggestion"


class Finding(BaseModel):
    """
    A single decoded warning or suggestion entry.

    Decoded from the pipe-delimited form `id|message|severity|details`.
    The severity field is not surfaced.
    """
    id: str = Field(default="N/A", description="Lynis test identifier, e.g. SSH-7408")
    message: str = Field(default="No message.", description="Human readable finding text")
    details: str = Field(default="", description="Extra detail text, empty when not provided")


class ParserMetadata(BaseModel):
    """Metadata about the parsing process."""
    parser_name: str = Field(..., description="Name of the parser used")
    parser_version: str = Field(default="1.0.0", description="Version of the parser")
    processed_at: datetime = Field(default_factory=datetime.utcnow, description="When processing occurred")
    processing_time_ms: Optional[int] = Field(None, description="Time taken to process in milliseconds")
    line_count: int = Field(default=0, description="Number of lines in the input")
    skipped_lines: int = Field(default=0, description="Blank, comment, header or malformed lines")


class IngestedReport(BaseModel):
    """
    The main output of Section 1: a parsed Lynis report.

    Holds the raw key/value mapping alongside the decoded warnings and
    suggestions so callers do not need to re-decode them for display.
    """
    # Source information
    source_file: str = Field(..., description="Original filename")
    source_hash: Optional[str] = Field(None, description="SHA-256 hash of the report text")

    # Host identification (copied from the report scalars)
    hostname: Optional[str] = Field(None, description="Value of the 'hostname' key")
    os_fullname: Optional[str] = Field(None, description="Value of the 'os_fullname' key")

    # The parsed mapping and decoded findings
    data: ParsedReport = Field(default_factory=dict, description="Flat key/value mapping")
    warnings: list[Finding] = Field(default_factory=list, description="Decoded warning[] entries")
    suggestions: list[Finding] = Field(default_factory=list, description="Decoded suggestion[] entries")

    # Summary statistics
    warning_count: int = Field(default=0, description="Number of warnings")
    suggestion_count: int = Field(default=0, description="Number of suggestions")

    # Processing metadata
    metadata: ParserMetadata = Field(..., description="Information about the parsing process")

    def model_post_init(self, __context) -> None:
        """Calculate summary statistics after initialization."""
        self.warning_count = len(self.warnings)
        self.suggestion_count = len(self.suggestions)

    @property
    def has_findings(self) -> bool:
        return bool(self.warnings or self.suggestions)

    def raw_entries(self, kind: FindingKind) -> list[str]:
        """
        Return the undecoded entries for one finding array.

        A scalar stored under the same key (e.g. a stray `warning=...` line)
        is not an array and yields no entries.
        """
        value = self.data.get(kind.value, [])
        return list(value) if isinstance(value, list) else []
