"""
Base parser class that all report parsers inherit from.
"""

from abc import ABC, abstractmethod
import hashlib
import time

from ..schemas import ParsedReport, ParserMetadata


class BaseParser(ABC):
    """
    Abstract base class for all report parsers.

    Parsers work on text that has already been read. Acquiring that text
    (from disk, an upload, stdin) is the caller's job, so a parser can be
    reused for any delivery mechanism.
    """

    # Override in subclasses
    PARSER_NAME: str = "base"
    PARSER_VERSION: str = "1.0.0"

    def __init__(self):
        self.line_count = 0
        self.skipped_lines = 0

    @staticmethod
    def get_text_hash(text: str) -> str:
        """Calculate SHA-256 hash of the report text for deduplication."""
        return hashlib.sha256(text.encode("utf-8")).hexdigest()

    @abstractmethod
    def parse(self, text: str) -> ParsedReport:
        """
        Parse report text into a flat key/value mapping.

        Args:
            text: Full report contents

        Returns:
            Mapping of keys to scalar or list values
        """
        pass

    def run(self, text: str) -> tuple[ParsedReport, ParserMetadata]:
        """
        Execute the parser and return the mapping with metadata.

        Returns:
            Tuple of (parsed report, metadata)
        """
        start_time = time.time()

        report = self.parse(text)

        processing_time_ms = int((time.time() - start_time) * 1000)

        metadata = ParserMetadata(
            parser_name=self.PARSER_NAME,
            parser_version=self.PARSER_VERSION,
            processing_time_ms=processing_time_ms,
            line_count=self.line_count,
            skipped_lines=self.skipped_lines,
        )

        return report, metadata
