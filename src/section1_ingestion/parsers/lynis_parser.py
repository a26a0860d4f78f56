"""
Parser for Lynis `lynis-report.dat` files.

The report is line oriented:

    # comment
    [section]
    hostname=web01
    warning[]=SSH-7408|X11Forwarding enabled|-|-|
    suggestion[]=AUTH-9230|Configure password hashing rounds|-|-|

Keys ending in `[]` are array keys; repeated occurrences accumulate in
order under the key without its suffix. All other keys are scalars and the
last assignment wins. Malformed lines are ignored.
"""

from ..schemas import ParsedReport
from .base_parser import BaseParser


ARRAY_SUFFIX = "[]"
SKIP_PREFIXES = ("#", "[")


class LynisReportParser(BaseParser):
    """Parser for Lynis key=value audit reports."""

    PARSER_NAME = "lynis_parser"
    PARSER_VERSION = "1.0.0"

    def _split_line(self, line: str) -> tuple[str, str] | None:
        """
        Split a trimmed line into (key, value).

        Only the first two '='-delimited segments are kept, so a value that
        itself contains '=' is cut at that character.
        """
        segments = line.split("=")[:2]
        if len(segments) < 2:
            return None
        return segments[0], segments[1]

    def parse(self, text: str) -> ParsedReport:
        report: ParsedReport = {}
        self.line_count = 0
        self.skipped_lines = 0

        for line in text.split("\n"):
            self.line_count += 1
            line = line.strip()

            if not line or line.startswith(SKIP_PREFIXES):
                self.skipped_lines += 1
                continue

            pair = self._split_line(line)
            if pair is None:
                self.skipped_lines += 1
                continue

            key, value = pair

            if key.endswith(ARRAY_SUFFIX):
                base_key = key[: -len(ARRAY_SUFFIX)]
                if base_key not in report:
                    report[base_key] = []
                # A scalar already stored under the base key wins
                if isinstance(report[base_key], list):
                    report[base_key].append(value)
            else:
                report[key] = value

        return report


def parse_report(text: str) -> ParsedReport:
    """
    Parse Lynis report text into a flat mapping.

    Example:
        >>> parse_report("suggestion[]=a\\nsuggestion[]=b")
        {'suggestion': ['a', 'b']}
    """
    return LynisReportParser().parse(text)
