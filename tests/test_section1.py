"""
Tests for Section 1: Report Ingestion
"""

import json

import pytest

from src.section1_ingestion.decoder import decode_item, decode_items
from src.section1_ingestion.normalizer import (
    Normalizer,
    ReportReadError,
    export_filename,
    ingest_to_json,
    read_report,
)
from src.section1_ingestion.parsers.lynis_parser import LynisReportParser, parse_report
from src.section1_ingestion.schemas import Finding, FindingKind, IngestedReport, ParserMetadata


SAMPLE_REPORT = """# Lynis Report
report_version_major=1
report_version_minor=0
[general]
hostname=web01
os_fullname=Ubuntu 22.04
warning[]=SSH-7408|X11Forwarding enabled|-|-|
warning[]=FIRE-4512|iptables module(s) loaded, but no rules active|-|-|
suggestion[]=AUTH-9230|Configure password hashing rounds|-|-|
suggestion[]=SSH-7408|Consider hardening SSH configuration|AllowTcpForwarding (set YES to NO)|text: disable it|

not a key value line
"""


class TestLynisParser:
    """Test the key=value report parser."""

    def test_array_keys_aggregate_in_order(self):
        assert parse_report("suggestion[]=a\nsuggestion[]=b") == {"suggestion": ["a", "b"]}

    def test_scalar_last_assignment_wins(self):
        assert parse_report("hostname=foo\nhostname=bar") == {"hostname": "bar"}

    def test_value_is_cut_at_second_equals(self):
        assert parse_report("key=a=b") == {"key": "a"}

    def test_comments_headers_and_blank_lines_are_skipped(self):
        text = "# comment\n   \n[section]\n  # indented comment\n  [other]\n"
        assert parse_report(text) == {}

    def test_line_without_equals_is_ignored(self):
        assert parse_report("just text\nkey=value") == {"key": "value"}

    def test_whitespace_around_line_is_trimmed(self):
        assert parse_report("   hostname=web01   ") == {"hostname": "web01"}

    def test_empty_value_is_kept(self):
        assert parse_report("empty=") == {"empty": ""}

    def test_scalar_blocks_later_array_append(self):
        assert parse_report("warning=x\nwarning[]=y") == {"warning": "x"}

    def test_scalar_overwrites_existing_array(self):
        assert parse_report("warning[]=y\nwarning=x") == {"warning": "x"}

    def test_empty_input(self):
        assert parse_report("") == {}

    def test_parse_is_deterministic(self):
        assert parse_report(SAMPLE_REPORT) == parse_report(SAMPLE_REPORT)

    def test_sample_report(self):
        data = parse_report(SAMPLE_REPORT)

        assert data["hostname"] == "web01"
        assert data["os_fullname"] == "Ubuntu 22.04"
        assert len(data["warning"]) == 2
        assert data["warning"][0] == "SSH-7408|X11Forwarding enabled|-|-|"
        assert len(data["suggestion"]) == 2

    def test_run_reports_metadata(self):
        parser = LynisReportParser()
        data, metadata = parser.run("# c\nhostname=a\n\nbad line")

        assert data == {"hostname": "a"}
        assert isinstance(metadata, ParserMetadata)
        assert metadata.parser_name == "lynis_parser"
        assert metadata.line_count == 4
        assert metadata.skipped_lines == 3


class TestDecoder:
    """Test pipe-delimited finding decoding."""

    def test_decode_full_entry(self):
        finding = decode_item("SSH-7408|X11Forwarding enabled|suggestion|text: disable it")

        assert finding == Finding(id="SSH-7408", message="X11Forwarding enabled", details="disable it")

    def test_dash_details_are_empty(self):
        assert decode_item("ID|msg|sev|-").details == ""

    def test_empty_string(self):
        finding = decode_item("")

        assert finding.id == "N/A"
        assert finding.message == "No message."
        assert finding.details == ""

    def test_id_only(self):
        finding = decode_item("KRNL-5830")

        assert finding.id == "KRNL-5830"
        assert finding.message == "No message."

    def test_empty_message_falls_back(self):
        assert decode_item("ID||sev").message == "No message."

    def test_details_without_marker_are_trimmed(self):
        assert decode_item("ID|msg|sev|  plain detail  ").details == "plain detail"

    def test_severity_field_is_not_used_as_details(self):
        assert decode_item("ID|msg|sev").details == ""

    def test_trailing_pipe_fields_are_ignored(self):
        finding = decode_item("SSH-7408|X11Forwarding enabled|-|-|")

        assert finding.id == "SSH-7408"
        assert finding.details == ""

    def test_decode_items_preserves_order(self):
        findings = decode_items(["B|second", "A|first"])

        assert [f.id for f in findings] == ["B", "A"]


class TestNormalizer:
    """Test the Normalizer class."""

    def test_ingest_text_decodes_findings(self):
        report = Normalizer().ingest_text(SAMPLE_REPORT, source_file="lynis-report.dat")

        assert isinstance(report, IngestedReport)
        assert report.source_file == "lynis-report.dat"
        assert report.hostname == "web01"
        assert report.os_fullname == "Ubuntu 22.04"
        assert report.warning_count == 2
        assert report.suggestion_count == 2
        assert report.suggestions[1].details == "disable it"
        assert report.source_hash is not None
        assert report.has_findings

    def test_report_without_findings(self):
        report = Normalizer().ingest_text("hostname=clean")

        assert report.warnings == []
        assert report.suggestions == []
        assert not report.has_findings

    def test_scalar_finding_key_yields_no_entries(self):
        report = Normalizer().ingest_text("warning=oops")

        assert report.raw_entries(FindingKind.WARNING) == []
        assert report.warning_count == 0

    def test_ingest_reads_file(self, tmp_path):
        path = tmp_path / "lynis-report.dat"
        path.write_text(SAMPLE_REPORT, encoding="utf-8")

        report = Normalizer().ingest(path)

        assert report.source_file == "lynis-report.dat"
        assert report.data == parse_report(SAMPLE_REPORT)

    def test_missing_file_raises_read_error(self, tmp_path):
        with pytest.raises(ReportReadError, match="file not found"):
            read_report(tmp_path / "missing.dat")

    def test_undecodable_file_raises_read_error(self, tmp_path):
        path = tmp_path / "binary.dat"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(ReportReadError):
            read_report(path)

    def test_export_json_named_after_hostname(self, tmp_path):
        normalizer = Normalizer(output_dir=tmp_path)
        report = normalizer.ingest_text(SAMPLE_REPORT)

        output = normalizer.export_json(report)

        assert output.name == "lynis-report-web01.json"
        assert json.loads(output.read_text(encoding="utf-8")) == report.data
        assert output.read_text(encoding="utf-8").startswith("{\n  ")

    def test_export_filename_fallback(self):
        assert export_filename({}) == "lynis-report-unknown-host.json"
        assert export_filename({"hostname": ["a"]}) == "lynis-report-unknown-host.json"

    def test_export_filename_replaces_unsafe_characters(self):
        assert export_filename({"hostname": "web/01"}) == "lynis-report-web_01.json"
        assert export_filename({"hostname": "../escaped"}) == "lynis-report-.._escaped.json"
        assert export_filename({"hostname": ".."}) == "lynis-report-unknown-host.json"
        assert export_filename({"hostname": ""}) == "lynis-report-unknown-host.json"

    def test_export_json_with_separator_in_hostname(self, tmp_path):
        normalizer = Normalizer(output_dir=tmp_path)
        report = normalizer.ingest_text("hostname=web/01")

        output = normalizer.export_json(report)

        assert output.parent == tmp_path
        assert output.name == "lynis-report-web_01.json"
        assert json.loads(output.read_text(encoding="utf-8")) == {"hostname": "web/01"}

    def test_export_without_output_dir_raises(self):
        normalizer = Normalizer()
        report = normalizer.ingest_text("hostname=a")

        with pytest.raises(ValueError, match="No output directory"):
            normalizer.export_json(report)

    def test_ingest_and_save(self, tmp_path):
        path = tmp_path / "lynis-report.dat"
        path.write_text(SAMPLE_REPORT, encoding="utf-8")
        normalizer = Normalizer(output_dir=tmp_path / "out")

        report, output = normalizer.ingest_and_save(path)

        assert output.exists()
        assert output.parent == tmp_path / "out"
        assert report.hostname == "web01"

    def test_ingest_to_json(self, tmp_path):
        path = tmp_path / "lynis-report.dat"
        path.write_text("hostname=a\nsuggestion[]=X|y", encoding="utf-8")
        out = tmp_path / "out.json"

        json_str = ingest_to_json(path, out)

        assert json.loads(json_str) == {"hostname": "a", "suggestion": ["X|y"]}
        assert out.read_text(encoding="utf-8") == json_str


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
