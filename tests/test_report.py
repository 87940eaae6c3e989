"""Tests for report models and output."""

import io
import json

import pytest
from pydantic import ValidationError

from check_builtins.io import TableRenderer, dump_records, write_json_report
from check_builtins.models import (
    AuditRecord,
    AuditReport,
    AuditSummary,
    ClassificationResult,
    StatusCode,
)


def make_report():
    return AuditReport(
        name="builtins",
        results=[
            ClassificationResult("cd", StatusCode.BUILTIN, "builtin | builtin"),
            ClassificationResult("ls", StatusCode.ALIAS_OVERRIDE, 'alias override | alias → ls "-F"'),
            ClassificationResult("nope", StatusCode.UNKNOWN, ""),
        ],
    )


class TestStatusCode:
    """StatusCode tests."""

    def test_values(self):
        """The six statuses have fixed numeric values."""
        assert [int(s) for s in StatusCode] == [0, 1, 2, 3, 4, 5]

    def test_worst_of(self):
        """worst_of returns the numeric maximum."""
        statuses = [StatusCode(0), StatusCode(3), StatusCode(2), StatusCode(0)]
        assert StatusCode.worst_of(statuses) == StatusCode.EXTERNAL
        assert StatusCode.worst_of([]) == StatusCode.BUILTIN

    def test_symbols(self):
        """Each status has a display symbol."""
        assert StatusCode.BUILTIN.symbol == "✔"
        assert StatusCode.EXTERNAL.symbol == "⚠"
        assert StatusCode.WHITELISTED_OVERRIDE.symbol == "✓"


class TestAuditReport:
    """AuditReport and AuditSummary tests."""

    def test_worst_and_counts(self):
        """worst and per-status counts are derived from the results."""
        report = make_report()
        assert report.worst == StatusCode.UNKNOWN
        counts = report.count_by_status()
        assert counts[StatusCode.BUILTIN] == 1
        assert counts[StatusCode.EXTERNAL] == 0

    def test_summary(self):
        """A summary's worst covers every report."""
        other = AuditReport(
            name="critical",
            results=[ClassificationResult("ls", StatusCode.WHITELISTED_OVERRIDE, "x")],
        )
        summary = AuditSummary(reports=[make_report(), other])
        assert summary.worst == StatusCode.WHITELISTED_OVERRIDE
        assert summary.get("critical") is other
        with pytest.raises(KeyError):
            summary.get("missing")

    def test_record_validation(self):
        """Records reject status values outside the enum range."""
        with pytest.raises(ValidationError):
            AuditRecord(command="x", status=9, info="")


class TestJsonWriter:
    """JSON export tests."""

    def test_dump_records(self):
        """Records keep order and escape embedded quotes."""
        data = json.loads(dump_records(make_report()))
        assert data == [
            {"command": "cd", "status": 0, "info": "builtin | builtin"},
            {"command": "ls", "status": 2, "info": 'alias override | alias → ls "-F"'},
            {"command": "nope", "status": 4, "info": ""},
        ]

    def test_records_validate(self):
        """Dumped entries are valid AuditRecord objects."""
        data = json.loads(dump_records(make_report()))
        records = [AuditRecord.model_validate(item) for item in data]
        assert [r.status for r in records] == [0, 2, 4]

    def test_write_json_report(self, tmp_path):
        """The report is written to the given file."""
        output = tmp_path / "out" / "report.json"
        path = write_json_report(make_report(), str(output))
        assert path == output
        assert json.loads(output.read_text(encoding="utf-8"))[1]["command"] == "ls"


class TestTableRenderer:
    """Table output tests."""

    def test_plain_table(self):
        """Columns are aligned and no color codes are written."""
        stream = io.StringIO()
        renderer = TableRenderer(stream, color=False)
        renderer.render(make_report().results)
        lines = stream.getvalue().splitlines()

        assert lines[0] == f"{'COMMAND':<20} {'STATUS':<6} INFO"
        assert lines[1] == f"{'-------':<20} {'------':<6} ----"
        assert lines[2] == f"{'cd':<20} {'✔':<6} builtin | builtin"
        assert lines[4].rstrip() == f"{'nope':<20} ❌"
        assert "\033[" not in stream.getvalue()

    def test_title(self):
        """A title is written on its own line before the table."""
        stream = io.StringIO()
        TableRenderer(stream, color=False).render_report(make_report(), title="Critical commands audit:")
        assert stream.getvalue().startswith("\nCritical commands audit:\nCOMMAND")

    def test_colored_status(self):
        """Colors wrap the symbol when enabled."""
        renderer = TableRenderer(io.StringIO(), color=True)
        text = renderer.format_status(StatusCode.EXTERNAL)
        assert "\033[" in text
        assert "⚠" in text

    def test_no_color_for_non_tty(self):
        """Color defaults to off for streams that are not terminals."""
        assert TableRenderer(io.StringIO()).color is False
