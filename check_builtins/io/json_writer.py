"""JSON export of audit results."""

from pathlib import Path
from typing import List
import logging

from pydantic import TypeAdapter

from ..models.report import AuditRecord, AuditReport

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(List[AuditRecord])


def dump_records(report: AuditReport) -> str:
    """Serialize a report as a JSON array of command/status/info records.

    Args:
        report: Report to serialize

    Returns:
        JSON text
    """
    return _RECORDS.dump_json(report.records(), indent=2).decode("utf-8")


def write_json_report(report: AuditReport, output_file: str) -> Path:
    """Write a report to a JSON file.

    Args:
        report: Report to write
        output_file: Destination path

    Returns:
        Path that was written
    """
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(dump_records(report) + "\n", encoding="utf-8")
    logger.info(f"JSON report written: {output_path} ({len(report)} records)")
    return output_path
