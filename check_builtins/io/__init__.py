"""Report output."""

from .json_writer import dump_records, write_json_report
from .table_renderer import TableRenderer

__all__ = ["dump_records", "write_json_report", "TableRenderer"]
