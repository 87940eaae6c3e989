"""Column-aligned text output of audit results."""

from typing import Dict, Iterable, Optional, TextIO
import sys

from ..models.classification import ClassificationResult
from ..models.report import AuditReport
from ..models.status import StatusCode

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BOLD = "\033[1m"
RESET = "\033[0m"

COMMAND_WIDTH = 20
STATUS_WIDTH = 6


class TableRenderer:
    """Writes results as a COMMAND / STATUS / INFO table."""

    STATUS_COLORS: Dict[StatusCode, str] = {
        StatusCode.BUILTIN: GREEN,
        StatusCode.FUNCTION_OVERRIDE: BOLD + RED,
        StatusCode.ALIAS_OVERRIDE: BOLD + RED,
        StatusCode.EXTERNAL: BOLD + YELLOW,
        StatusCode.UNKNOWN: BOLD + RED,
        StatusCode.WHITELISTED_OVERRIDE: YELLOW,
    }

    def __init__(self, stream: Optional[TextIO] = None, color: Optional[bool] = None):
        """Initialize the renderer.

        Args:
            stream: Output stream (stdout when None)
            color: Use ANSI colors (only when stream is a TTY when None)
        """
        self.stream = stream or sys.stdout
        if color is None:
            color = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.color = color

    def _line(self, command: str, status: str, info: str) -> None:
        self.stream.write(f"{command:<{COMMAND_WIDTH}} {status} {info}".rstrip() + "\n")

    def format_status(self, status: StatusCode) -> str:
        """Status symbol padded to the column width, colored if enabled."""
        padding = " " * max(STATUS_WIDTH - len(status.symbol), 0)
        if not self.color:
            return status.symbol + padding
        return f"{self.STATUS_COLORS[status]}{status.symbol}{RESET}{padding}"

    def header(self) -> None:
        self._line("COMMAND", f"{'STATUS':<{STATUS_WIDTH}}", "INFO")
        self._line("-------", f"{'------':<{STATUS_WIDTH}}", "----")

    def row(self, result: ClassificationResult) -> None:
        self._line(result.command, self.format_status(result.status), result.detail)

    def render(self, results: Iterable[ClassificationResult], title: Optional[str] = None) -> None:
        """Write an optional title, the header and one row per result.

        Args:
            results: Results in display order
            title: Line written before the table
        """
        if title:
            self.stream.write(f"\n{title}\n")
        self.header()
        for result in results:
            self.row(result)

    def render_report(self, report: AuditReport, title: Optional[str] = None) -> None:
        self.render(report.results, title=title)

    def message(self, text: str) -> None:
        self.stream.write(text + "\n")
