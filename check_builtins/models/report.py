"""Audit report models."""

from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel, Field

from .classification import ClassificationResult
from .status import StatusCode


class AuditRecord(BaseModel):
    """One row of the JSON report."""

    command: str = Field(description="Command name that was checked")
    status: int = Field(ge=0, le=5, description="Numeric StatusCode")
    info: str = Field(default="", description="Detection chain")

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "AuditRecord":
        return cls(**result.to_dict())


@dataclass
class AuditReport:
    """Ordered results for one group of commands."""
    name: str
    results: List[ClassificationResult] = field(default_factory=list)

    @property
    def worst(self) -> StatusCode:
        """Largest status in the group (BUILTIN when empty)."""
        return StatusCode.worst_of(r.status for r in self.results)

    @property
    def commands(self) -> List[str]:
        return [r.command for r in self.results]

    def records(self) -> List[AuditRecord]:
        """Convert results to JSON records, keeping their order.

        Returns:
            List of AuditRecord
        """
        return [AuditRecord.from_result(r) for r in self.results]

    def count_by_status(self) -> dict:
        """Count results per status.

        Returns:
            Dictionary mapping StatusCode to number of results
        """
        counts = {status: 0 for status in StatusCode}
        for result in self.results:
            counts[result.status] += 1
        return counts

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)


@dataclass
class AuditSummary:
    """All reports produced by one run."""
    reports: List[AuditReport] = field(default_factory=list)

    @property
    def worst(self) -> StatusCode:
        return StatusCode.worst_of(report.worst for report in self.reports)

    def get(self, name: str) -> AuditReport:
        """Look up a report by group name.

        Args:
            name: Group name

        Returns:
            The matching AuditReport

        Raises:
            KeyError: If no report has that name
        """
        for report in self.reports:
            if report.name == name:
                return report
        raise KeyError(name)
