"""Data models for command resolution auditing."""

from .status import StatusCode
from .facts import CommandFacts, ExternalMatch
from .classification import ClassificationResult
from .report import AuditRecord, AuditReport, AuditSummary

__all__ = [
    "StatusCode",
    "CommandFacts",
    "ExternalMatch",
    "ClassificationResult",
    "AuditRecord",
    "AuditReport",
    "AuditSummary",
]
