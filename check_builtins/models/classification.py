"""Classification result model."""

from dataclasses import dataclass

from .status import StatusCode


@dataclass(frozen=True)
class ClassificationResult:
    """Resolution status of a single command."""
    command: str
    status: StatusCode
    detail: str = ""

    def is_override(self) -> bool:
        """Check whether an alias or function shadows the command.

        Returns:
            True for alias and function overrides, whitelisted or not
        """
        return self.status in (
            StatusCode.ALIAS_OVERRIDE,
            StatusCode.FUNCTION_OVERRIDE,
            StatusCode.WHITELISTED_OVERRIDE,
        )

    def to_dict(self) -> dict:
        """Convert to the record layout used by the JSON report.

        Returns:
            Dictionary with command, status and info keys
        """
        return {
            "command": self.command,
            "status": int(self.status),
            "info": self.detail,
        }

    def __str__(self) -> str:
        return f"[{self.command}] {self.status.label} ({int(self.status)})"
