"""Run the classifier over groups of commands."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import AbstractSet, Callable, List, Optional, Sequence
import logging

from ..classifier.command_classifier import CommandClassifier
from ..models.classification import ClassificationResult
from ..models.facts import CommandFacts
from ..models.report import AuditReport, AuditSummary
from ..models.status import StatusCode
from ..shell.provider import FactProvider
from .critical import DEFAULT_CRITICAL_COMMANDS

logger = logging.getLogger(__name__)

BUILTINS_GROUP = "builtins"
CRITICAL_GROUP = "critical"
SINGLE_GROUP = "command"


def _lookup(provider: FactProvider, command: str) -> CommandFacts:
    """Fetch facts, turning any provider failure into empty facts."""
    try:
        return provider.lookup(command)
    except Exception as e:
        logger.warning(f"Lookup failed for {command!r}, reporting unknown: {e}")
        return CommandFacts.empty()


def run_audit(
    commands: Sequence[str],
    provider: FactProvider,
    whitelist: AbstractSet[str] = frozenset(),
    name: str = SINGLE_GROUP,
    max_workers: int = 1,
    classifier: Optional[Callable[[str, CommandFacts], ClassificationResult]] = None
) -> AuditReport:
    """Classify every command and collect the results in input order.

    A failed lookup only affects its own command, which is reported as
    unknown. With ``max_workers`` above 1 the lookups run in a thread
    pool; results are still ordered like ``commands``.

    Args:
        commands: Command names to check
        provider: Source of resolution facts
        whitelist: Names whose overrides have been reviewed
        name: Group name of the report
        max_workers: Number of concurrent lookups
        classifier: Replaces the whitelist-bound default classifier

    Returns:
        AuditReport with one result per command
    """
    commands = list(commands)
    if classifier is None:
        classifier = CommandClassifier(whitelist)
    facts: List[Optional[CommandFacts]] = [None] * len(commands)

    if max_workers > 1 and len(commands) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(commands))) as executor:
            future_to_idx = {
                executor.submit(_lookup, provider, command): idx
                for idx, command in enumerate(commands)
            }
            for future in as_completed(future_to_idx):
                facts[future_to_idx[future]] = future.result()
    else:
        for idx, command in enumerate(commands):
            facts[idx] = _lookup(provider, command)

    report = AuditReport(name=name)
    for command, command_facts in zip(commands, facts):
        result = classifier(command, command_facts)
        logger.debug(f"{result}: {result.detail}")
        report.results.append(result)

    logger.info(
        f"Audited {len(report)} command(s) in '{name}', worst status "
        f"{int(report.worst)}"
    )
    return report


@dataclass
class AuditStats:
    """Counters for one run."""
    commands: int = 0
    overrides: int = 0
    unknown: int = 0


class Auditor:
    """Audits the builtin list, the critical list or single commands."""

    def __init__(
        self,
        provider: FactProvider,
        whitelist: AbstractSet[str] = frozenset(),
        critical: Sequence[str] = DEFAULT_CRITICAL_COMMANDS,
        max_workers: int = 1
    ):
        """Initialize the auditor.

        Args:
            provider: Source of resolution facts
            whitelist: Names whose overrides have been reviewed
            critical: Resolved critical command list
            max_workers: Number of concurrent lookups
        """
        self.provider = provider
        self.whitelist = frozenset(whitelist)
        self.critical = list(critical)
        self.max_workers = max_workers
        self.stats = AuditStats()

    def _run(self, commands: Sequence[str], name: str) -> AuditReport:
        report = run_audit(
            commands,
            self.provider,
            self.whitelist,
            name=name,
            max_workers=self.max_workers,
        )
        self._update_stats(report.results)
        return report

    def _update_stats(self, results: List[ClassificationResult]) -> None:
        self.stats.commands += len(results)
        self.stats.overrides += sum(1 for r in results if r.is_override())
        self.stats.unknown += sum(1 for r in results if r.status == StatusCode.UNKNOWN)

    def audit_command(self, command: str) -> ClassificationResult:
        """Classify a single command.

        Args:
            command: Command name

        Returns:
            ClassificationResult for the command
        """
        return self._run([command], SINGLE_GROUP).results[0]

    def audit_builtins(self) -> AuditReport:
        """Check every builtin and keyword the shell knows about."""
        return self._run(self.provider.builtin_names(), BUILTINS_GROUP)

    def audit_critical(self) -> AuditReport:
        """Check the critical command list."""
        return self._run(self.critical, CRITICAL_GROUP)

    def audit_all(self) -> AuditSummary:
        """Check builtins, then critical commands.

        Returns:
            AuditSummary with the builtins and critical reports
        """
        summary = AuditSummary(reports=[self.audit_builtins(), self.audit_critical()])
        logger.info(
            f"Audit finished: {self.stats.commands} checked, "
            f"{self.stats.overrides} override(s), {self.stats.unknown} unknown"
        )
        return summary

