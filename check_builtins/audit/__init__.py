"""Audit aggregation over groups of commands."""

from .aggregator import (
    BUILTINS_GROUP,
    CRITICAL_GROUP,
    Auditor,
    run_audit,
)
from .critical import (
    CRITICAL_DEFAULTS,
    DEFAULT_CRITICAL_COMMANDS,
    DEFAULT_CRITICAL_WITH_LS,
    resolve_critical_set,
)

__all__ = [
    "BUILTINS_GROUP",
    "CRITICAL_GROUP",
    "Auditor",
    "run_audit",
    "CRITICAL_DEFAULTS",
    "DEFAULT_CRITICAL_COMMANDS",
    "DEFAULT_CRITICAL_WITH_LS",
    "resolve_critical_set",
]
