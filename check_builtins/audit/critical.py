"""Critical command list."""

import logging
from typing import Iterable, List, Sequence

logger = logging.getLogger(__name__)

DEFAULT_CRITICAL_COMMANDS = (
    "cd", "rm", "mv", "sudo", "kill", "sh", "bash", "echo", "printf",
)

# Variant shipped by some releases, selectable from YAML configuration
DEFAULT_CRITICAL_WITH_LS = DEFAULT_CRITICAL_COMMANDS + ("ls",)

CRITICAL_DEFAULTS = {
    "standard": DEFAULT_CRITICAL_COMMANDS,
    "with-ls": DEFAULT_CRITICAL_WITH_LS,
}


def resolve_critical_set(
    defaults: Sequence[str],
    additions: Iterable[str] = (),
    removals: Iterable[str] = ()
) -> List[str]:
    """Apply configured additions and removals to the default list.

    Additions are appended in order when not already present, then every
    removed name is dropped. A name both added and removed is absent.

    Args:
        defaults: Default critical commands
        additions: Names from CRITICAL directives
        removals: Names from NONCRITICAL directives

    Returns:
        Ordered list without duplicates
    """
    critical: List[str] = []
    for name in defaults:
        if name not in critical:
            critical.append(name)

    for name in additions:
        if name not in critical:
            critical.append(name)
            logger.debug(f"Added '{name}' to critical commands list")

    removed = set(removals)
    if removed:
        for name in critical:
            if name in removed:
                logger.debug(f"Removed '{name}' from critical commands list")
        critical = [name for name in critical if name not in removed]

    return critical
