"""Command resolution status codes."""

from enum import IntEnum


class StatusCode(IntEnum):
    """How the shell would resolve a command name.

    Values follow bash precedence for reporting and are also the exit
    codes of single command mode. Larger means worse, except that
    WHITELISTED_OVERRIDE sorts last only because it was added last.
    """
    BUILTIN = 0               # builtin or keyword
    FUNCTION_OVERRIDE = 1
    ALIAS_OVERRIDE = 2
    EXTERNAL = 3
    UNKNOWN = 4
    WHITELISTED_OVERRIDE = 5

    @property
    def symbol(self) -> str:
        """Single character shown in the STATUS column."""
        return _SYMBOLS[self]

    @property
    def label(self) -> str:
        """Short human readable name."""
        return _LABELS[self]

    @classmethod
    def worst_of(cls, statuses) -> "StatusCode":
        """Return the numerically largest status, BUILTIN for no statuses."""
        worst = cls.BUILTIN
        for status in statuses:
            if status > worst:
                worst = cls(status)
        return worst


_SYMBOLS = {
    StatusCode.BUILTIN: "✔",
    StatusCode.FUNCTION_OVERRIDE: "❌",
    StatusCode.ALIAS_OVERRIDE: "❌",
    StatusCode.EXTERNAL: "⚠",
    StatusCode.UNKNOWN: "❌",
    StatusCode.WHITELISTED_OVERRIDE: "✓",
}

_LABELS = {
    StatusCode.BUILTIN: "builtin/keyword",
    StatusCode.FUNCTION_OVERRIDE: "function override",
    StatusCode.ALIAS_OVERRIDE: "alias override",
    StatusCode.EXTERNAL: "external command",
    StatusCode.UNKNOWN: "unknown",
    StatusCode.WHITELISTED_OVERRIDE: "whitelisted override",
}
