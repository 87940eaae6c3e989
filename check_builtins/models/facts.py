"""Resolution facts reported by a shell fact provider."""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class ExternalMatch:
    """An executable found on the search path."""
    path: str
    path_index: Optional[int] = None  # 1-based PATH position, None if unknown

    def __str__(self) -> str:
        if self.path_index is None:
            return self.path
        return f"{self.path} (PATH position {self.path_index})"


@dataclass(frozen=True)
class CommandFacts:
    """Snapshot of every way the shell could resolve one command name.

    A new instance is built for every lookup; the alias and function
    tables may change between lookups, so instances are never reused
    for another query.

    ``alias_definition`` is the text the shell reports, which may still
    carry one layer of surrounding quotes (bash prints
    ``ls is aliased to `ls --color=auto'``).
    """
    has_alias: bool = False
    alias_definition: Optional[str] = None
    has_function: bool = False
    has_builtin: bool = False
    has_keyword: bool = False
    external_matches: Tuple[ExternalMatch, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept lists from callers but keep the instance hashable
        if not isinstance(self.external_matches, tuple):
            object.__setattr__(
                self, "external_matches", tuple(self.external_matches)
            )

    @classmethod
    def empty(cls) -> "CommandFacts":
        """Facts for a name the provider knows nothing about."""
        return cls()

    def is_empty(self) -> bool:
        return not (
            self.has_alias or
            self.has_function or
            self.has_builtin or
            self.has_keyword or
            self.external_matches
        )
