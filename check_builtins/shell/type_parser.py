"""Parser for the output of bash's ``type -a``."""

import logging
from typing import Optional, Sequence

from ..models.facts import CommandFacts, ExternalMatch
from .path_search import PathSearcher

logger = logging.getLogger(__name__)

ALIAS_MARKER = "aliased to "
HASHED_MARKER = "hashed ("


def parse_type_output(
    command: str,
    output: str,
    search_path: Optional[Sequence[str]] = None
) -> CommandFacts:
    """Turn ``type -a`` output into CommandFacts.

    Only lines starting with ``<command> is `` are considered, so the body
    that bash prints after ``is a function`` is skipped. Each external path
    is annotated with its PATH position when one of the ``search_path``
    directories produces it.

    Args:
        command: Command name that was queried
        output: Standard output of ``type -a -- command``
        search_path: PATH directories used by the shell

    Returns:
        CommandFacts for the command (empty when nothing matched)
    """
    searcher = PathSearcher(search_path if search_path is not None else [])
    prefix = f"{command} is "

    has_alias = False
    alias_definition = None
    has_function = False
    has_builtin = False
    has_keyword = False
    external = []

    for line in output.splitlines():
        if not line.startswith(prefix):
            continue
        rest = line[len(prefix):]

        if rest.startswith(ALIAS_MARKER):
            # Keep the first alias line, quotes included
            if not has_alias:
                has_alias = True
                alias_definition = rest[len(ALIAS_MARKER):]
        elif rest == "a function":
            has_function = True
        elif rest in ("a shell builtin", "a special shell builtin"):
            has_builtin = True
        elif rest == "a shell keyword":
            has_keyword = True
        elif rest.startswith(HASHED_MARKER) and rest.endswith(")"):
            path = rest[len(HASHED_MARKER):-1]
            external.append(
                ExternalMatch(path=path, path_index=searcher.position_of(path, command))
            )
        elif rest.startswith("/"):
            external.append(
                ExternalMatch(path=rest, path_index=searcher.position_of(rest, command))
            )
        else:
            logger.debug(f"Unrecognized type output line: {line!r}")

    return CommandFacts(
        has_alias=has_alias,
        alias_definition=alias_definition,
        has_function=has_function,
        has_builtin=has_builtin,
        has_keyword=has_keyword,
        external_matches=tuple(external),
    )
