"""Loader for exported alias files.

An alias file is what bash's ``alias`` builtin prints::

    alias ll='ls -l'
    alias say='echo '\\''hi'\\'''

so ``alias > ~/.aliases`` in an interactive shell captures the aliases
that a child process cannot see.
"""

import logging
import os
import shlex
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

ALIAS_FILE_ENV = "CHECK_BUILTINS_ALIAS_FILE"


def parse_alias_line(line: str) -> Dict[str, str]:
    """Parse one line of ``alias`` output.

    Args:
        line: A line such as ``alias ll='ls -l'``

    Returns:
        Mapping of alias name to definition (empty for comments, blank
        or malformed lines)
    """
    try:
        tokens = shlex.split(line, comments=True)
    except ValueError as e:
        logger.debug(f"Skipping malformed alias line {line!r}: {e}")
        return {}

    if not tokens:
        return {}
    if tokens[0] == "alias":
        tokens = tokens[1:]

    aliases = {}
    for token in tokens:
        name, sep, definition = token.partition("=")
        if not sep or not name:
            logger.debug(f"Skipping alias token without definition: {token!r}")
            continue
        aliases[name] = definition
    return aliases


def load_alias_file(path: str) -> Dict[str, str]:
    """Read aliases from a file.

    A missing or unreadable file yields no aliases.

    Args:
        path: Path of the alias file

    Returns:
        Mapping of alias name to definition, later lines winning
    """
    file_path = Path(path)
    if not file_path.is_file():
        logger.warning(f"Alias file not found: {path}")
        return {}

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read alias file {path}: {e}")
        return {}

    aliases: Dict[str, str] = {}
    for line in text.splitlines():
        aliases.update(parse_alias_line(line))

    logger.info(f"Loaded {len(aliases)} aliases from {path}")
    return aliases


def collect_alias_files(
    paths: Iterable[str] = (),
    environ: Optional[Dict[str, str]] = None
) -> Tuple[str, ...]:
    """Combine alias files from the command line and the environment.

    Args:
        paths: Files given explicitly
        environ: Environment to read CHECK_BUILTINS_ALIAS_FILE from

    Returns:
        De-duplicated tuple of file paths, environment file first
    """
    if environ is None:
        environ = dict(os.environ)

    files = []
    exported = environ.get(ALIAS_FILE_ENV)
    if exported:
        files.append(exported)
    for path in paths:
        if path not in files:
            files.append(path)
    return tuple(files)
