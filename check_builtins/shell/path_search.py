"""Executable search over the PATH directories."""

import logging
import os
from typing import List, Optional, Sequence

from ..models.facts import ExternalMatch

logger = logging.getLogger(__name__)


def split_search_path(path_value: Optional[str] = None) -> List[str]:
    """Split a PATH string into its directories.

    Empty entries are kept so positions stay aligned with the variable.

    Args:
        path_value: PATH string (the environment's PATH when None)

    Returns:
        List of directories in search order
    """
    if path_value is None:
        path_value = os.environ.get("PATH", "")
    if not path_value:
        return []
    return path_value.split(os.pathsep)


class PathSearcher:
    """Find every executable with a given name on the search path.

    Unlike ``which``, the search does not stop at the first hit; each
    match is returned with the 1-based position of its directory.
    """

    def __init__(self, search_path: Optional[Sequence[str]] = None):
        """Initialize the searcher.

        Args:
            search_path: Directories in search order (PATH when None)
        """
        if search_path is None:
            search_path = split_search_path()
        self.search_path = list(search_path)

    def find_all(self, command: str) -> List[ExternalMatch]:
        """Collect all executables named ``command``.

        Args:
            command: Command name

        Returns:
            Matches in search order
        """
        if not command:
            return []

        # Names with a slash are not searched for, like in bash
        if "/" in command:
            if self._is_executable(command):
                return [ExternalMatch(path=command)]
            return []

        matches = []
        for index, directory in enumerate(self.search_path, start=1):
            if not directory:
                continue
            candidate = os.path.join(directory, command)
            if self._is_executable(candidate):
                matches.append(ExternalMatch(path=candidate, path_index=index))

        logger.debug(f"{command}: {len(matches)} executable(s) on PATH")
        return matches

    def position_of(self, path: str, command: str) -> Optional[int]:
        """Find the PATH position that yields ``path`` for ``command``.

        Args:
            path: Absolute path reported by the shell
            command: Command name

        Returns:
            1-based position, or None if no directory matches
        """
        target = os.path.normpath(path)
        for index, directory in enumerate(self.search_path, start=1):
            if not directory:
                continue
            if os.path.normpath(os.path.join(directory, command)) == target:
                return index
        return None

    @staticmethod
    def _is_executable(path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.X_OK)
