"""Shell fact providers.

A provider answers, for one command name, which aliases, functions,
builtins, keywords and executables exist for it. Every lookup returns a
new CommandFacts; nothing is cached between commands.
"""

from abc import ABC, abstractmethod
from typing import AbstractSet, Dict, List, Mapping, Optional, Sequence
import logging
import os
import shlex
import shutil
import subprocess

from ..models.facts import CommandFacts
from ..utils.process import run_cmd
from .alias_file import load_alias_file
from .constants import BASH_BUILTINS, BASH_KEYWORDS
from .path_search import PathSearcher, split_search_path
from .type_parser import parse_type_output

logger = logging.getLogger(__name__)


class FactLookupError(Exception):
    """The shell could not be asked about a command."""
    pass


class FactProvider(ABC):
    """Source of command resolution facts."""

    @abstractmethod
    def lookup(self, command: str) -> CommandFacts:
        """Collect the resolution facts of a command.

        Args:
            command: Command name

        Returns:
            Fresh CommandFacts for the command

        Raises:
            FactLookupError: If the shell cannot be queried
        """

    @abstractmethod
    def builtin_names(self) -> List[str]:
        """All builtin and keyword names, sorted and unique."""

    @abstractmethod
    def function_names(self) -> List[str]:
        """Names of user-defined functions, sorted."""


class StaticFactProvider(FactProvider):
    """Provider backed by injected tables and a filesystem PATH search."""

    def __init__(
        self,
        aliases: Optional[Mapping[str, str]] = None,
        functions: AbstractSet[str] = frozenset(),
        builtins: AbstractSet[str] = BASH_BUILTINS,
        keywords: AbstractSet[str] = BASH_KEYWORDS,
        search_path: Optional[Sequence[str]] = None
    ):
        """Initialize the provider.

        Args:
            aliases: Alias name to definition
            functions: Names of defined functions
            builtins: Builtin names
            keywords: Reserved word names
            search_path: PATH directories (the environment's PATH when None)
        """
        self.aliases = dict(aliases or {})
        self.functions = frozenset(functions)
        self.builtins = frozenset(builtins)
        self.keywords = frozenset(keywords)
        self.searcher = PathSearcher(search_path)

    @classmethod
    def from_alias_files(
        cls,
        alias_files: Sequence[str],
        search_path: Optional[Sequence[str]] = None
    ) -> "StaticFactProvider":
        """Create a provider from exported alias files.

        Args:
            alias_files: Files in ``alias`` output format
            search_path: PATH directories

        Returns:
            StaticFactProvider
        """
        aliases: Dict[str, str] = {}
        for path in alias_files:
            aliases.update(load_alias_file(path))
        return cls(aliases=aliases, search_path=search_path)

    def lookup(self, command: str) -> CommandFacts:
        definition = self.aliases.get(command)
        return CommandFacts(
            has_alias=definition is not None,
            # Same quoting as ``type`` prints
            alias_definition=f"`{definition}'" if definition is not None else None,
            has_function=command in self.functions,
            has_builtin=command in self.builtins,
            has_keyword=command in self.keywords,
            external_matches=tuple(self.searcher.find_all(command)),
        )

    def builtin_names(self) -> List[str]:
        return sorted(self.builtins | self.keywords)

    def function_names(self) -> List[str]:
        return sorted(self.functions)


class BashFactProvider(FactProvider):
    """Provider that asks a non-interactive bash.

    Startup files are not read. Alias and function definitions come from
    ``source_files``, which are sourced before every query with alias
    expansion enabled.
    """

    def __init__(
        self,
        bash_path: str = "bash",
        source_files: Sequence[str] = (),
        search_path: Optional[Sequence[str]] = None,
        timeout: float = 5.0
    ):
        """Initialize the provider.

        Args:
            bash_path: bash executable
            source_files: Files to source before each query
            search_path: PATH directories for the child (inherit when None)
            timeout: Seconds allowed per bash invocation
        """
        # Resolved now: the child PATH may not contain bash
        self.bash_path = shutil.which(bash_path) or bash_path
        self.source_files = list(source_files)
        self.search_path = list(search_path) if search_path is not None else None
        self.timeout = timeout

    @staticmethod
    def available(bash_path: str = "bash") -> bool:
        """Check whether the bash executable can be found."""
        return shutil.which(bash_path) is not None

    def _prelude(self) -> str:
        lines = ["shopt -s expand_aliases"]
        for path in self.source_files:
            lines.append(f"source {shlex.quote(path)} >/dev/null 2>&1 || true")
        return "\n".join(lines) + "\n"

    def _env(self) -> Dict[str, str]:
        env = dict(os.environ)
        if self.search_path is not None:
            env["PATH"] = os.pathsep.join(self.search_path)
        return env

    def _run(self, script: str, *args: str) -> tuple:
        cmd = [
            self.bash_path, "--noprofile", "--norc", "-c",
            self._prelude() + script, "check_builtins", *args,
        ]
        try:
            return run_cmd(cmd, timeout_s=self.timeout, env=self._env())
        except subprocess.TimeoutExpired as e:
            raise FactLookupError(f"bash timed out after {self.timeout}s") from e
        except OSError as e:
            raise FactLookupError(f"cannot run {self.bash_path}: {e}") from e

    def lookup(self, command: str) -> CommandFacts:
        rc, stdout, stderr = self._run('type -a -- "$1"', command)
        if rc != 0 and not stdout:
            logger.debug(f"type -a found nothing for {command!r}: {stderr}")
            return CommandFacts.empty()

        search_path = self.search_path
        if search_path is None:
            search_path = split_search_path()
        facts = parse_type_output(command, stdout, search_path)
        if facts.is_empty():
            logger.debug(f"No recognised type -a lines for {command!r}: {stdout!r}")
        return facts

    def builtin_names(self) -> List[str]:
        try:
            rc, stdout, stderr = self._run("compgen -b; compgen -k")
        except FactLookupError as e:
            logger.warning(f"Falling back to built-in list of bash builtins: {e}")
            return sorted(BASH_BUILTINS | BASH_KEYWORDS)

        if rc != 0:
            logger.warning(f"compgen failed ({rc}): {stderr}")
            return sorted(BASH_BUILTINS | BASH_KEYWORDS)

        names = {line.strip() for line in stdout.splitlines() if line.strip()}
        return sorted(names)

    def function_names(self) -> List[str]:
        try:
            rc, stdout, stderr = self._run("declare -F")
        except FactLookupError as e:
            logger.warning(f"Cannot list functions: {e}")
            return []

        names = []
        for line in stdout.splitlines():
            parts = line.split()
            # "declare -f name" or "declare -fx name"
            if len(parts) == 3 and parts[0] == "declare":
                names.append(parts[2])
        return sorted(names)


def create_fact_provider(
    bash_path: str = "bash",
    alias_files: Sequence[str] = (),
    search_path: Optional[Sequence[str]] = None,
    timeout: float = 5.0
) -> FactProvider:
    """Pick the provider for this environment.

    Bash is asked directly when it is installed; otherwise aliases are
    read from the alias files and the builtin tables are used.

    Args:
        bash_path: bash executable
        alias_files: Exported alias files
        search_path: PATH directories
        timeout: Seconds allowed per bash invocation

    Returns:
        FactProvider
    """
    if BashFactProvider.available(bash_path):
        logger.debug(f"Using bash provider ({bash_path})")
        return BashFactProvider(
            bash_path=bash_path,
            source_files=alias_files,
            search_path=search_path,
            timeout=timeout,
        )

    logger.info(f"{bash_path} not found; using static provider")
    return StaticFactProvider.from_alias_files(alias_files, search_path=search_path)
