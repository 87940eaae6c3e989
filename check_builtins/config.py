"""Configuration management."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional
from pathlib import Path
import os
import re
import logging

import yaml

from .audit.critical import CRITICAL_DEFAULTS, resolve_critical_set

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".check_builtins"
CONFIG_ENV = "CHECK_BUILTINS"

DIRECTIVE_PATTERN = re.compile(r"^(WHITELIST|CRITICAL|NONCRITICAL)\s+([^\s#]+)")
YAML_SUFFIXES = (".yaml", ".yml")
PACKAGE_DIR = Path(__file__).resolve().parent


class ConfigError(Exception):
    """A configuration file exists but cannot be used."""
    pass


def _name_list(data: Mapping[str, Any], *keys: str) -> List[str]:
    """Read a list setting, trying each key in turn.

    A single string is taken as a one-element list.

    Raises:
        ConfigError: If the value is neither a list nor a string
    """
    value: Any = None
    for key in keys:
        if data.get(key) is not None:
            value = data[key]
            break

    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(
            f"'{keys[0]}' must be a list or a string, got {type(value).__name__}"
        )
    return [str(item) for item in value]


@dataclass
class Config:
    """Settings for one audit run."""

    # Directive settings
    whitelist: List[str] = field(default_factory=list)
    critical_additions: List[str] = field(default_factory=list)
    critical_removals: List[str] = field(default_factory=list)

    # "standard" or "with-ls"
    critical_defaults: str = "standard"

    # Shell introspection
    alias_files: List[str] = field(default_factory=list)
    bash_path: str = "bash"
    timeout: float = 5.0  # seconds per bash call
    max_workers: int = 1

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    # File the settings were read from
    source: Optional[str] = None

    @property
    def whitelist_set(self) -> FrozenSet[str]:
        return frozenset(self.whitelist)

    def critical_commands(self) -> List[str]:
        """Resolve the critical command list.

        Returns:
            Default list with CRITICAL names added and NONCRITICAL removed
        """
        defaults = CRITICAL_DEFAULTS.get(
            self.critical_defaults,
            CRITICAL_DEFAULTS["standard"]
        )
        return resolve_critical_set(
            defaults,
            self.critical_additions,
            self.critical_removals
        )

    @classmethod
    def parse_directives(cls, lines: Iterable[str]) -> "Config":
        """Build a configuration from directive lines.

        Recognized lines are ``WHITELIST <name>``, ``CRITICAL <name>`` and
        ``NONCRITICAL <name>``. Comments, blank lines and anything else are
        skipped.

        Args:
            lines: Lines of a directive file

        Returns:
            Config instance
        """
        config = cls()

        for line_no, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            match = DIRECTIVE_PATTERN.match(line)
            if not match:
                logger.debug(f"Ignoring config line {line_no}: {line!r}")
                continue

            directive, name = match.groups()
            if directive == "WHITELIST":
                if name not in config.whitelist:
                    config.whitelist.append(name)
            elif directive == "CRITICAL":
                config.critical_additions.append(name)
                logger.debug(f"Adding critical command: {name}")
            else:
                config.critical_removals.append(name)
                logger.debug(f"Removing critical command: {name}")

        return config

    @classmethod
    def from_directives(cls, file_path: str) -> "Config":
        """Read a ``.check_builtins`` directive file.

        Args:
            file_path: Path of the directive file

        Returns:
            Config instance

        Raises:
            ConfigError: If the file cannot be read
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                config = cls.parse_directives(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read {file_path}: {e}") from e

        config.source = str(file_path)
        logger.info(f"Configuration loaded from {file_path}")
        return config

    @classmethod
    def from_yaml(cls, file_path: str) -> "Config":
        """Read a YAML configuration file.

        Expected format:
        ```yaml
        whitelist: [ls, grep]
        critical: [wget]
        noncritical: [echo]
        critical_defaults: with-ls
        alias_files: [~/.aliases]
        log_level: INFO
        ```

        Args:
            file_path: Path of the YAML file

        Returns:
            Config instance

        Raises:
            ConfigError: If the file cannot be read, is not a mapping or
                holds a value of the wrong type
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{file_path}: top level must be a mapping")

        try:
            config = cls.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{file_path}: invalid value: {e}") from e
        config.source = str(file_path)
        logger.info(f"Configuration loaded from {file_path}")
        return config

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """Create a configuration from a dictionary.

        The directive names ``critical`` and ``noncritical`` are accepted
        as aliases of ``critical_additions`` and ``critical_removals``.
        A list setting may also be given as a single string.

        Args:
            data: Settings dictionary

        Returns:
            Config instance

        Raises:
            ConfigError: If a list setting is neither a list nor a string
        """
        config = cls()

        # Name lists
        config.whitelist = _name_list(data, "whitelist")
        config.critical_additions = _name_list(data, "critical", "critical_additions")
        config.critical_removals = _name_list(data, "noncritical", "critical_removals")
        config.critical_defaults = str(
            data.get("critical_defaults", config.critical_defaults)
        )

        # Shell introspection
        config.alias_files = [
            os.path.expanduser(p) for p in _name_list(data, "alias_files")
        ]
        config.bash_path = str(data.get("bash_path", config.bash_path))
        config.timeout = float(data.get("timeout", config.timeout))
        config.max_workers = int(data.get("max_workers", config.max_workers))

        # Logging
        config.log_level = str(data.get("log_level", config.log_level))
        config.log_file = data.get("log_file")

        return config

    @classmethod
    def load(cls, file_path: str) -> "Config":
        """Read a directive or YAML file, chosen by extension."""
        if str(file_path).lower().endswith(YAML_SUFFIXES):
            return cls.from_yaml(file_path)
        return cls.from_directives(file_path)

    @staticmethod
    def search_paths(
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
        home: Optional[Path] = None,
        install_dir: Optional[Path] = None
    ) -> List[Path]:
        """Candidate configuration files in priority order.

        Args:
            environ: Environment (os.environ when None)
            cwd: Working directory (current one when None)
            home: Home directory (the user's when None)
            install_dir: Directory of the installed package (this one when None)

        Returns:
            List of paths; the first existing one is used
        """
        if environ is None:
            environ = os.environ
        cwd = cwd or Path.cwd()
        home = home or Path.home()
        install_dir = install_dir or PACKAGE_DIR

        paths = []
        if environ.get(CONFIG_ENV):
            paths.append(Path(environ[CONFIG_ENV]))
        paths.extend([
            cwd / CONFIG_FILE_NAME,
            install_dir / CONFIG_FILE_NAME,
            home / CONFIG_FILE_NAME,
            Path("/usr/local/etc") / CONFIG_FILE_NAME,
            Path("/etc") / CONFIG_FILE_NAME,
        ])
        return paths

    @classmethod
    def find_config_file(cls, **kwargs) -> Optional[Path]:
        """Return the first existing configuration file, if any.

        Keyword arguments are passed to search_paths().
        """
        for path in cls.search_paths(**kwargs):
            if path.is_file():
                logger.debug(f"Found config file: {path}")
                return path

        logger.debug("No config file found in search paths")
        return None

    @classmethod
    def discover(cls, **kwargs) -> "Config":
        """Load the first configuration file found, or defaults."""
        path = cls.find_config_file(**kwargs)
        if path is None:
            return cls()
        return cls.load(str(path))

    def validate(self) -> List[str]:
        """Validate the configuration.

        Returns:
            List of error messages (empty when valid)
        """
        errors = []

        if self.critical_defaults not in CRITICAL_DEFAULTS:
            errors.append(
                f"critical_defaults must be one of "
                f"{', '.join(CRITICAL_DEFAULTS)}: {self.critical_defaults}"
            )
        if self.max_workers < 1:
            errors.append(f"max_workers must be at least 1: {self.max_workers}")
        if self.timeout <= 0:
            errors.append(f"timeout must be positive: {self.timeout}")

        for path in self.alias_files:
            if not Path(path).exists():
                logger.warning(f"Alias file does not exist: {path}")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary.

        Returns:
            Settings in the YAML layout
        """
        return {
            "whitelist": list(self.whitelist),
            "critical": list(self.critical_additions),
            "noncritical": list(self.critical_removals),
            "critical_defaults": self.critical_defaults,
            "alias_files": list(self.alias_files),
            "bash_path": self.bash_path,
            "timeout": self.timeout,
            "max_workers": self.max_workers,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }
