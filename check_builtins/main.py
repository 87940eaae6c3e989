"""Command line entry point of check-builtins."""

import argparse
import sys
from typing import List, Optional, Sequence
import logging

from . import __version__
from .audit.aggregator import BUILTINS_GROUP, CRITICAL_GROUP, Auditor
from .config import Config, ConfigError
from .io.json_writer import write_json_report
from .io.table_renderer import TableRenderer
from .models.report import AuditSummary
from .models.status import StatusCode
from .shell.alias_file import ALIAS_FILE_ENV, collect_alias_files
from .shell.provider import create_fact_provider
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)

EXIT_MULTIPLE_COMMANDS = 1
EXIT_CONFIG_ERROR = 1
EXIT_USAGE = 2

LICENSE_LINE = "MIT License - Copyright (c) 2025 shadowbq"

# Names people usually alias in their interactive shell
COMMONLY_ALIASED = ("ls", "grep", "ll")

EPILOG = f"""\
Aliases and functions of your interactive shell are not inherited by
child processes. Export them first:
  alias > ~/.aliases
  check-builtins --alias-file ~/.aliases ls
or set {ALIAS_FILE_ENV}=~/.aliases.

Configuration file (.check_builtins, or a .yaml file):
  WHITELIST <command>      whitelist a command override
  CRITICAL <command>       add command to critical commands list
  NONCRITICAL <command>    remove command from critical commands list
Searched in: $CHECK_BUILTINS, ./, $HOME, /usr/local/etc, /etc

Status codes (bash precedence order):
  0 = builtin/keyword       native shell commands
  1 = function override     user-defined function overrides
  2 = alias override        user-defined alias overrides
  3 = external command      external executables in PATH
  4 = unknown               command not found
  5 = whitelisted override  approved overrides
Single command mode exits with the status code. --all exits 0, or with
the worst status when --strict is given. 2 = improper usage.

The INFO column shows the full detection chain
(alias -> function -> builtin -> external), separated by " | ".
External commands include their PATH position.
"""


class BuiltinCheck:
    """Runs single command checks or the full audit for one configuration."""

    def __init__(
        self,
        config: Config,
        alias_files: Sequence[str] = (),
        renderer: Optional[TableRenderer] = None
    ):
        """Initialize the check.

        Args:
            config: Run configuration
            alias_files: Exported alias files to load
            renderer: Table output (stdout when None)
        """
        self.config = config
        self.alias_files = list(alias_files)
        self.renderer = renderer or TableRenderer()

        self._init_components()

    def _init_components(self) -> None:
        self.provider = create_fact_provider(
            bash_path=self.config.bash_path,
            alias_files=self.alias_files,
            timeout=self.config.timeout,
        )
        self.critical = self.config.critical_commands()
        self.auditor = Auditor(
            self.provider,
            whitelist=self.config.whitelist_set,
            critical=self.critical,
            max_workers=self.config.max_workers,
        )
        logger.debug(f"Critical commands: {self.critical}")
        logger.debug(f"Whitelist: {sorted(self.config.whitelist_set)}")

    def check_command(self, command: str) -> StatusCode:
        """Check one command and print its row.

        Args:
            command: Command name

        Returns:
            Status of the command
        """
        if not self.alias_files and command in COMMONLY_ALIASED:
            self._suggest_alias_export(command)

        result = self.auditor.audit_command(command)
        self.renderer.render([result])
        return result.status

    def run_all(
        self,
        json_output: Optional[str] = None,
        show_functions: bool = False,
        strict: bool = False
    ) -> int:
        """Audit all builtins and the critical commands.

        Args:
            json_output: File for the JSON report of the builtins group
            show_functions: List user-defined functions afterwards
            strict: Print the worst status and use it as exit code

        Returns:
            Exit code
        """
        summary = self.auditor.audit_all()
        builtins_report = summary.get(BUILTINS_GROUP)
        critical_report = summary.get(CRITICAL_GROUP)

        self.renderer.render_report(builtins_report)
        self.renderer.render_report(critical_report, title="Critical commands audit:")

        if show_functions:
            self.renderer.message("\nUser-defined functions:")
            for name in self.provider.function_names():
                self.renderer.message(name)

        if json_output:
            path = write_json_report(builtins_report, json_output)
            self.renderer.message(f"JSON report written to {path}")

        worst = summary.worst
        self._log_statistics(summary)

        if strict:
            self.renderer.message(f"Worst status found: {int(worst)}")
            return int(worst)
        return 0

    def _suggest_alias_export(self, command: str) -> None:
        print(
            f"Note: '{command}' is commonly aliased.\n"
            f"  To check the aliases of your current shell:\n"
            f"  alias > ~/.aliases && check-builtins --alias-file ~/.aliases {command}\n",
            file=sys.stderr
        )

    def _log_statistics(self, summary: AuditSummary) -> None:
        stats = self.auditor.stats
        logger.info(f"Commands checked: {stats.commands}")
        logger.info(f"Overrides: {stats.overrides}")
        logger.info(f"Unknown: {stats.unknown}")

        for report in summary.reports:
            counts = report.count_by_status()
            breakdown = ", ".join(
                f"{status.label}={count}" for status, count in counts.items() if count
            )
            logger.info(f"{report.name}: {breakdown or 'no commands'}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check-builtins",
        description=(
            "Show how bash resolves commands (alias, function, builtin or "
            "external) and flag overridden critical commands."
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "commands",
        nargs="*",
        metavar="COMMAND",
        help="command to check"
    )
    parser.add_argument(
        "-a", "--all",
        action="store_true",
        help="list all builtins and the critical commands audit"
    )
    parser.add_argument(
        "--functions",
        action="store_true",
        help="show user-defined functions (with --all)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="report the worst status found and exit with it (with --all)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug output"
    )
    parser.add_argument(
        "--json",
        metavar="FILE",
        help="export builtin results to JSON (with --all)"
    )
    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="configuration file (skips the search)"
    )
    parser.add_argument(
        "--alias-file",
        action="append",
        default=[],
        metavar="FILE",
        help="alias file in 'alias' output format (repeatable)"
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        metavar="N",
        help="number of concurrent lookups"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="never use ANSI colors"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"check_builtins version {__version__}\n{LICENSE_LINE}"
    )
    return parser


def load_config(config_file: Optional[str]) -> Config:
    """Load the given configuration file or search for one."""
    if config_file:
        return Config.load(config_file)
    return Config.discover()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Arguments without the program name (sys.argv when None)

    Returns:
        Exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Console logging until the configuration is known
    setup_logging(level="DEBUG" if args.debug else "WARNING")

    if len(args.commands) > 1:
        print(
            f"Error: Multiple commands given: '{args.commands[0]}' and "
            f"'{args.commands[1]}'",
            file=sys.stderr
        )
        return EXIT_MULTIPLE_COMMANDS

    if not args.commands and not args.all:
        parser.print_help()
        return EXIT_USAGE

    # Configuration
    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    # Command line overrides
    if args.debug:
        config.log_level = "DEBUG"
    if args.jobs is not None:
        config.max_workers = args.jobs
    if config.log_file or config.log_level.upper() != "WARNING":
        setup_logging(level=config.log_level, log_file=config.log_file)

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        return EXIT_CONFIG_ERROR

    # Run
    alias_files = collect_alias_files(config.alias_files + args.alias_file)
    renderer = TableRenderer(color=False if args.no_color else None)
    check = BuiltinCheck(config, alias_files=alias_files, renderer=renderer)

    if args.commands:
        return int(check.check_command(args.commands[0]))

    return check.run_all(
        json_output=args.json,
        show_functions=args.functions,
        strict=args.strict,
    )


if __name__ == "__main__":
    sys.exit(main())
