"""CLI runner: parses arguments and dispatches to commands."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Dict, Iterable, Optional

from snykstep.cli.arguments import build_parser
from snykstep.cli.commands import (
    Command,
    InitCommand,
    InstallationsCommand,
    OptionsCommand,
    ValidateCommand,
)
from snykstep.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from snykstep.config.loader import ConfigError
from snykstep.core.logging import configure_logging, get_logger
from snykstep.credentials.store import CredentialsError
from snykstep.tools.installation import InstallationError

LOGGER = get_logger(__name__)


def get_version() -> str:
    try:
        return version("snykstep")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from snykstep import __version__

        return __version__


class CLIRunner:
    """Runs one CLI invocation and maps failures to exit codes."""

    def __init__(self) -> None:
        self._parser = build_parser()
        self._commands: Dict[str, Command] = {
            command.name: command
            for command in (
                ValidateCommand(),
                OptionsCommand(),
                InstallationsCommand(),
                InitCommand(),
            )
        }

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        argv_list = list(argv) if argv is not None else None

        try:
            args = self._parser.parse_args(argv_list)
        except SystemExit as e:
            # argparse exits 0 for --help and 2 for usage errors
            return EXIT_SUCCESS if not e.code else EXIT_INVALID_USAGE

        # Configure logging as early as possible.
        configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

        if args.version:
            print(get_version())
            return EXIT_SUCCESS

        command = self._commands.get(args.command) if args.command else None
        if command is None:
            self._parser.print_help()
            return EXIT_SUCCESS

        try:
            return command.execute(args)
        except (ConfigError, CredentialsError, InstallationError) as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE
