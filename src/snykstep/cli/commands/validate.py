"""Validate command implementation."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from snykstep.cli.commands import Command
from snykstep.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS, EXIT_VALIDATION_ERRORS
from snykstep.config.loader import read_step_config
from snykstep.core.logging import get_logger
from snykstep.core.models import ValidationKind
from snykstep.steps.snyk_build_step import get_descriptor

LOGGER = get_logger(__name__)


class ValidateCommand(Command):
    """Validates a step configuration file against the descriptor checks."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "validate"

    def execute(self, args: Namespace) -> int:
        """Execute the validate command.

        Prints config file warnings, then each field check. Warnings do not
        affect the exit code; any field error does.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code.
        """
        project_root = Path(args.path).resolve()
        loaded = read_step_config(project_root, config_path=args.config)

        if loaded.path is None:
            print(f"Error: no step configuration found in {project_root}")
            print("Run 'snykstep init' to create one.")
            return EXIT_INVALID_USAGE

        descriptor = get_descriptor()

        print(f"Validating {loaded.path}")

        for warning in loaded.warnings:
            line = f"  warning: {warning.message}"
            if warning.suggestion:
                line += f" (did you mean '{warning.suggestion}'?)"
            print(line)

        has_errors = False
        for field_name, result in descriptor.check_step(loaded.step):
            if result.kind == ValidationKind.OK:
                print(f"  {field_name}: ok")
                continue
            if result.kind == ValidationKind.ERROR:
                has_errors = True
            print(f"  {field_name}: {result.kind.value}: {result.message}")

        if has_errors:
            print("Step configuration has errors.")
            return EXIT_VALIDATION_ERRORS

        print("Step configuration is valid.")
        return EXIT_SUCCESS
