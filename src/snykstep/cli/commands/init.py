"""Init command implementation.

Creates a .snyk-step.yml in the project, either interactively or from flags.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Any, Dict, List, Optional

import questionary
from questionary import Style

from snykstep.cli.commands import OPERATOR, Command
from snykstep.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from snykstep.config.loader import PROJECT_CONFIG_NAMES, write_step_config
from snykstep.core.logging import get_logger
from snykstep.core.models import DEFAULT_SEVERITY, ValidationKind
from snykstep.steps.snyk_build_step import (
    SnykBuildStep,
    SnykBuildStepDescriptor,
    get_descriptor,
)

LOGGER = get_logger(__name__)

CONFIG_FILE_NAME = PROJECT_CONFIG_NAMES[0]

# Custom questionary style
STYLE = Style([
    ("qmark", "fg:cyan bold"),
    ("question", "bold"),
    ("answer", "fg:cyan"),
    ("pointer", "fg:cyan bold"),
    ("highlighted", "fg:cyan bold"),
])


class _Aborted(Exception):
    pass


class InitCommand(Command):
    """Interactive step configuration command."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "init"

    def execute(self, args: Namespace) -> int:
        """Execute the init command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code.
        """
        project_root = Path(args.path).resolve()

        if not project_root.is_dir():
            print(f"Error: {project_root} is not a directory")
            return EXIT_INVALID_USAGE

        config_path = project_root / CONFIG_FILE_NAME
        if config_path.exists() and not args.force:
            if args.non_interactive:
                print(f"Error: {config_path} already exists. Use --force to overwrite.")
                return EXIT_INVALID_USAGE

            overwrite = questionary.confirm(
                f"{CONFIG_FILE_NAME} already exists. Overwrite?",
                default=False,
                style=STYLE,
            ).ask()

            if not overwrite:
                print("Aborted.")
                return EXIT_SUCCESS

        descriptor = get_descriptor()

        if args.non_interactive:
            step = SnykBuildStep.from_form(_values_from_flags(args))
        else:
            try:
                step = SnykBuildStep.from_form(self._prompt(descriptor, args))
            except _Aborted:
                print("\nAborted.")
                return EXIT_SUCCESS

        write_step_config(config_path, step)
        print(f"\nCreated {config_path.relative_to(project_root)}")

        problems = [
            (field_name, result)
            for field_name, result in descriptor.check_step(step)
            if result.kind != ValidationKind.OK
        ]
        if problems:
            print("\nReview before use:")
            for field_name, result in problems:
                print(f"  {field_name}: {result.kind.value}: {result.message}")

        print("\nDone! Run 'snykstep validate' to check the configuration.")
        return EXIT_SUCCESS

    def _prompt(self, descriptor: SnykBuildStepDescriptor, args: Namespace) -> Dict[str, Any]:
        """Ask for each field, using flag values as defaults."""
        values = _values_from_flags(args)

        values["severity"] = _ask(questionary.select(
            "Minimum severity that fails the build:",
            choices=descriptor.fill_severity_items().values(),
            default=values["severity"],
            style=STYLE,
        ))

        token_options = descriptor.fill_snyk_token_id_items(OPERATOR, None, values.get("snyk_token_id"))
        token_choices = [
            questionary.Choice(title=option.name, value=option.value)
            for option in token_options
            if option.value
        ]
        if token_choices:
            values["snyk_token_id"] = _ask(questionary.select(
                "Snyk API token:",
                choices=token_choices,
                style=STYLE,
            ))
        else:
            values["snyk_token_id"] = _ask(questionary.text(
                "Snyk API token credential id:",
                default=values.get("snyk_token_id") or "",
                style=STYLE,
            ))

        values["fail_on_issues"] = _ask(questionary.confirm(
            "Fail the build when issues are found?",
            default=values["fail_on_issues"],
            style=STYLE,
        ))
        values["monitor_project_on_build"] = _ask(questionary.confirm(
            "Monitor the project on build?",
            default=values["monitor_project_on_build"],
            style=STYLE,
        ))

        for key, question in (
            ("target_file", "Target file (blank for auto-detect):"),
            ("organisation", "Organisation (blank for default):"),
            ("project_name", "Project name (blank for default):"),
        ):
            if key == "project_name" and not values["monitor_project_on_build"]:
                continue
            values[key] = _blank_to_none(_ask(questionary.text(
                question,
                default=values.get(key) or "",
                style=STYLE,
            )))

        installation_names: List[str] = descriptor.fill_snyk_installation_items().values()
        if installation_names:
            values["snyk_installation"] = _ask(questionary.select(
                "Snyk installation:",
                choices=installation_names,
                style=STYLE,
            ))

        return values


def _values_from_flags(args: Namespace) -> Dict[str, Any]:
    return {
        "fail_on_issues": args.fail_on_issues,
        "monitor_project_on_build": args.monitor_project_on_build,
        "severity": args.severity or DEFAULT_SEVERITY.value,
        "snyk_token_id": args.snyk_token_id,
        "target_file": args.target_file,
        "organisation": args.organisation,
        "project_name": args.project_name,
        "snyk_installation": args.snyk_installation,
    }


def _ask(question: "questionary.Question") -> Any:
    answer = question.ask()
    if answer is None:
        raise _Aborted()
    return answer


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()
