"""Argument parser for the snykstep CLI."""

from __future__ import annotations

import argparse
from pathlib import Path

from snykstep.core.models import Severity


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snykstep",
        description="snykstep - Snyk security build step configuration.",
    )

    # Global options
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show snykstep version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    _add_validate_parser(subparsers)
    _add_options_parser(subparsers)
    _add_installations_parser(subparsers)
    _add_init_parser(subparsers)

    return parser


def _add_validate_parser(subparsers: argparse._SubParsersAction) -> None:
    validate = subparsers.add_parser(
        "validate",
        help="Validate a step configuration file.",
    )
    validate.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory (default: current directory).",
    )
    validate.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to step config file (default: .snyk-step.yml in project root).",
    )


def _add_options_parser(subparsers: argparse._SubParsersAction) -> None:
    options = subparsers.add_parser(
        "options",
        help="List dropdown options for a step field.",
    )
    options.add_argument(
        "field",
        choices=["severity", "credentials", "installations"],
        help="Field to list options for.",
    )
    options.add_argument(
        "--item",
        metavar="NAME",
        help="Full name of the job being configured (e.g. team-a/app).",
    )
    options.add_argument(
        "--folder",
        action="store_true",
        help="Treat --item as a folder rather than a job.",
    )
    options.add_argument(
        "--current",
        metavar="ID",
        help="Currently configured credential id.",
    )
    options.add_argument(
        "--user",
        metavar="NAME",
        help="List as a user without administrative permissions.",
    )


def _add_installations_parser(subparsers: argparse._SubParsersAction) -> None:
    installations = subparsers.add_parser(
        "installations",
        help="Manage Snyk installations.",
    )
    actions = installations.add_subparsers(dest="action", metavar="ACTION")
    actions.required = True

    actions.add_parser("list", help="List configured installations.")

    add = actions.add_parser("add", help="Add or update an installation.")
    add.add_argument("name", help="Installation name.")
    add.add_argument(
        "--home",
        required=True,
        help="Directory containing the Snyk CLI binary.",
    )

    remove = actions.add_parser("remove", help="Remove an installation.")
    remove.add_argument("name", help="Installation name.")


def _add_init_parser(subparsers: argparse._SubParsersAction) -> None:
    init = subparsers.add_parser(
        "init",
        help="Create a step configuration file.",
    )
    init.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory (default: current directory).",
    )
    init.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing step configuration.",
    )
    init.add_argument(
        "--non-interactive",
        action="store_true",
        help="Do not prompt; take values from flags.",
    )
    init.add_argument(
        "--severity",
        choices=[severity.value for severity in Severity],
        default=None,
        help="Minimum severity that fails the build (default: low).",
    )
    init.add_argument("--token-id", dest="snyk_token_id", help="Snyk API token credential id.")
    init.add_argument("--target-file", dest="target_file", help="Manifest file to scan.")
    init.add_argument("--organisation", help="Snyk organisation.")
    init.add_argument("--project-name", dest="project_name", help="Project name used for monitoring.")
    init.add_argument("--installation", dest="snyk_installation", help="Snyk installation name.")
    init.add_argument(
        "--no-fail-on-issues",
        dest="fail_on_issues",
        action="store_false",
        help="Do not fail the build when issues are found.",
    )
    init.add_argument(
        "--no-monitor",
        dest="monitor_project_on_build",
        action="store_false",
        help="Do not monitor the project on build.",
    )
