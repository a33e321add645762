"""Installations command implementation."""

from __future__ import annotations

from argparse import Namespace

from snykstep.cli.commands import Command
from snykstep.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from snykstep.core.logging import get_logger
from snykstep.steps.snyk_build_step import get_descriptor
from snykstep.tools.installation import SnykInstallation, ToolStatus

LOGGER = get_logger(__name__)


class InstallationsCommand(Command):
    """Lists, adds and removes Snyk installations."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "installations"

    def execute(self, args: Namespace) -> int:
        if args.action == "add":
            return self._add(args.name, args.home)
        if args.action == "remove":
            return self._remove(args.name)
        return self._list()

    def _list(self) -> int:
        descriptor = get_descriptor()

        print("Snyk installations:")
        if not descriptor.has_installations_available():
            print("  No installations configured.")
            return EXIT_SUCCESS

        for installation in descriptor.get_installations():
            status = installation.status()
            if status == ToolStatus.PRESENT:
                status_str = "installed"
            else:
                status_str = f"{status.value} ({installation.executable()})"
            print(f"  {installation.name}: {installation.home} [{status_str}]")

        return EXIT_SUCCESS

    def _add(self, name: str, home: str) -> int:
        descriptor = get_descriptor()
        new = SnykInstallation(name=name, home=home)

        installations = list(descriptor.get_installations())
        replaced = False
        for index, existing in enumerate(installations):
            if existing.name == name:
                installations[index] = SnykInstallation(name=name, home=home, properties=existing.properties)
                replaced = True
                break
        if not replaced:
            installations.append(new)

        descriptor.set_installations(*installations)
        LOGGER.info(f"{'Updated' if replaced else 'Added'} installation {name}")
        print(f"{'Updated' if replaced else 'Added'} installation '{name}' ({home})")

        if new.status() != ToolStatus.PRESENT:
            print(f"  Note: {new.executable()} is {new.status().value.replace('_', ' ')}")

        return EXIT_SUCCESS

    def _remove(self, name: str) -> int:
        descriptor = get_descriptor()
        installations = descriptor.get_installations()
        remaining = [installation for installation in installations if installation.name != name]

        if len(remaining) == len(installations):
            print(f"Error: no installation named '{name}'")
            return EXIT_INVALID_USAGE

        descriptor.set_installations(*remaining)
        print(f"Removed installation '{name}'")
        return EXIT_SUCCESS
