"""Options command implementation."""

from __future__ import annotations

from argparse import Namespace

from snykstep.cli.commands import OPERATOR, Command
from snykstep.cli.exit_codes import EXIT_SUCCESS
from snykstep.core.models import ListBoxModel
from snykstep.security.acl import Item, Principal
from snykstep.steps.snyk_build_step import get_descriptor


class OptionsCommand(Command):
    """Prints the dropdown options offered for a step field."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "options"

    def execute(self, args: Namespace) -> int:
        descriptor = get_descriptor()

        if args.field == "severity":
            model = descriptor.fill_severity_items()
        elif args.field == "installations":
            if not descriptor.has_installations_available():
                print("No Snyk installations configured.")
                print("Add one with 'snykstep installations add NAME --home PATH'.")
                return EXIT_SUCCESS
            model = descriptor.fill_snyk_installation_items()
        else:
            principal = Principal(args.user) if args.user else OPERATOR
            item = Item(args.item, is_folder=args.folder) if args.item else None
            model = descriptor.fill_snyk_token_id_items(principal, item, args.current)

        _print_model(model)
        return EXIT_SUCCESS


def _print_model(model: ListBoxModel) -> None:
    if not len(model):
        print("  (no options)")
        return
    for option in model:
        if option.name == option.value:
            print(f"  {option.value}")
        else:
            print(f"  {option.name}: {option.value!r}")
