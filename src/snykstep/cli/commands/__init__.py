"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace

from snykstep.security.acl import Permission, Principal

# The local operator owns the snykstep home directory
OPERATOR = Principal("operator", frozenset({Permission.ADMINISTER}))


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier."""

    @abstractmethod
    def execute(self, args: Namespace) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# ruff: noqa: E402
from snykstep.cli.commands.validate import ValidateCommand
from snykstep.cli.commands.options import OptionsCommand
from snykstep.cli.commands.installations import InstallationsCommand
from snykstep.cli.commands.init import InitCommand

__all__ = [
    "Command",
    "OPERATOR",
    "ValidateCommand",
    "OptionsCommand",
    "InstallationsCommand",
    "InitCommand",
]
