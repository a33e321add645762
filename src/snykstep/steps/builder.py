"""Base classes for configurable build steps."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Builder(ABC):
    """A unit of work executed as part of a job's build.

    Subclasses hold their configuration and expose a descriptor carrying
    metadata and form support for the step type.
    """

    def perform(self, build: Any, launcher: Any, listener: Any) -> bool:
        """Run the step.

        Args:
            build: Build being executed.
            launcher: Process launcher for the build's node.
            listener: Receives build log output.

        Returns:
            True if the build should continue.
        """
        return True

    @classmethod
    @abstractmethod
    def get_descriptor(cls) -> "BuildStepDescriptor":
        """Descriptor singleton for this step type."""


class BuildStepDescriptor(ABC):
    """Metadata and form support for a build step type."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human readable name shown when adding the step to a job."""

    def is_applicable(self, job_type: Any) -> bool:
        """Whether the step can be added to jobs of the given type."""
        return True
