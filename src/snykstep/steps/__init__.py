"""Build steps and their descriptors."""

from snykstep.steps.builder import Builder, BuildStepDescriptor
from snykstep.steps.snyk_build_step import (
    SnykBuildStep,
    SnykBuildStepDescriptor,
    get_descriptor,
    reset_descriptor,
)

__all__ = [
    "Builder",
    "BuildStepDescriptor",
    "SnykBuildStep",
    "SnykBuildStepDescriptor",
    "get_descriptor",
    "reset_descriptor",
]
