"""Named Snyk tool installations."""

from snykstep.tools.installation import (
    InstallationError,
    InstallationRegistry,
    SnykInstallation,
    ToolStatus,
)

__all__ = [
    "InstallationError",
    "InstallationRegistry",
    "SnykInstallation",
    "ToolStatus",
]
