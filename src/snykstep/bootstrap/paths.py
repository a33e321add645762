"""Path management for the snykstep home directory.

Holds the persisted installation registry and the credential store file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".snykstep"

# Environment variable to override home directory
SNYKSTEP_HOME_ENV = "SNYKSTEP_HOME"


def get_snykstep_home() -> Path:
    """Get the snykstep home directory path.

    Resolution order:
    1. SNYKSTEP_HOME environment variable (if set)
    2. ~/.snykstep (default)

    Returns:
        Path to the snykstep home directory.
    """
    env_home = os.environ.get(SNYKSTEP_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


@dataclass
class SnykStepPaths:
    """Manages paths within the snykstep home directory.

    Directory structure:
        ~/.snykstep/
            config/
                installations.yml   - Snyk installation registry
                credentials.yml     - Credential store
    """

    home: Path

    _CONFIG_DIR: ClassVar[str] = "config"
    _INSTALLATIONS_FILE: ClassVar[str] = "installations.yml"
    _CREDENTIALS_FILE: ClassVar[str] = "credentials.yml"

    @classmethod
    def default(cls) -> "SnykStepPaths":
        """Create paths from the default snykstep home."""
        return cls(get_snykstep_home())

    @property
    def config_dir(self) -> Path:
        return self.home / self._CONFIG_DIR

    @property
    def installations_file(self) -> Path:
        """Persisted Snyk installation registry."""
        return self.config_dir / self._INSTALLATIONS_FILE

    @property
    def credentials_file(self) -> Path:
        """Credential store file."""
        return self.config_dir / self._CREDENTIALS_FILE

