"""Snyk tool installations and their persisted registry.

The registry keeps its installations in a tuple that is only ever replaced
wholesale. Readers take the current tuple without locking; writers swap it
under a lock and persist the new contents.
"""

from __future__ import annotations

import os
import sys
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from snykstep.core.logging import get_logger

LOGGER = get_logger(__name__)


class InstallationError(Exception):
    """Installation registry loading or update error."""

    pass


class ToolStatus(str, Enum):
    """Status of an installation's binary."""

    PRESENT = "present"
    MISSING = "missing"
    NOT_EXECUTABLE = "not_executable"


def _binary_name() -> str:
    if sys.platform.startswith("win"):
        return "snyk-win.exe"
    if sys.platform == "darwin":
        return "snyk-macos"
    return "snyk-linux"


@dataclass(frozen=True)
class SnykInstallation:
    """An administrator-configured Snyk CLI location."""

    name: str
    home: str
    properties: Dict[str, Any] = field(default_factory=dict, hash=False)

    def executable(self) -> Path:
        """Path to the Snyk binary inside ``home``."""
        return Path(self.home) / _binary_name()

    def status(self) -> ToolStatus:
        """Check whether the binary is present and executable."""
        binary = self.executable()
        if not binary.exists():
            return ToolStatus.MISSING
        if not os.access(binary, os.X_OK):
            return ToolStatus.NOT_EXECUTABLE
        return ToolStatus.PRESENT

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "home": self.home}
        if self.properties:
            data["properties"] = dict(self.properties)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnykInstallation":
        if not isinstance(data, dict) or not data.get("name") or not data.get("home"):
            raise InstallationError(f"Installation entry needs 'name' and 'home': {data!r}")
        properties = data.get("properties") or {}
        if not isinstance(properties, dict):
            raise InstallationError(f"'properties' of installation '{data['name']}' must be a mapping")
        return cls(name=str(data["name"]), home=str(data["home"]), properties=properties)


class InstallationRegistry:
    """Persisted, copy-on-write list of Snyk installations.

    Args:
        path: YAML file the registry is loaded from and saved to.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._write_lock = threading.Lock()
        self._installations: Tuple[SnykInstallation, ...] = ()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def installations(self) -> Tuple[SnykInstallation, ...]:
        """Current snapshot of installations."""
        return self._installations

    def load(self) -> None:
        """Load installations from disk. A missing file means no installations.

        Raises:
            InstallationError: If the file cannot be read or parsed.
        """
        if not self._path.exists():
            LOGGER.debug(f"No installation registry at {self._path}")
            self._installations = ()
            return

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f.read())
        except yaml.YAMLError as e:
            raise InstallationError(f"Invalid YAML in {self._path}: {e}") from e
        except OSError as e:
            raise InstallationError(f"Cannot read installation registry {self._path}: {e}") from e

        if data is None:
            data = {"installations": []}
        entries = data.get("installations") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise InstallationError(f"{self._path} must contain an 'installations' list")

        installations = tuple(SnykInstallation.from_dict(entry) for entry in entries)
        _check_unique_names(installations)
        self._installations = installations
        LOGGER.debug(f"Loaded {len(installations)} Snyk installations from {self._path}")

    def replace(self, *installations: SnykInstallation) -> None:
        """Replace all installations and persist them.

        Raises:
            InstallationError: On duplicate installation names or a failed write.
        """
        snapshot = tuple(installations)
        _check_unique_names(snapshot)
        with self._write_lock:
            self._save(snapshot)
            self._installations = snapshot

    def get(self, name: str) -> Optional[SnykInstallation]:
        """Resolve an installation by name."""
        for installation in self._installations:
            if installation.name == name:
                return installation
        return None

    def _save(self, installations: Tuple[SnykInstallation, ...]) -> None:
        data = {"installations": [installation.to_dict() for installation in installations]}
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_path, self._path)
        except (OSError, yaml.YAMLError) as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise InstallationError(f"Cannot write installation registry {self._path}: {e}") from e
        LOGGER.debug(f"Saved {len(installations)} Snyk installations to {self._path}")


def _check_unique_names(installations: Tuple[SnykInstallation, ...]) -> None:
    seen: List[str] = []
    for installation in installations:
        if installation.name in seen:
            raise InstallationError(f"Duplicate installation name: {installation.name}")
        seen.append(installation.name)
