"""Step configuration file loading and writing.

Handles loading a Snyk build step from YAML with:
- Project-level config (.snyk-step.yml)
- Environment variable expansion (${VAR})
- Overrides applied on top (e.g. from CLI flags)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from snykstep.config.validation import ConfigValidationWarning, validate_config
from snykstep.core.env import expand_env_vars
from snykstep.core.logging import get_logger
from snykstep.steps.snyk_build_step import SnykBuildStep

LOGGER = get_logger(__name__)

# Config file names, in lookup order
PROJECT_CONFIG_NAMES: List[str] = [
    ".snyk-step.yml",
    ".snyk-step.yaml",
    "snyk-step.yml",
    "snyk-step.yaml",
]


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


@dataclass
class LoadedStepConfig:
    """A build step together with where it came from and its file warnings."""

    step: SnykBuildStep
    path: Optional[Path] = None
    warnings: List[ConfigValidationWarning] = field(default_factory=list)


def load_step_config(
    project_root: Path,
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> SnykBuildStep:
    """Load a build step configuration.

    Precedence (highest to lowest):
    1. Overrides
    2. Explicit config file (config_path) OR project config (.snyk-step.yml)
    3. Built-in defaults

    Args:
        project_root: Directory searched for a project config file.
        config_path: Optional explicit config file.
        overrides: Values applied on top of the file contents.

    Returns:
        Configured SnykBuildStep.

    Raises:
        ConfigError: If an explicit config file is missing or a file fails to parse.
    """
    return read_step_config(project_root, config_path, overrides).step


def read_step_config(
    project_root: Path,
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> LoadedStepConfig:
    """Like load_step_config, but also report the file used and its warnings.

    ``path`` is None when no config file was found and defaults were used.
    """
    data: Dict[str, Any] = {}
    warnings: List[ConfigValidationWarning] = []

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        path: Optional[Path] = config_path
    else:
        path = find_project_config(project_root)

    if path is not None:
        data = load_yaml_file(path)
        warnings = validate_config(data, source=str(path))
        LOGGER.debug(f"Loaded step config from {path}")
    else:
        LOGGER.debug(f"No step config found in {project_root}, using defaults")

    if overrides:
        data = {**data, **overrides}
        LOGGER.debug("Applied config overrides")

    return LoadedStepConfig(step=SnykBuildStep.from_form(data), path=path, warnings=warnings)


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find a step config file in the project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file with env var expansion.

    Raises:
        ConfigError: If the file cannot be read, the YAML is invalid or not a mapping.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f.read())
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def write_step_config(path: Path, step: SnykBuildStep) -> Path:
    """Write a step configuration as YAML.

    Returns:
        The path written.

    Raises:
        ConfigError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(step.to_dict(), f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigError(f"Cannot write config file {path}: {e}") from e
    LOGGER.debug(f"Wrote step config to {path}")
    return path
