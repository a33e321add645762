"""Step configuration files.

Provides loading, validation and writing of ``.snyk-step.yml`` files.
"""

from snykstep.config.loader import (
    ConfigError,
    LoadedStepConfig,
    find_project_config,
    load_step_config,
    read_step_config,
    write_step_config,
)
from snykstep.config.validation import ConfigValidationWarning, validate_config

__all__ = [
    "ConfigError",
    "LoadedStepConfig",
    "find_project_config",
    "load_step_config",
    "read_step_config",
    "write_step_config",
    "ConfigValidationWarning",
    "validate_config",
]
