"""Environment variable expansion for YAML-backed files.

String values may reference ``${VAR}`` or ``${VAR:-default}``. Credential
tokens and step fields are usually injected this way in CI.
"""

from __future__ import annotations

import os
import re
from typing import Any

from snykstep.core.logging import get_logger

LOGGER = get_logger(__name__)

# ${NAME} or ${NAME:-fallback}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def expand_env_vars(data: Any) -> Any:
    """Return a copy of ``data`` with ``${...}`` references substituted.

    Mappings and lists are walked; keys and non-string scalars are left alone.
    An unset variable without a fallback becomes an empty string.
    """
    if isinstance(data, dict):
        return {key: expand_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [expand_env_vars(value) for value in data]
    if isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_substitute, data)
    return data


def _substitute(match: re.Match) -> str:
    name, fallback = match.group(1), match.group(2)

    if name in os.environ:
        return os.environ[name]
    if fallback is not None:
        return fallback

    LOGGER.warning(f"${{{name}}} is unset and has no fallback, using an empty string")
    return ""
