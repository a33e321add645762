"""Validation of step configuration files.

Warns on unknown keys and wrongly typed values instead of raising. Keys may
use either the attribute name (``snyk_token_id``) or the form field name
(``snykTokenId``).
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, List, Optional, Set

from snykstep.core.logging import get_logger
from snykstep.core.models import Severity
from snykstep.steps.snyk_build_step import FORM_FIELDS

LOGGER = get_logger(__name__)

BOOLEAN_KEYS: Set[str] = {
    "fail_on_issues",
    "monitor_project_on_build",
}

STRING_KEYS: Set[str] = {
    "severity",
    "snyk_token_id",
    "target_file",
    "organisation",
    "project_name",
    "snyk_installation",
}

VALID_KEYS: Set[str] = BOOLEAN_KEYS | STRING_KEYS

VALID_SEVERITIES: Set[str] = {severity.value for severity in Severity}


@dataclass
class ConfigValidationWarning:
    """A validation warning for a step configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


def validate_config(
    data: Dict[str, Any],
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate a step configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):
        warnings.append(ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
        ))
        return warnings

    for key, value in data.items():
        attribute = FORM_FIELDS.get(key, key)
        if attribute not in VALID_KEYS:
            _add(warnings, ConfigValidationWarning(
                message=f"Unknown key '{key}'",
                source=source,
                key=key,
                suggestion=_suggest_key(str(key), VALID_KEYS),
            ))
            continue

        if attribute in BOOLEAN_KEYS:
            if value is None or (isinstance(value, str) and not value.strip()):
                _add(warnings, ConfigValidationWarning(
                    message=f"'{key}' is empty, using the default (true)",
                    source=source,
                    key=key,
                ))
            elif not isinstance(value, bool):
                _add(warnings, ConfigValidationWarning(
                    message=f"'{key}' must be a boolean, got {type(value).__name__}",
                    source=source,
                    key=key,
                ))
        elif value is not None and not isinstance(value, str):
            _add(warnings, ConfigValidationWarning(
                message=f"'{key}' must be a string, got {type(value).__name__}",
                source=source,
                key=key,
            ))

    severity = data.get("severity")
    if isinstance(severity, str) and Severity.get_if_present(severity) is None:
        _add(warnings, ConfigValidationWarning(
            message=f"Invalid severity '{severity}'",
            source=source,
            key="severity",
            suggestion=_suggest_key(severity.strip().lower(), VALID_SEVERITIES),
        ))

    return warnings


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Args:
        invalid_key: The invalid key entered.
        valid_keys: Set of valid keys.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _add(warnings: List[ConfigValidationWarning], warning: ConfigValidationWarning) -> None:
    warnings.append(warning)
    msg = f"{warning.message} in {warning.source}"
    if warning.suggestion:
        msg += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(msg)
