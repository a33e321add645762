"""Credential records kept by the credential store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Type


@dataclass(frozen=True)
class Credentials:
    """Base credential record.

    ``scope`` is the folder path the credential is defined in (None means
    global). ``owner`` marks a per-user credential that only its owner can see.
    """

    id: str
    description: str = ""
    scope: Optional[str] = None
    owner: Optional[str] = None


@dataclass(frozen=True)
class SnykApiToken(Credentials):
    """API token used to authenticate the Snyk CLI."""

    token: str = field(default="", repr=False)


@dataclass(frozen=True)
class SecretText(Credentials):
    """Generic secret string."""

    secret: str = field(default="", repr=False)


# Persisted type name -> credential class
CREDENTIAL_TYPES: Dict[str, Type[Credentials]] = {
    "snyk_api_token": SnykApiToken,
    "secret_text": SecretText,
}


def describe(credentials: Credentials) -> str:
    """Display name used in dropdowns."""
    if credentials.description:
        return f"{credentials.description} ({credentials.id})"
    return credentials.id
