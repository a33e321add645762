"""Credential store.

Holds credential records keyed by id and answers visibility-filtered lookups
by credential type, containing item and acting principal.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

import yaml

from snykstep.core.env import expand_env_vars
from snykstep.core.logging import get_logger
from snykstep.credentials.models import (
    CREDENTIAL_TYPES,
    Credentials,
    SecretText,
    SnykApiToken,
)
from snykstep.security.acl import SYSTEM, Item, Principal

LOGGER = get_logger(__name__)

C = TypeVar("C", bound=Credentials)

# Credential class -> name of the field holding its secret
SECRET_FIELDS: Dict[Type[Credentials], str] = {
    SnykApiToken: "token",
    SecretText: "secret",
}


class CredentialsError(Exception):
    """Credential store loading or update error."""

    pass


class CredentialStore:
    """In-memory credential store, safe to share between threads."""

    def __init__(self, credentials: Optional[List[Credentials]] = None) -> None:
        self._lock = threading.Lock()
        self._credentials: Dict[str, Credentials] = {}
        for entry in credentials or []:
            self.add(entry)

    def add(self, credentials: Credentials) -> None:
        """Register a credential.

        Raises:
            CredentialsError: If a credential with the same id exists.
        """
        with self._lock:
            if credentials.id in self._credentials:
                raise CredentialsError(f"Duplicate credential id: {credentials.id}")
            self._credentials[credentials.id] = credentials

    def remove(self, credentials_id: str) -> bool:
        with self._lock:
            return self._credentials.pop(credentials_id, None) is not None

    def all(self) -> List[Credentials]:
        with self._lock:
            return list(self._credentials.values())

    def lookup(
        self,
        credential_type: Type[C],
        item: Optional[Item] = None,
        principal: Principal = SYSTEM,
    ) -> List[C]:
        """Return credentials of a type visible from a context.

        SYSTEM sees global credentials plus those defined in folders that
        enclose ``item``, or in ``item`` itself when it is a folder. Any other
        principal only sees its own per-user credentials.

        Args:
            credential_type: Credential class to match (subclasses match too).
            item: Containing item, or None for the global context.
            principal: Principal the lookup is performed as.

        Returns:
            Matching credentials in registration order.
        """
        folders = set(item.credential_scopes()) if item is not None else set()
        result: List[C] = []

        for entry in self.all():
            if not isinstance(entry, credential_type):
                continue
            if principal.is_system:
                if entry.owner is not None:
                    continue
                if entry.scope is None or entry.scope in folders:
                    result.append(entry)
            elif entry.owner == principal.name:
                result.append(entry)

        return result

    def find_by_id(
        self,
        credential_type: Type[C],
        credentials_id: str,
        item: Optional[Item] = None,
        principal: Principal = SYSTEM,
    ) -> Optional[C]:
        """First visible credential of the type with the given id, or None."""
        for entry in self.lookup(credential_type, item, principal):
            if entry.id == credentials_id:
                return entry
        return None


def load_credential_store(path: Path) -> CredentialStore:
    """Load a credential store from a YAML file.

    Expected layout::

        credentials:
          - id: snyk-token
            type: snyk_api_token
            description: Snyk token for team A
            token: ${SNYK_TOKEN}
            scope: team-a

    A missing file yields an empty store. Entries with unknown types are
    skipped with a warning.

    Raises:
        CredentialsError: If the file cannot be read, parsed, or is malformed.
    """
    if not path.exists():
        LOGGER.debug(f"No credentials file at {path}")
        return CredentialStore()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f.read())
    except yaml.YAMLError as e:
        raise CredentialsError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise CredentialsError(f"Cannot read credentials file {path}: {e}") from e

    if data is None:
        return CredentialStore()
    if not isinstance(data, dict) or not isinstance(data.get("credentials", []), list):
        raise CredentialsError(f"Credentials file {path} must contain a 'credentials' list")

    store = CredentialStore()
    for raw in expand_env_vars(data.get("credentials") or []):
        entry = _parse_entry(raw, path)
        if entry is not None:
            store.add(entry)

    LOGGER.debug(f"Loaded {len(store.all())} credentials from {path}")
    return store


def _parse_entry(raw: Any, path: Path) -> Optional[Credentials]:
    if not isinstance(raw, dict) or not raw.get("id"):
        raise CredentialsError(f"Every credential in {path} needs an 'id'")

    type_name = raw.get("type", "snyk_api_token")
    credential_class = CREDENTIAL_TYPES.get(type_name)
    if credential_class is None:
        LOGGER.warning(f"Skipping credential '{raw['id']}' with unknown type '{type_name}'")
        return None

    common = {
        "id": str(raw["id"]),
        "description": str(raw.get("description") or ""),
        "scope": raw.get("scope"),
        "owner": raw.get("owner"),
    }
    secret_field = SECRET_FIELDS[credential_class]
    common[secret_field] = str(raw.get(secret_field) or "")
    return credential_class(**common)
