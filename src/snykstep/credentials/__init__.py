"""Credential models, the credential store and the credential listing policy."""

from snykstep.credentials.models import (
    CREDENTIAL_TYPES,
    Credentials,
    SecretText,
    SnykApiToken,
    describe,
)
from snykstep.credentials.store import (
    CredentialStore,
    CredentialsError,
    load_credential_store,
)
from snykstep.credentials.listing import (
    CURRENT_VALUE_LABEL,
    EMPTY_VALUE_LABEL,
    list_credential_options,
)

__all__ = [
    "CREDENTIAL_TYPES",
    "Credentials",
    "SecretText",
    "SnykApiToken",
    "describe",
    "CredentialStore",
    "CredentialsError",
    "load_credential_store",
    "CURRENT_VALUE_LABEL",
    "EMPTY_VALUE_LABEL",
    "list_credential_options",
]
