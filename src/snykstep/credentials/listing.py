"""Credential dropdown listing with permission-tiered disclosure.

Principals who may not view or use credentials only ever get back the value
that is already configured, so an existing selection survives a form
round-trip without other credential ids leaking.
"""

from __future__ import annotations

from typing import Optional, Type

from snykstep.core.logging import get_logger
from snykstep.core.models import ListBoxModel
from snykstep.credentials.models import Credentials, describe
from snykstep.credentials.store import CredentialStore
from snykstep.security.acl import SYSTEM, Item, Permission, Principal

LOGGER = get_logger(__name__)

EMPTY_VALUE_LABEL = "- none -"
CURRENT_VALUE_LABEL = "- current -"


def list_credential_options(
    principal: Principal,
    item: Optional[Item],
    credential_type: Type[Credentials],
    current_value: Optional[str],
    store: CredentialStore,
) -> ListBoxModel:
    """Build the credential dropdown for a principal.

    Args:
        principal: Principal rendering the form.
        item: Item being configured, or None outside any item.
        credential_type: Credential class the field accepts.
        current_value: Currently configured credential id, listed as given
            without trimming. A blank value adds nothing.
        store: Credential store to list from.

    Returns:
        Options visible to the principal.
    """
    model = ListBoxModel()

    if item is None:
        if not principal.has_permission(Permission.ADMINISTER):
            LOGGER.debug(f"{principal.name} is not an administrator, listing current value only")
            return _include_current_value(model, current_value)
    elif not (
        item.has_permission(principal, Permission.EXTENDED_READ)
        or item.has_permission(principal, Permission.USE_ITEM)
    ):
        LOGGER.debug(
            f"{principal.name} cannot read or use credentials of {item.full_name}, "
            "listing current value only"
        )
        return _include_current_value(model, current_value)

    model.add(EMPTY_VALUE_LABEL, "")
    for credentials in store.lookup(credential_type, item, SYSTEM):
        if not model.contains(credentials.id):
            model.add(describe(credentials), credentials.id)
    return _include_current_value(model, current_value)


def _include_current_value(model: ListBoxModel, current_value: Optional[str]) -> ListBoxModel:
    # not trimmed; must match the stored value exactly
    if current_value is not None and current_value.strip() and not model.contains(current_value):
        model.add(CURRENT_VALUE_LABEL, current_value)
    return model
