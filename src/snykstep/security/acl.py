"""Principals, items and permission checks.

The build step never authenticates anyone. Callers hand in the acting
principal and, where one exists, the item (job or folder) being configured;
this module only answers permission questions about them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List


class Permission(str, Enum):
    """Permissions consulted by the build step descriptor."""

    ADMINISTER = "administer"
    EXTENDED_READ = "item.extended_read"
    USE_ITEM = "credentials.use_item"


@dataclass(frozen=True)
class Principal:
    """An authenticated identity and its global permission grants."""

    name: str
    permissions: FrozenSet[Permission] = frozenset()

    def has_permission(self, permission: Permission) -> bool:
        # administer implies everything
        return permission in self.permissions or Permission.ADMINISTER in self.permissions

    @property
    def is_system(self) -> bool:
        return self == SYSTEM


SYSTEM_NAME = "SYSTEM"

SYSTEM = Principal(SYSTEM_NAME, frozenset(Permission))


@dataclass
class Item:
    """A job or folder, identified by its slash-separated full name.

    ``grants`` maps principal names to permissions granted on this item only.
    """

    full_name: str
    grants: Dict[str, FrozenSet[Permission]] = field(default_factory=dict)
    is_folder: bool = False

    def has_permission(self, principal: Principal, permission: Permission) -> bool:
        if principal.has_permission(permission):
            return True
        granted = self.grants.get(principal.name, frozenset())
        return permission in granted or Permission.ADMINISTER in granted

    def ancestors(self) -> Iterator[str]:
        """Yield enclosing folder paths, innermost first.

        ``"team/app/build"`` yields ``"team/app"`` then ``"team"``.
        """
        parts = self._parts()
        for end in range(len(parts) - 1, 0, -1):
            yield "/".join(parts[:end])

    def credential_scopes(self) -> Iterator[str]:
        """Yield the folder paths whose credentials this item can see.

        A folder sees its own credentials before those of its ancestors; a job
        only sees its ancestors'.
        """
        if self.is_folder:
            yield "/".join(self._parts())
        yield from self.ancestors()

    def _parts(self) -> List[str]:
        return [part for part in self.full_name.split("/") if part]
