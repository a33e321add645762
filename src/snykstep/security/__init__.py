"""Access-control model for principals and items."""

from snykstep.security.acl import SYSTEM, Item, Permission, Principal

__all__ = [
    "SYSTEM",
    "Item",
    "Permission",
    "Principal",
]
