from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import PermissionKind


@dataclass(frozen=True)
class Permission:
    name: str
    kind: PermissionKind
    description: Optional[str] = None


@dataclass(frozen=True)
class Role:
    name: str
    rank: int
    max_quantity: int


@dataclass(frozen=True)
class RolePermissionRow:
    """Storage shape of a grant: ``event_type`` is NULL for a general grant."""

    role: str
    permission: str
    event_type: Optional[str] = None


@dataclass(frozen=True)
class GeneralGrant:
    """Authorizes ``permission`` for every event type, and for no event type at all."""

    role: str
    permission: str


@dataclass(frozen=True)
class ScopedGrant:
    """Authorizes ``permission`` for exactly one event type."""

    role: str
    permission: str
    event_type: str


Grant = Union[GeneralGrant, ScopedGrant]


def grant_from_row(row: RolePermissionRow) -> Grant:
    if row.event_type is None:
        return GeneralGrant(role=row.role, permission=row.permission)
    return ScopedGrant(role=row.role, permission=row.permission, event_type=row.event_type)


def grant_to_dict(grant: Grant) -> dict:
    return {
        "role": grant.role,
        "permission": grant.permission,
        "eventType": grant.event_type if isinstance(grant, ScopedGrant) else None,
    }
