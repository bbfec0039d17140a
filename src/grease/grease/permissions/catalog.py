from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ..core.constants import OWN_SECTION_SUFFIX
from ..core.enums import PermissionKind
from ..core.exceptions import CatalogError
from .model import Grant, Permission, Role, RolePermissionRow, grant_from_row
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


class PermissionCatalog:
    """Immutable snapshot of permissions, event types, roles and role grants.

    Permission names and event types form a closed domain: every grant is
    validated against it when the catalog is built, and lookups with an unknown
    identifier raise ``CatalogError`` instead of silently answering "no".
    """

    def __init__(
        self,
        *,
        permissions: Mapping[str, Permission],
        event_types: Iterable[str],
        roles: Mapping[str, Role],
        grants: Sequence[Grant],
    ):
        self._permissions = dict(permissions)
        self._event_types = frozenset(event_types)
        self._roles = dict(roles)
        self._grants = tuple(grants)

        by_role: dict[str, list[Grant]] = {}
        for grant in self._grants:
            by_role.setdefault(grant.role, []).append(grant)
        self._by_role = {role: tuple(items) for role, items in by_role.items()}

    @classmethod
    def from_rows(
        cls,
        *,
        permissions: Sequence[Permission],
        event_types: Sequence[str],
        roles: Sequence[Role],
        role_permissions: Sequence[RolePermissionRow],
    ) -> "PermissionCatalog":
        permission_map = {p.name: p for p in permissions}
        role_map = {r.name: r for r in roles}
        known_types = set(event_types)

        grants: list[Grant] = []
        for row in role_permissions:
            if row.role not in role_map:
                raise CatalogError(f"Grant refers to unknown role '{row.role}'")
            permission = permission_map.get(row.permission)
            if permission is None:
                raise CatalogError(f"Grant refers to unknown permission '{row.permission}'")
            if row.event_type is not None:
                if row.event_type not in known_types:
                    raise CatalogError(f"Grant refers to unknown event type '{row.event_type}'")
                if permission.kind != PermissionKind.EVENT:
                    raise CatalogError(f"Permission '{row.permission}' cannot be scoped to an event type")
            grants.append(grant_from_row(row))

        return cls(permissions=permission_map, event_types=known_types, roles=role_map, grants=grants)

    @property
    def permissions(self) -> tuple[Permission, ...]:
        return tuple(sorted(self._permissions.values(), key=lambda p: p.name))

    @property
    def event_types(self) -> tuple[str, ...]:
        return tuple(sorted(self._event_types))

    @property
    def roles(self) -> tuple[Role, ...]:
        return tuple(sorted(self._roles.values(), key=lambda r: r.rank))

    @property
    def grants(self) -> tuple[Grant, ...]:
        return self._grants

    def has_permission(self, name: str) -> bool:
        return name in self._permissions

    def has_event_type(self, name: str) -> bool:
        return name in self._event_types

    def has_role(self, name: str) -> bool:
        return name in self._roles

    def require_permission(self, name: str) -> Permission:
        permission = self._permissions.get(name)
        if permission is None:
            raise CatalogError(f"Unknown permission '{name}'")
        return permission

    def require_event_type(self, name: str) -> str:
        if name not in self._event_types:
            raise CatalogError(f"Unknown event type '{name}'")
        return name

    def own_section_variant(self, name: str) -> Optional[str]:
        """Name of the ``-own-section`` permission paired with ``name``, if the catalog defines one."""
        variant = name + OWN_SECTION_SUFFIX
        return variant if variant in self._permissions else None

    def grants_for_roles(self, roles: Iterable[str]) -> tuple[Grant, ...]:
        out: list[Grant] = []
        for role in roles:
            out.extend(self._by_role.get(role, ()))
        return tuple(out)


class CatalogProvider:
    """Loads the catalog from storage, caching it until ``invalidate()`` is called."""

    def __init__(self, permissions: PermissionRepository, *, cache: bool = True):
        self._permissions = permissions
        self._cache = bool(cache)
        self._catalog: Optional[PermissionCatalog] = None

    def get(self) -> PermissionCatalog:
        if self._catalog is not None and self._cache:
            return self._catalog

        catalog = PermissionCatalog.from_rows(
            permissions=self._permissions.list_permissions(),
            event_types=self._permissions.list_event_types(),
            roles=self._permissions.list_roles(),
            role_permissions=self._permissions.list_role_permissions(),
        )
        logger.debug("permission catalog loaded (%d grants)", len(catalog.grants))
        if self._cache:
            self._catalog = catalog
        return catalog

    def invalidate(self) -> None:
        self._catalog = None
