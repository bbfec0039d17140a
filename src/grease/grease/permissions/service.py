from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import EDIT_PERMISSIONS
from ..core.enums import PermissionKind
from ..core.exceptions import ValidationError
from ..members.model import Principal
from .catalog import CatalogProvider
from .engine import AuthorizationEngine
from .model import grant_to_dict
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


class PermissionService:
    """Use case: inspect the catalog and manage role grants."""

    def __init__(self, permissions: PermissionRepository, catalogs: CatalogProvider, engine: AuthorizationEngine):
        self._permissions = permissions
        self._catalogs = catalogs
        self._engine = engine

    def static_data(self) -> dict:
        catalog = self._catalogs.get()
        return {
            "permissions": [
                {"name": p.name, "type": p.kind.value, "description": p.description} for p in catalog.permissions
            ],
            "eventTypes": list(catalog.event_types),
            "roles": [{"name": r.name, "rank": r.rank, "maxQuantity": r.max_quantity} for r in catalog.roles],
        }

    def list_sections(self) -> list[str]:
        return list(self._permissions.list_sections())

    def list_role_grants(self) -> list[dict]:
        return [grant_to_dict(g) for g in self._catalogs.get().grants]

    def permissions_for(self, target: Principal) -> list[dict]:
        return [grant_to_dict(g) for g in self._engine.grants_for(target)]

    def _validate_grant(self, role: str, permission: str, event_type: Optional[str]) -> None:
        catalog = self._catalogs.get()
        if not catalog.has_role(role):
            raise ValidationError(f"No role named '{role}'")
        if not catalog.has_permission(permission):
            raise ValidationError(f"No permission named '{permission}'")
        if event_type is not None:
            if not catalog.has_event_type(event_type):
                raise ValidationError(f"No event type named '{event_type}'")
            if catalog.require_permission(permission).kind != PermissionKind.EVENT:
                raise ValidationError(f"The '{permission}' permission cannot be scoped to an event type")

    def enable_grant(self, *, principal: Principal, role: str, permission: str, event_type: Optional[str] = None) -> None:
        self._engine.require(principal, EDIT_PERMISSIONS)
        self._validate_grant(role, permission, event_type)

        if self._permissions.add_role_permission(role=role, permission=permission, event_type=event_type):
            logger.info("%s granted %s (%s) to %s", principal.email, permission, event_type or "all", role)
        self._catalogs.invalidate()

    def disable_grant(self, *, principal: Principal, role: str, permission: str, event_type: Optional[str] = None) -> None:
        self._engine.require(principal, EDIT_PERMISSIONS)
        self._validate_grant(role, permission, event_type)

        if self._permissions.remove_role_permission(role=role, permission=permission, event_type=event_type):
            logger.info("%s revoked %s (%s) from %s", principal.email, permission, event_type or "all", role)
        self._catalogs.invalidate()
