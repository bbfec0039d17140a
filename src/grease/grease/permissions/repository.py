from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Permission, Role, RolePermissionRow


class PermissionRepository(Protocol):
    """Source of the permission catalog and of role grants."""

    def list_permissions(self) -> Sequence[Permission]:
        raise NotImplementedError

    def list_event_types(self) -> Sequence[str]:
        raise NotImplementedError

    def list_sections(self) -> Sequence[str]:
        raise NotImplementedError

    def list_roles(self) -> Sequence[Role]:
        raise NotImplementedError

    def list_role_permissions(self) -> Sequence[RolePermissionRow]:
        raise NotImplementedError

    def add_role_permission(self, *, role: str, permission: str, event_type: Optional[str]) -> bool:
        """Insert the grant; return False when it already existed."""

        raise NotImplementedError

    def remove_role_permission(self, *, role: str, permission: str, event_type: Optional[str]) -> bool:
        raise NotImplementedError
