from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.exceptions import AuthorizationError
from ..members.model import Principal
from .catalog import CatalogProvider
from .model import GeneralGrant, Grant, ScopedGrant

logger = logging.getLogger(__name__)


def grants_authorize(grants: Iterable[Grant], permission: str, scope: Optional[str] = None) -> bool:
    """True iff some grant for ``permission`` is general, or is scoped to exactly ``scope``.

    A general grant short-circuits: scoped grants are not looked at once one is found.
    A scoped grant never satisfies a request without a scope.
    """
    matching = [g for g in grants if g.permission == permission]
    if any(isinstance(g, GeneralGrant) for g in matching):
        return True
    if scope is None:
        return False
    return any(isinstance(g, ScopedGrant) and g.event_type == scope for g in matching)


class AuthorizationEngine:
    """Single place where "may this principal do X (for event type T)?" is decided.

    Pure read-only evaluation over the grants of the principal's roles; the
    catalog is fetched from the provider on every call.
    """

    def __init__(self, catalogs: CatalogProvider):
        self._catalogs = catalogs

    def grants_for(self, principal: Principal) -> tuple[Grant, ...]:
        return self._catalogs.get().grants_for_roles(principal.roles)

    def check(self, principal: Principal, permission: str, scope: Optional[str] = None) -> bool:
        catalog = self._catalogs.get()
        catalog.require_permission(permission)
        if scope is not None:
            catalog.require_event_type(scope)

        return grants_authorize(catalog.grants_for_roles(principal.roles), permission, scope)

    def require(self, principal: Principal, permission: str, scope: Optional[str] = None) -> None:
        if not self.check(principal, permission, scope):
            logger.warning("denied %s: %s (scope=%s)", principal.email, permission, scope)
            raise AuthorizationError(permission)

    def check_with_own_section(
        self,
        principal: Principal,
        permission: str,
        scope: Optional[str] = None,
        *,
        principal_section: Optional[str],
        target_section: Optional[str],
    ) -> bool:
        """Primary check first; the ``-own-section`` variant only applies within one's own section."""
        if self.check(principal, permission, scope):
            return True

        variant = self._catalogs.get().own_section_variant(permission)
        if variant is None:
            return False
        if principal_section != target_section:
            return False
        return self.check(principal, variant, scope)

    def require_with_own_section(
        self,
        principal: Principal,
        permission: str,
        scope: Optional[str] = None,
        *,
        principal_section: Optional[str],
        target_section: Optional[str],
    ) -> None:
        allowed = self.check_with_own_section(
            principal,
            permission,
            scope,
            principal_section=principal_section,
            target_section=target_section,
        )
        if not allowed:
            logger.warning(
                "denied %s: %s (scope=%s, section %s vs %s)",
                principal.email,
                permission,
                scope,
                principal_section,
                target_section,
            )
            raise AuthorizationError(permission)
