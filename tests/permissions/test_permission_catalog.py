from __future__ import annotations

import pytest

from src.grease.grease.core.constants import EDIT_PERMISSIONS, MODIFY_EVENT, VIEW_ATTENDANCE
from src.grease.grease.core.enums import PermissionKind
from src.grease.grease.core.exceptions import CatalogError, ServerError
from src.grease.grease.permissions.catalog import CatalogProvider, PermissionCatalog
from src.grease.grease.permissions.model import GeneralGrant, Permission, Role, RolePermissionRow, ScopedGrant

from tests.fakes import InMemoryPermissions


def _catalog(*rows: RolePermissionRow) -> PermissionCatalog:
    return PermissionCatalog.from_rows(
        permissions=[
            Permission(name=MODIFY_EVENT, kind=PermissionKind.EVENT),
            Permission(name=VIEW_ATTENDANCE, kind=PermissionKind.EVENT),
            Permission(name=VIEW_ATTENDANCE + "-own-section", kind=PermissionKind.EVENT),
            Permission(name=EDIT_PERMISSIONS, kind=PermissionKind.STATIC),
        ],
        event_types=["Rehearsal", "Ombuds"],
        roles=[Role(name="President", rank=1, max_quantity=1), Role(name="Ombudsman", rank=7, max_quantity=1)],
        role_permissions=list(rows),
    )


def test_rows_become_tagged_grants():
    catalog = _catalog(
        RolePermissionRow(role="President", permission=MODIFY_EVENT),
        RolePermissionRow(role="Ombudsman", permission=MODIFY_EVENT, event_type="Ombuds"),
    )

    assert catalog.grants_for_roles(["President"]) == (GeneralGrant(role="President", permission=MODIFY_EVENT),)
    assert catalog.grants_for_roles(["Ombudsman"]) == (
        ScopedGrant(role="Ombudsman", permission=MODIFY_EVENT, event_type="Ombuds"),
    )


@pytest.mark.parametrize(
    "row, message",
    [
        (RolePermissionRow(role="Janitor", permission=MODIFY_EVENT), "unknown role"),
        (RolePermissionRow(role="President", permission="fly"), "unknown permission"),
        (RolePermissionRow(role="President", permission=MODIFY_EVENT, event_type="Pool Party"), "unknown event type"),
        (RolePermissionRow(role="President", permission=EDIT_PERMISSIONS, event_type="Rehearsal"), "cannot be scoped"),
    ],
)
def test_inconsistent_grants_are_rejected(row, message):
    with pytest.raises(CatalogError, match=message):
        _catalog(row)


def test_catalog_errors_are_server_errors():
    assert issubclass(CatalogError, ServerError)
    assert CatalogError("x").status_code == 500


def test_own_section_variant_only_when_defined():
    catalog = _catalog()

    assert catalog.own_section_variant(VIEW_ATTENDANCE) == "view-attendance-own-section"
    assert catalog.own_section_variant(MODIFY_EVENT) is None


def test_provider_caches_until_invalidated():
    repo = InMemoryPermissions(roles=["President"])
    provider = CatalogProvider(repo)

    first = provider.get()
    assert provider.get() is first
    assert repo.loads == 1

    repo.rows.append(RolePermissionRow(role="President", permission=MODIFY_EVENT))
    provider.invalidate()

    assert provider.get().grants_for_roles(["President"]) == (GeneralGrant(role="President", permission=MODIFY_EVENT),)
    assert repo.loads == 2


def test_provider_without_cache_reloads_every_time():
    repo = InMemoryPermissions(roles=["President"])
    provider = CatalogProvider(repo, cache=False)

    provider.get()
    provider.get()

    assert repo.loads == 2
