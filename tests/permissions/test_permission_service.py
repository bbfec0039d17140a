from __future__ import annotations

import pytest

from src.grease.grease.core.constants import EDIT_PERMISSIONS, EDIT_SETLIST, MODIFY_EVENT, PROCESS_GIG_REQUESTS
from src.grease.grease.core.exceptions import AuthorizationError, ValidationError


def test_enabling_a_grant_takes_effect_immediately(org):
    president = org.members.principal("pres.ident@example.com")
    ombudsman = org.members.principal("omb.uds@example.com")
    assert not org.engine.check(ombudsman, EDIT_SETLIST, "Ombuds")

    org.permission_service.enable_grant(
        principal=president, role="Ombudsman", permission=EDIT_SETLIST, event_type="Ombuds"
    )

    assert org.engine.check(ombudsman, EDIT_SETLIST, "Ombuds")
    assert not org.engine.check(ombudsman, EDIT_SETLIST, "Rehearsal")


def test_enable_is_idempotent_and_disable_revokes(org):
    president = org.members.principal("pres.ident@example.com")
    leader = org.members.principal("lead.er@example.com")

    for _ in range(2):
        org.permission_service.enable_grant(principal=president, role="Section Leader", permission=PROCESS_GIG_REQUESTS)
    matching = [
        r for r in org.permissions_repo.rows if r.role == "Section Leader" and r.permission == PROCESS_GIG_REQUESTS
    ]
    assert len(matching) == 1
    assert org.engine.check(leader, PROCESS_GIG_REQUESTS)

    org.permission_service.disable_grant(principal=president, role="Section Leader", permission=PROCESS_GIG_REQUESTS)

    assert not org.engine.check(leader, PROCESS_GIG_REQUESTS)


def test_grant_management_requires_edit_permissions(org):
    leader = org.members.principal("lead.er@example.com")

    with pytest.raises(AuthorizationError) as exc:
        org.permission_service.enable_grant(principal=leader, role="Section Leader", permission=MODIFY_EVENT)
    assert exc.value.permission == EDIT_PERMISSIONS


def test_static_permission_cannot_be_scoped(org):
    president = org.members.principal("pres.ident@example.com")

    with pytest.raises(ValidationError):
        org.permission_service.enable_grant(
            principal=president, role="Ombudsman", permission=PROCESS_GIG_REQUESTS, event_type="Ombuds"
        )


def test_permissions_for_lists_a_members_grants(org):
    ombudsman = org.members.principal("omb.uds@example.com")

    grants = org.permission_service.permissions_for(ombudsman)

    assert {"role": "Ombudsman", "permission": MODIFY_EVENT, "eventType": "Ombuds"} in grants
    assert all(g["role"] == "Ombudsman" for g in grants)
