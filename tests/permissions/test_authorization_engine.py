from __future__ import annotations

import pytest

from src.grease.grease.core.constants import (
    EDIT_ATTENDANCE,
    EDIT_ATTENDANCE_OWN_SECTION,
    MODIFY_EVENT,
    PROCESS_GIG_REQUESTS,
    VIEW_ATTENDANCE,
)
from src.grease.grease.core.exceptions import AuthorizationError, CatalogError
from src.grease.grease.permissions.engine import grants_authorize
from src.grease.grease.permissions.model import GeneralGrant, ScopedGrant

from tests.fakes import build_org, general, scoped


def test_scoped_grant_only_matches_its_event_type():
    grants = [ScopedGrant(role="Ombudsman", permission=MODIFY_EVENT, event_type="Ombuds")]

    assert grants_authorize(grants, MODIFY_EVENT, "Ombuds") is True
    assert grants_authorize(grants, MODIFY_EVENT, "Rehearsal") is False
    assert grants_authorize(grants, VIEW_ATTENDANCE, "Ombuds") is False


def test_scoped_grant_does_not_satisfy_unscoped_check():
    grants = [ScopedGrant(role="Ombudsman", permission=VIEW_ATTENDANCE, event_type="Ombuds")]

    assert grants_authorize(grants, VIEW_ATTENDANCE) is False


@pytest.mark.parametrize("scope", [None, "Rehearsal", "Tutti Gig", "Ombuds"])
def test_general_grant_authorizes_every_scope(scope):
    grants = [GeneralGrant(role="President", permission=MODIFY_EVENT)]

    assert grants_authorize(grants, MODIFY_EVENT, scope) is True


def test_no_grants_means_no_access():
    assert grants_authorize([], PROCESS_GIG_REQUESTS) is False


def test_check_unions_grants_of_all_roles():
    org = build_org(
        *scoped("Ombudsman", "Ombuds", MODIFY_EVENT),
        *scoped("Social", "Volunteer Gig", MODIFY_EVENT),
    )
    org.members.add("a.b@example.com", roles=["Ombudsman", "Social"])
    principal = org.members.principal("a.b@example.com")

    assert org.engine.check(principal, MODIFY_EVENT, "Ombuds")
    assert org.engine.check(principal, MODIFY_EVENT, "Volunteer Gig")
    assert not org.engine.check(principal, MODIFY_EVENT, "Rehearsal")


def test_require_raises_forbidden_naming_the_permission():
    org = build_org(*general("President", PROCESS_GIG_REQUESTS), roles=("President",))
    org.members.add("nobody.special@example.com")
    principal = org.members.principal("nobody.special@example.com")

    with pytest.raises(AuthorizationError) as exc:
        org.engine.require(principal, PROCESS_GIG_REQUESTS)

    assert exc.value.permission == PROCESS_GIG_REQUESTS
    assert exc.value.status_code == 403


def test_unknown_permission_or_event_type_is_a_server_error():
    org = build_org(*general("President", MODIFY_EVENT))
    org.members.add("pres.ident@example.com", roles=["President"])
    principal = org.members.principal("pres.ident@example.com")

    with pytest.raises(CatalogError):
        org.engine.check(principal, "edit-everything")
    with pytest.raises(CatalogError):
        org.engine.check(principal, MODIFY_EVENT, "Pool Party")


def _section_org():
    org = build_org(*general("Section Leader", EDIT_ATTENDANCE_OWN_SECTION), roles=("Section Leader",))
    org.members.add("lead.er@example.com", section="Tenor 1", roles=["Section Leader"])
    return org, org.members.principal("lead.er@example.com")


def test_own_section_variant_allows_same_section():
    org, leader = _section_org()

    assert org.engine.check_with_own_section(
        leader, EDIT_ATTENDANCE, "Rehearsal", principal_section="Tenor 1", target_section="Tenor 1"
    )


def test_own_section_variant_denies_other_section():
    org, leader = _section_org()

    with pytest.raises(AuthorizationError) as exc:
        org.engine.require_with_own_section(
            leader, EDIT_ATTENDANCE, "Rehearsal", principal_section="Tenor 1", target_section="Bass"
        )
    assert exc.value.permission == EDIT_ATTENDANCE


def test_own_section_variant_compares_sections_as_given():
    org, leader = _section_org()

    assert org.engine.check_with_own_section(
        leader, EDIT_ATTENDANCE, "Rehearsal", principal_section=None, target_section=None
    )
    assert not org.engine.check_with_own_section(
        leader, EDIT_ATTENDANCE, "Rehearsal", principal_section="Tenor 1", target_section=None
    )
    assert not org.engine.check_with_own_section(
        leader, EDIT_ATTENDANCE, "Rehearsal", principal_section=None, target_section="Tenor 1"
    )


def test_primary_permission_ignores_sections():
    org = build_org(*general("President", EDIT_ATTENDANCE))
    org.members.add("pres.ident@example.com", roles=["President"])
    president = org.members.principal("pres.ident@example.com")

    assert org.engine.check_with_own_section(
        president, EDIT_ATTENDANCE, "Rehearsal", principal_section=None, target_section="Bass"
    )
