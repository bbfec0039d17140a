from __future__ import annotations

import pytest

from src.grease.grease.core.constants import (
    ADD_MULTI_TODOS,
    CREATE_EVENT,
    DELETE_EVENT,
    EDIT_ALL_EVENTS,
    EDIT_ATTENDANCE,
    EDIT_ATTENDANCE_OWN_SECTION,
    EDIT_CARPOOL,
    EDIT_PERMISSIONS,
    EDIT_SETLIST,
    MODIFY_EVENT,
    PROCESS_ABSENCE_REQUESTS,
    PROCESS_GIG_REQUESTS,
    VIEW_ATTENDANCE,
    VIEW_ATTENDANCE_OWN_SECTION,
)

from tests.fakes import build_org, general, scoped


@pytest.fixture
def org():
    """Officers: a president with everything, a section leader and an ombudsman scoped to 'Ombuds'."""
    rows = (
        general(
            "President",
            CREATE_EVENT,
            MODIFY_EVENT,
            DELETE_EVENT,
            EDIT_ALL_EVENTS,
            EDIT_ATTENDANCE,
            VIEW_ATTENDANCE,
            EDIT_SETLIST,
            EDIT_CARPOOL,
            PROCESS_ABSENCE_REQUESTS,
            PROCESS_GIG_REQUESTS,
            EDIT_PERMISSIONS,
            ADD_MULTI_TODOS,
        )
        + general("Section Leader", EDIT_ATTENDANCE_OWN_SECTION, VIEW_ATTENDANCE_OWN_SECTION)
        + scoped("Ombudsman", "Ombuds", CREATE_EVENT, MODIFY_EVENT, EDIT_ATTENDANCE, VIEW_ATTENDANCE, EDIT_CARPOOL)
    )
    org = build_org(*rows, roles=("President", "Section Leader", "Ombudsman", "Member"))
    org.members.add("pres.ident@example.com", section="Tenor 1", roles=["President"])
    org.members.add("lead.er@example.com", section="Baritone", roles=["Section Leader"])
    org.members.add("omb.uds@example.com", section="Bass", roles=["Ombudsman"])
    return org
