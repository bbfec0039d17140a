from __future__ import annotations

from datetime import datetime

import pytest

from src.grease.grease.attendance.model import Attendance
from src.grease.grease.core.constants import VIEW_ATTENDANCE
from src.grease.grease.core.enums import AttendanceState
from src.grease.grease.core.exceptions import AuthorizationError, NotFoundError

NOW = datetime(2026, 8, 30, 12, 0)


@pytest.fixture
def roster(org):
    org.members.add("bari.tone@example.com", section="Baritone")
    org.members.add("ten.or@example.com", section="Tenor 1")
    org.members.add("no.section@example.com")
    return org


def test_full_roster_is_synthesized_without_writes(roster):
    event = roster.events_repo.add()
    president = roster.members.principal("pres.ident@example.com")

    rows = roster.attendance_service.get_attendance(principal=president, event_id=event.event_id, now=NOW)

    assert len(rows) == 6
    assert all(r.state == AttendanceState.NOT_RESPONDED for r in rows)
    assert roster.attendance_repo.writes == 0


def test_section_leader_sees_only_own_section(roster):
    event = roster.events_repo.add()
    leader = roster.members.principal("lead.er@example.com")

    rows = roster.attendance_service.get_attendance(principal=leader, event_id=event.event_id, now=NOW)

    assert {r.member.email for r in rows} == {"lead.er@example.com", "bari.tone@example.com"}


def test_scoped_view_does_not_grant_the_full_roster(roster):
    event = roster.events_repo.add(event_type="Ombuds")
    ombudsman = roster.members.principal("omb.uds@example.com")

    with pytest.raises(AuthorizationError) as exc:
        roster.attendance_service.get_attendance(principal=ombudsman, event_id=event.event_id, now=NOW)
    assert exc.value.permission == VIEW_ATTENDANCE


def test_member_can_always_see_own_record(roster):
    event = roster.events_repo.add()
    member = roster.members.principal("ten.or@example.com")

    row = roster.attendance_service.get_member_attendance(
        principal=member, event_id=event.event_id, member="ten.or@example.com", now=NOW
    )

    assert row.attendance == Attendance(member="ten.or@example.com", event_id=event.event_id)
    assert row.section == "Tenor 1"


def test_scoped_view_attendance_covers_single_members(roster):
    event = roster.events_repo.add(event_type="Ombuds")
    ombudsman = roster.members.principal("omb.uds@example.com")

    row = roster.attendance_service.get_member_attendance(
        principal=ombudsman, event_id=event.event_id, member="ten.or@example.com", now=NOW
    )
    assert row.member.email == "ten.or@example.com"


def test_viewing_someone_else_needs_permission(roster):
    event = roster.events_repo.add()
    member = roster.members.principal("ten.or@example.com")

    with pytest.raises(AuthorizationError):
        roster.attendance_service.get_member_attendance(
            principal=member, event_id=event.event_id, member="bari.tone@example.com", now=NOW
        )


def test_unknown_event_is_not_found(roster):
    president = roster.members.principal("pres.ident@example.com")

    with pytest.raises(NotFoundError):
        roster.attendance_service.get_attendance(principal=president, event_id=999, now=NOW)


def test_see_whos_attending_lists_positive_rsvps(roster):
    event = roster.events_repo.add(call_time=datetime(2099, 1, 1, 18, 0))
    tenor = roster.members.principal("ten.or@example.com")
    roster.attendance_service.rsvp(principal=tenor, event_id=event.event_id, attending=True, now=NOW)

    attending = roster.attendance_service.see_whos_attending(event.event_id)

    assert [a["section"] for a in attending] == ["Tenor 1"]
