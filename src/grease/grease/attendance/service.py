from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..absence_requests.repository import AbsenceRequestRepository
from ..common.datetime_utils import now_local
from ..core.constants import EDIT_ATTENDANCE, VIEW_ATTENDANCE, VIEW_ATTENDANCE_OWN_SECTION
from ..core.enums import AbsenceRequestStatus, AttendanceState
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..events.model import Event
from ..events.repository import EventRepository
from ..members.model import Principal
from ..members.repository import MemberRepository
from ..permissions.engine import AuthorizationEngine
from .model import Attendance, AttendanceForm, AttendanceRow, attendance_state
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Per-(member, event) RSVP, confirmation and excusal workflow.

    Records are created lazily: a member active in the event's semester who has
    never interacted with the event is treated as a default (not responded) record.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        events: EventRepository,
        members: MemberRepository,
        absence_requests: AbsenceRequestRepository,
        engine: AuthorizationEngine,
    ):
        self._attendance = attendance
        self._events = events
        self._members = members
        self._absence_requests = absence_requests
        self._engine = engine

    def _get_event(self, event_id: int) -> Event:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError(f"No event with id {event_id}.")
        return event

    def _section_of(self, email: str, semester: str) -> Optional[str]:
        active = self._members.get_active_semester(email, semester)
        return active.section if active else None

    def _require_active(self, email: str, event: Event) -> None:
        if not self._members.get_active_semester(email, event.semester):
            raise ValidationError(f"{email} is not active for the {event.semester} semester.")

    def _record(self, event: Event, email: str) -> Attendance:
        return self._attendance.get(event_id=event.event_id, member=email) or Attendance(
            member=email, event_id=event.event_id
        )

    def _approved_members(self, event_id: int) -> set[str]:
        return {
            r.member
            for r in self._absence_requests.list_for_event(event_id)
            if r.status == AbsenceRequestStatus.APPROVED
        }

    # -------- member actions --------
    def rsvp(self, *, principal: Principal, event_id: int, attending: bool, now: Optional[datetime] = None) -> Attendance:
        event = self._get_event(event_id)
        self._require_active(principal.email, event)
        if (now or now_local()) > event.call_time:
            raise ValidationError("Responses are closed for this event.")

        current = self._record(event, principal.email)
        updated = replace(current, rsvp=bool(attending), confirmed=current.confirmed and bool(attending))
        if updated != current:
            self._attendance.save(updated)
            logger.info("%s rsvp'd %s for event %s", principal.email, "yes" if attending else "no", event.event_id)
        return updated

    def confirm(self, *, principal: Principal, event_id: int) -> Attendance:
        event = self._get_event(event_id)
        self._require_active(principal.email, event)

        current = self._record(event, principal.email)
        if current.rsvp is not True:
            raise ValidationError("You must RSVP that you are attending before confirming.")
        if current.confirmed:
            return current

        updated = replace(current, confirmed=True)
        self._attendance.save(updated)
        logger.info("%s confirmed for event %s", principal.email, event.event_id)
        return updated

    # -------- officer actions --------
    def update(self, *, principal: Principal, event_id: int, member: str, form: AttendanceForm) -> Attendance:
        event = self._get_event(event_id)
        target = self._members.get_active_semester(member, event.semester)

        self._engine.require_with_own_section(
            principal,
            EDIT_ATTENDANCE,
            event.event_type,
            principal_section=self._section_of(principal.email, event.semester),
            target_section=target.section if target else None,
        )
        if not target:
            raise NotFoundError(f"{member} is not active for the {event.semester} semester.")

        updated = replace(
            self._record(event, member),
            did_attend=form.did_attend,
            confirmed=form.confirmed,
            excused=form.excused,
            minutes_late=form.minutes_late,
        )
        self._attendance.save(updated)
        logger.info("%s updated attendance of %s for event %s", principal.email, member, event.event_id)
        return updated

    def excuse_unconfirmed(self, *, principal: Principal, event_id: int) -> int:
        """Excuse every eligible member who neither confirmed nor has an approved absence request."""
        event = self._get_event(event_id)
        self._engine.require(principal, EDIT_ATTENDANCE, event.event_type)

        stored = {a.member: a for a in self._attendance.list_for_event(event.event_id)}
        approved = self._approved_members(event.event_id)

        to_excuse: list[str] = []
        for member, _active in self._members.list_active_for_semester(event.semester):
            record = stored.get(member.email)
            if member.email in approved:
                continue
            if record and (record.confirmed or record.excused):
                continue
            to_excuse.append(member.email)

        if to_excuse:
            self._attendance.excuse_members(event_id=event.event_id, members=to_excuse)
        logger.info("%s excused %d unconfirmed members for event %s", principal.email, len(to_excuse), event.event_id)
        return len(to_excuse)

    # -------- views --------
    def _roster(self, event: Event, now: datetime) -> list[AttendanceRow]:
        stored = {a.member: a for a in self._attendance.list_for_event(event.event_id)}
        approved = self._approved_members(event.event_id)
        over = event.is_over(now)

        rows: list[AttendanceRow] = []
        for member, active in self._members.list_active_for_semester(event.semester):
            record = stored.get(member.email) or Attendance(member=member.email, event_id=event.event_id)
            rows.append(
                AttendanceRow(
                    member=member,
                    section=active.section,
                    attendance=record,
                    state=attendance_state(record, excused_by_request=member.email in approved, event_over=over),
                )
            )
        return rows

    def get_attendance(self, *, principal: Principal, event_id: int, now: Optional[datetime] = None) -> Sequence[AttendanceRow]:
        event = self._get_event(event_id)

        if self._engine.check(principal, VIEW_ATTENDANCE):
            return self._roster(event, now or now_local())

        section = self._section_of(principal.email, event.semester)
        if section is not None and self._engine.check(principal, VIEW_ATTENDANCE_OWN_SECTION, event.event_type):
            return [r for r in self._roster(event, now or now_local()) if r.section == section]

        logger.warning("denied %s: %s for event %s", principal.email, VIEW_ATTENDANCE, event.event_id)
        raise AuthorizationError(VIEW_ATTENDANCE)

    def get_member_attendance(
        self,
        *,
        principal: Principal,
        event_id: int,
        member: str,
        now: Optional[datetime] = None,
    ) -> AttendanceRow:
        event = self._get_event(event_id)
        target = self._members.get_active_semester(member, event.semester)

        if member != principal.email:
            self._engine.require_with_own_section(
                principal,
                VIEW_ATTENDANCE,
                event.event_type,
                principal_section=self._section_of(principal.email, event.semester),
                target_section=target.section if target else None,
            )

        stored = self._attendance.get(event_id=event.event_id, member=member)
        if not stored and not target:
            raise NotFoundError(f"No attendance for member {member} at event {event_id}.")
        record = stored or Attendance(member=member, event_id=event.event_id)

        member_entity = self._members.get_by_email(member)
        if not member_entity:
            raise NotFoundError(f"No member with the email {member}.")

        return AttendanceRow(
            member=member_entity,
            section=target.section if target else None,
            attendance=record,
            state=attendance_state(
                record,
                excused_by_request=member in self._approved_members(event.event_id),
                event_over=event.is_over(now or now_local()),
            ),
        )

    def see_whos_attending(self, event_id: int) -> list[dict]:
        """Who said they're coming; visible to every logged-in member."""
        event = self._get_event(event_id)
        out: list[dict] = []
        for row in self._roster(event, now_local()):
            if row.state in (AttendanceState.RSVP_ATTENDING, AttendanceState.CONFIRMED, AttendanceState.ATTENDED):
                out.append(
                    {
                        "member": row.member.full_name,
                        "section": row.section,
                        "confirmed": row.attendance.confirmed,
                    }
                )
        return out
