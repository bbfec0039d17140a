from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import as_int, require_non_negative
from ..core.enums import AttendanceState
from ..members.model import Member


@dataclass(frozen=True)
class Attendance:
    """Domain entity: one member's attendance at one event, keyed by (member, event)."""

    member: str
    event_id: int
    rsvp: Optional[bool] = None
    confirmed: bool = False
    excused: bool = False
    did_attend: bool = False
    minutes_late: int = 0

    def to_json(self) -> dict:
        return {
            "member": self.member,
            "event": self.event_id,
            "rsvp": self.rsvp,
            "confirmed": self.confirmed,
            "excused": self.excused,
            "didAttend": self.did_attend,
            "minutesLate": self.minutes_late,
        }


def attendance_state(
    record: Attendance,
    *,
    excused_by_request: bool = False,
    event_over: bool = False,
) -> AttendanceState:
    """Where a record sits in NOT_RESPONDED -> RSVP -> CONFIRMED -> outcome."""
    if record.did_attend:
        return AttendanceState.ATTENDED
    if record.excused or excused_by_request:
        return AttendanceState.EXCUSED_ABSENT
    if event_over:
        return AttendanceState.UNEXCUSED_ABSENT
    if record.confirmed:
        return AttendanceState.CONFIRMED
    if record.rsvp is True:
        return AttendanceState.RSVP_ATTENDING
    if record.rsvp is False:
        return AttendanceState.RSVP_DECLINED
    return AttendanceState.NOT_RESPONDED


@dataclass(frozen=True)
class AttendanceForm:
    """Officer edit of a member's attendance."""

    did_attend: bool
    confirmed: bool
    excused: bool
    minutes_late: int = 0

    @classmethod
    def from_json(cls, data: dict) -> "AttendanceForm":
        return cls(
            did_attend=bool(data.get("didAttend", False)),
            confirmed=bool(data.get("confirmed", False)),
            excused=bool(data.get("excused", False)),
            minutes_late=require_non_negative(as_int(data.get("minutesLate"), "Minutes late"), "Minutes late"),
        )


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for attendance listings (member joined with record and derived state)."""

    member: Member
    section: Optional[str]
    attendance: Attendance
    state: AttendanceState

    def to_json(self) -> dict:
        return {
            "member": self.member.to_json(),
            "section": self.section,
            "attendance": self.attendance.to_json(),
            "state": self.state.value,
        }
