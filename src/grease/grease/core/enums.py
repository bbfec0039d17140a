from __future__ import annotations

from enum import Enum


class Enrollment(str, Enum):
    """How a member is enrolled for a semester."""

    CLASS = "class"
    CLUB = "club"


class PermissionKind(str, Enum):
    """Static permissions are never scoped; event permissions may be scoped to an event type."""

    STATIC = "static"
    EVENT = "event"


class AttendanceState(str, Enum):
    NOT_RESPONDED = "NOT_RESPONDED"
    RSVP_ATTENDING = "RSVP_ATTENDING"
    RSVP_DECLINED = "RSVP_DECLINED"
    CONFIRMED = "CONFIRMED"
    ATTENDED = "ATTENDED"
    EXCUSED_ABSENT = "EXCUSED_ABSENT"
    UNEXCUSED_ABSENT = "UNEXCUSED_ABSENT"


class AbsenceRequestStatus(str, Enum):
    """Absence request lifecycle. APPROVED and DENIED are terminal."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DENIED = "DENIED"


class GigRequestStatus(str, Enum):
    """Gig request lifecycle. ACCEPTED means events were created from it (terminal)."""

    PENDING = "PENDING"
    DISMISSED = "DISMISSED"
    ACCEPTED = "ACCEPTED"


class Repeat(str, Enum):
    NO = "no"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
