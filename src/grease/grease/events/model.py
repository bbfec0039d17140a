from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import as_int, optional_text, require_non_empty
from ..core.enums import Repeat
from ..core.exceptions import ValidationError


def _fmt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Event:
    """Domain entity: something members are expected (or invited) to attend."""

    event_id: int
    name: str
    semester: str
    event_type: str
    call_time: datetime
    release_time: Optional[datetime] = None
    points: int = 0
    location: Optional[str] = None
    comments: Optional[str] = None
    default_attend: bool = True
    gig_count: bool = True

    def is_over(self, now: datetime) -> bool:
        return (self.release_time or self.call_time) < now

    def to_json(self) -> dict:
        return {
            "id": self.event_id,
            "name": self.name,
            "semester": self.semester,
            "type": self.event_type,
            "callTime": _fmt(self.call_time),
            "releaseTime": _fmt(self.release_time),
            "points": self.points,
            "location": self.location,
            "comments": self.comments,
            "defaultAttend": self.default_attend,
            "gigCount": self.gig_count,
        }


@dataclass(frozen=True)
class EventDraft:
    """One event about to be inserted (a single occurrence of a possibly repeating form)."""

    name: str
    semester: str
    event_type: str
    call_time: datetime
    release_time: Optional[datetime] = None
    points: int = 0
    location: Optional[str] = None
    comments: Optional[str] = None
    default_attend: bool = True
    gig_count: bool = True


@dataclass(frozen=True)
class NewEvent:
    """Form for creating one event, or a series when ``repeat`` is not ``no``."""

    name: str
    semester: str
    event_type: str
    call_time: datetime
    release_time: Optional[datetime] = None
    points: int = 0
    location: Optional[str] = None
    comments: Optional[str] = None
    default_attend: bool = True
    gig_count: bool = True
    repeat: Repeat = Repeat.NO
    repeat_until: Optional[datetime] = None

    @classmethod
    def from_json(cls, data: dict) -> "NewEvent":
        try:
            repeat = Repeat(data.get("repeat") or Repeat.NO.value)
        except ValueError:
            raise ValidationError(f"Invalid repeat value: {data.get('repeat')!r}")

        release = data.get("releaseTime")
        until = data.get("repeatUntil")
        return cls(
            name=require_non_empty(data.get("name"), "Name"),
            semester=require_non_empty(data.get("semester"), "Semester"),
            event_type=require_non_empty(data.get("type"), "Event type"),
            call_time=parse_iso_datetime(data.get("callTime")),
            release_time=parse_iso_datetime(release) if release else None,
            points=as_int(data.get("points"), "Points"),
            location=optional_text(data.get("location")),
            comments=optional_text(data.get("comments")),
            default_attend=bool(data.get("defaultAttend", True)),
            gig_count=bool(data.get("gigCount", True)),
            repeat=repeat,
            repeat_until=parse_iso_datetime(until) if until else None,
        )


@dataclass(frozen=True)
class EventUpdate:
    """Full replacement of an event's editable fields."""

    name: str
    semester: str
    event_type: str
    call_time: datetime
    release_time: Optional[datetime] = None
    points: int = 0
    location: Optional[str] = None
    comments: Optional[str] = None
    default_attend: bool = True
    gig_count: bool = True

    @classmethod
    def from_json(cls, data: dict) -> "EventUpdate":
        release = data.get("releaseTime")
        return cls(
            name=require_non_empty(data.get("name"), "Name"),
            semester=require_non_empty(data.get("semester"), "Semester"),
            event_type=require_non_empty(data.get("type"), "Event type"),
            call_time=parse_iso_datetime(data.get("callTime")),
            release_time=parse_iso_datetime(release) if release else None,
            points=as_int(data.get("points"), "Points"),
            location=optional_text(data.get("location")),
            comments=optional_text(data.get("comments")),
            default_attend=bool(data.get("defaultAttend", True)),
            gig_count=bool(data.get("gigCount", True)),
        )


@dataclass(frozen=True)
class GigSong:
    event_id: int
    song_id: int
    order: int

    def to_json(self) -> dict:
        return {"event": self.event_id, "song": self.song_id, "order": self.order}


@dataclass(frozen=True)
class Carpool:
    carpool_id: int
    event_id: int
    driver: str
    passengers: tuple[str, ...] = ()

    def to_json(self) -> dict:
        return {
            "id": self.carpool_id,
            "event": self.event_id,
            "driver": self.driver,
            "passengers": list(self.passengers),
        }


@dataclass(frozen=True)
class UpdatedCarpool:
    """One car in a carpool edit: a driver and who rides with them."""

    driver: str
    passengers: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: dict) -> "UpdatedCarpool":
        if not isinstance(data, dict):
            raise ValidationError("Each carpool must be an object")
        passengers = data.get("passengers") or []
        if not isinstance(passengers, list):
            raise ValidationError("Passengers must be a list of member emails")
        return cls(
            driver=require_non_empty(data.get("driver"), "Driver"),
            passengers=tuple(require_non_empty(p if isinstance(p, str) else None, "Passenger") for p in passengers),
        )
