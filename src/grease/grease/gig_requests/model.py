from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import optional_text, require_non_empty
from ..core.enums import GigRequestStatus


@dataclass(frozen=True)
class GigRequest:
    """An outside request for a performance.

    ``event`` is only set once the request was ACCEPTED and points at the first
    event created for it.
    """

    request_id: int
    time: datetime
    name: str
    organization: str
    contact_name: str
    contact_email: str
    contact_phone: str
    start_time: datetime
    location: str
    comments: Optional[str] = None
    event: Optional[int] = None
    status: GigRequestStatus = GigRequestStatus.PENDING

    def to_json(self) -> dict:
        return {
            "id": self.request_id,
            "time": self.time.isoformat(),
            "name": self.name,
            "organization": self.organization,
            "event": self.event,
            "contactName": self.contact_name,
            "contactEmail": self.contact_email,
            "contactPhone": self.contact_phone,
            "startTime": self.start_time.isoformat(),
            "location": self.location,
            "comments": self.comments,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class NewGigRequest:
    name: str
    organization: str
    contact_name: str
    contact_email: str
    contact_phone: str
    start_time: datetime
    location: str
    comments: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> "NewGigRequest":
        return cls(
            name=require_non_empty(data.get("name"), "Name"),
            organization=require_non_empty(data.get("organization"), "Organization"),
            contact_name=require_non_empty(data.get("contactName"), "Contact name"),
            contact_email=require_non_empty(data.get("contactEmail"), "Contact email"),
            contact_phone=require_non_empty(data.get("contactPhone"), "Contact phone"),
            start_time=parse_iso_datetime(data.get("startTime")),
            location=require_non_empty(data.get("location"), "Location"),
            comments=optional_text(data.get("comments")),
        )
