from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import PROCESS_ABSENCE_REQUESTS
from ..core.enums import AbsenceRequestStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..events.repository import EventRepository
from ..members.model import Principal
from ..permissions.engine import AuthorizationEngine
from ..semesters.repository import SemesterRepository
from .model import AbsenceRequest
from .repository import AbsenceRequestRepository

logger = logging.getLogger(__name__)


class AbsenceRequestService:
    """Use case: members ask to be excused; officers approve or deny, once."""

    def __init__(
        self,
        requests: AbsenceRequestRepository,
        events: EventRepository,
        semesters: SemesterRepository,
        engine: AuthorizationEngine,
    ):
        self._requests = requests
        self._events = events
        self._semesters = semesters
        self._engine = engine

    def submit(self, *, principal: Principal, event_id: int, reason: str, now: Optional[datetime] = None) -> None:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError(f"No event with id {event_id}.")

        reason = require_non_empty(reason, "Reason")
        if self._requests.get(member=principal.email, event_id=event.event_id):
            raise ValidationError(f"{principal.email} has already submitted an absence request for event {event_id}.")

        self._requests.create(member=principal.email, event_id=event.event_id, reason=reason, time=now or now_local())
        logger.info("%s requested an absence from event %s", principal.email, event_id)

    def get_for_member(self, *, principal: Principal, event_id: int) -> AbsenceRequest:
        request = self._requests.get(member=principal.email, event_id=int(event_id))
        if not request:
            raise NotFoundError(f"No absence request for member {principal.email} at event {event_id}.")
        return request

    def list_for_current_semester(self, *, principal: Principal) -> Sequence[AbsenceRequest]:
        self._engine.require(principal, PROCESS_ABSENCE_REQUESTS)

        current = self._semesters.get_current()
        if not current:
            raise NotFoundError("There is no current semester.")
        return self._requests.list_for_semester(current.name)

    def is_excused(self, *, member: str, event_id: int) -> bool:
        request = self._requests.get(member=member, event_id=int(event_id))
        return request is not None and request.status == AbsenceRequestStatus.APPROVED

    def approve(self, *, principal: Principal, event_id: int, member: str) -> None:
        self._decide(principal=principal, event_id=event_id, member=member, status=AbsenceRequestStatus.APPROVED)

    def deny(self, *, principal: Principal, event_id: int, member: str) -> None:
        self._decide(principal=principal, event_id=event_id, member=member, status=AbsenceRequestStatus.DENIED)

    def _decide(self, *, principal: Principal, event_id: int, member: str, status: AbsenceRequestStatus) -> None:
        self._engine.require(principal, PROCESS_ABSENCE_REQUESTS)

        request = self._requests.get(member=member, event_id=int(event_id))
        if not request:
            raise NotFoundError(f"No absence request for member {member} at event {event_id}.")
        if request.is_decided:
            raise ValidationError(f"This absence request has already been {request.status.value.lower()}.")

        if not self._requests.decide(member=member, event_id=int(event_id), status=status):
            raise ValidationError("This absence request has already been processed.")
        logger.info("%s %s the absence request of %s for event %s", principal.email, status.value.lower(), member, event_id)
