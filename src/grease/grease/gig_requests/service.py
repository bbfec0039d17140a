from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import PROCESS_GIG_REQUESTS
from ..core.enums import GigRequestStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..events.model import NewEvent
from ..events.service import EventService
from ..members.model import Principal
from ..permissions.engine import AuthorizationEngine
from ..semesters.repository import SemesterRepository
from .model import GigRequest, NewGigRequest
from .repository import GigRequestRepository

logger = logging.getLogger(__name__)


class GigRequestService:
    """Use case: outside gig requests, from submission to dismissal or conversion into events."""

    def __init__(
        self,
        requests: GigRequestRepository,
        events: EventService,
        semesters: SemesterRepository,
        engine: AuthorizationEngine,
    ):
        self._requests = requests
        self._events = events
        self._semesters = semesters
        self._engine = engine

    def submit(self, request: NewGigRequest, *, now: Optional[datetime] = None) -> int:
        new_id = self._requests.create(request, time=now or now_local())
        logger.info("new gig request %s from %s", new_id, request.organization)
        return new_id

    def get(self, *, principal: Principal, request_id: int) -> GigRequest:
        self._engine.require(principal, PROCESS_GIG_REQUESTS)
        return self._load(request_id)

    def list(self, *, principal: Principal, include_all: bool = False) -> Sequence[GigRequest]:
        self._engine.require(principal, PROCESS_GIG_REQUESTS)
        if include_all:
            return self._requests.list_all()

        current = self._semesters.get_current()
        if not current:
            raise NotFoundError("There is no current semester.")
        return self._requests.list_since_or_pending(current.start_date)

    def dismiss(self, *, principal: Principal, request_id: int) -> None:
        self._transition(principal, request_id, GigRequestStatus.PENDING, GigRequestStatus.DISMISSED)

    def reopen(self, *, principal: Principal, request_id: int) -> None:
        self._transition(principal, request_id, GigRequestStatus.DISMISSED, GigRequestStatus.PENDING)

    def create_event_from_gig_request(self, *, principal: Principal, request_id: int, form: NewEvent) -> int:
        self._engine.require(principal, PROCESS_GIG_REQUESTS)

        request = self._load(request_id)
        if request.status != GigRequestStatus.PENDING:
            raise ValidationError("The gig request must be pending to create an event for it.")

        event_id = self._events.create_from_gig_request(form=form, gig_request_id=request.request_id)
        logger.info("%s created event %s from gig request %s", principal.email, event_id, request.request_id)
        return event_id

    def _load(self, request_id: int) -> GigRequest:
        request = self._requests.get(int(request_id))
        if not request:
            raise NotFoundError(f"No gig request with id {request_id}.")
        return request

    def _transition(
        self,
        principal: Principal,
        request_id: int,
        expected: GigRequestStatus,
        target: GigRequestStatus,
    ) -> None:
        self._engine.require(principal, PROCESS_GIG_REQUESTS)

        request = self._load(request_id)
        if request.status != expected:
            raise ValidationError(
                f"The gig request must be {expected.value.lower()} to be {target.value.lower()}, "
                f"but it is {request.status.value.lower()}."
            )
        if not self._requests.set_status(request.request_id, status=target, expected=expected):
            raise ValidationError(f"Gig request {request_id} was changed by someone else.")
        logger.info("%s moved gig request %s to %s", principal.email, request_id, target.value)
