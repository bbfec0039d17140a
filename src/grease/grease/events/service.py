from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import add_days, add_months
from ..core.constants import CREATE_EVENT, DELETE_EVENT, EDIT_ALL_EVENTS, EDIT_CARPOOL, EDIT_SETLIST, MODIFY_EVENT
from ..core.enums import Repeat
from ..core.exceptions import NotFoundError, ValidationError
from ..members.model import Principal
from ..permissions.catalog import CatalogProvider
from ..permissions.engine import AuthorizationEngine
from ..semesters.repository import SemesterRepository
from .model import Carpool, Event, EventDraft, EventUpdate, GigSong, NewEvent, UpdatedCarpool
from .repository import EventRepository

logger = logging.getLogger(__name__)

MAX_OCCURRENCES = 400


def _shift(value: datetime, repeat: Repeat, index: int) -> datetime:
    if repeat == Repeat.DAILY:
        return add_days(value, index)
    if repeat == Repeat.WEEKLY:
        return add_days(value, 7 * index)
    if repeat == Repeat.BIWEEKLY:
        return add_days(value, 14 * index)
    if repeat == Repeat.MONTHLY:
        return add_months(value, index)
    if repeat == Repeat.YEARLY:
        return add_months(value, 12 * index)
    return value


def expand_occurrences(form: NewEvent) -> list[EventDraft]:
    """Turn a (possibly repeating) form into the list of events to insert, in call-time order."""
    if form.repeat == Repeat.NO:
        count = 1
    else:
        if form.repeat_until is None:
            raise ValidationError("Repeating events need a 'repeat until' date")
        if form.repeat_until < form.call_time:
            raise ValidationError("The 'repeat until' date must be after the first call time")
        count = 0
        while count < MAX_OCCURRENCES and _shift(form.call_time, form.repeat, count) <= form.repeat_until:
            count += 1

    drafts: list[EventDraft] = []
    for index in range(count):
        drafts.append(
            EventDraft(
                name=form.name,
                semester=form.semester,
                event_type=form.event_type,
                call_time=_shift(form.call_time, form.repeat, index),
                release_time=_shift(form.release_time, form.repeat, index) if form.release_time else None,
                points=form.points,
                location=form.location,
                comments=form.comments,
                default_attend=form.default_attend,
                gig_count=form.gig_count,
            )
        )
    return drafts


class EventService:
    """Use case: create, edit and look up events (and their setlists)."""

    def __init__(
        self,
        events: EventRepository,
        semesters: SemesterRepository,
        engine: AuthorizationEngine,
        catalogs: CatalogProvider,
    ):
        self._events = events
        self._semesters = semesters
        self._engine = engine
        self._catalogs = catalogs

    def get_event(self, event_id: int) -> Event:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError(f"No event with id {event_id}.")
        return event

    def list_events(self, *, semester: Optional[str] = None) -> Sequence[Event]:
        if semester is None:
            current = self._semesters.get_current()
            if not current:
                raise NotFoundError("There is no current semester.")
            semester = current.name
        return self._events.list_for_semester(semester)

    def _validate_fields(
        self,
        *,
        event_type: str,
        semester: str,
        call_time: datetime,
        release_time: Optional[datetime],
    ) -> None:
        if not self._catalogs.get().has_event_type(event_type):
            raise ValidationError(f"No event type named '{event_type}'")
        if not self._semesters.get_by_name(semester):
            raise ValidationError(f"No semester named '{semester}'")
        if release_time is not None and release_time < call_time:
            raise ValidationError("The release time must be after the call time")

    def create_event(self, *, principal: Principal, form: NewEvent) -> int:
        self._validate_fields(
            event_type=form.event_type,
            semester=form.semester,
            call_time=form.call_time,
            release_time=form.release_time,
        )
        self._engine.require(principal, CREATE_EVENT, form.event_type)

        new_id = self._events.create_events(expand_occurrences(form))
        logger.info("%s created event %s (%s)", principal.email, new_id, form.name)
        return new_id

    def create_from_gig_request(self, *, form: NewEvent, gig_request_id: int) -> int:
        """Create the events for a gig request and mark it accepted, atomically.

        Authorization is the caller's job (``process-gig-requests``).
        """
        self._validate_fields(
            event_type=form.event_type,
            semester=form.semester,
            call_time=form.call_time,
            release_time=form.release_time,
        )
        return self._events.create_events(expand_occurrences(form), gig_request_id=int(gig_request_id))

    def update_event(self, *, principal: Principal, event_id: int, update: EventUpdate) -> None:
        event = self.get_event(event_id)
        if not self._engine.check(principal, EDIT_ALL_EVENTS):
            self._engine.require(principal, MODIFY_EVENT, event.event_type)

        self._validate_fields(
            event_type=update.event_type,
            semester=update.semester,
            call_time=update.call_time,
            release_time=update.release_time,
        )
        if not self._events.update(event.event_id, update):
            raise NotFoundError(f"No event with id {event_id}.")
        logger.info("%s updated event %s", principal.email, event_id)

    def delete_event(self, *, principal: Principal, event_id: int) -> None:
        event = self.get_event(event_id)
        self._engine.require(principal, DELETE_EVENT, event.event_type)

        if not self._events.delete(event.event_id):
            raise NotFoundError(f"No event with id {event_id}.")
        logger.info("%s deleted event %s", principal.email, event_id)

    def get_setlist(self, event_id: int) -> Sequence[GigSong]:
        event = self.get_event(event_id)
        return self._events.get_setlist(event.event_id)

    def edit_setlist(self, *, principal: Principal, event_id: int, song_ids: Sequence[int]) -> Sequence[GigSong]:
        event = self.get_event(event_id)
        self._engine.require(principal, EDIT_SETLIST, event.event_type)

        if len(set(song_ids)) != len(song_ids):
            raise ValidationError("A song can only appear once in a setlist")
        return self._events.replace_setlist(event.event_id, [int(s) for s in song_ids])

    def get_carpools(self, event_id: int) -> Sequence[Carpool]:
        event = self.get_event(event_id)
        return self._events.get_carpools(event.event_id)

    def update_carpools(
        self, *, principal: Principal, event_id: int, carpools: Sequence[UpdatedCarpool]
    ) -> Sequence[Carpool]:
        """Replace all of the event's carpools; nobody may be in two cars."""
        event = self.get_event(event_id)
        self._engine.require(principal, EDIT_CARPOOL, event.event_type)

        seen: set[str] = set()
        for car in carpools:
            for member in (car.driver, *car.passengers):
                if member in seen:
                    raise ValidationError(f"{member} can only be in one carpool")
                seen.add(member)

        saved = self._events.replace_carpools(event.event_id, list(carpools))
        logger.info("%s set %d carpools for event %s", principal.email, len(saved), event.event_id)
        return saved
