from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Carpool, Event, EventDraft, EventUpdate, GigSong, UpdatedCarpool


class EventRepository(Protocol):
    def get_by_id(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def list_for_semester(self, semester: str) -> Sequence[Event]:
        """Events of ``semester`` ordered by call time."""

        raise NotImplementedError

    def create_events(self, drafts: Sequence[EventDraft], *, gig_request_id: Optional[int] = None) -> int:
        """Insert every draft in one transaction and return the id of the first.

        When ``gig_request_id`` is given, the same transaction marks that gig
        request ACCEPTED and records the first event id on it.
        """

        raise NotImplementedError

    def update(self, event_id: int, update: EventUpdate) -> bool:
        raise NotImplementedError

    def delete(self, event_id: int) -> bool:
        raise NotImplementedError

    def get_setlist(self, event_id: int) -> Sequence[GigSong]:
        raise NotImplementedError

    def replace_setlist(self, event_id: int, song_ids: Sequence[int]) -> Sequence[GigSong]:
        """Delete the event's setlist and insert the new one, atomically."""

        raise NotImplementedError

    def get_carpools(self, event_id: int) -> Sequence[Carpool]:
        raise NotImplementedError

    def replace_carpools(self, event_id: int, carpools: Sequence[UpdatedCarpool]) -> Sequence[Carpool]:
        """Delete every carpool of the event and insert the new ones, atomically."""

        raise NotImplementedError
