from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import GigRequestStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Carpool, Event, EventDraft, EventUpdate, GigSong, UpdatedCarpool
from .repository import EventRepository

_EVENT_COLUMNS = """
    id, name, semester, type, call_time, release_time, points,
    location, comments, default_attend, gig_count
"""


def _to_event(r: dict) -> Event:
    return Event(
        event_id=int(r["id"]),
        name=r["name"],
        semester=r["semester"],
        event_type=r["type"],
        call_time=r["call_time"],
        release_time=r.get("release_time"),
        points=int(r.get("points") or 0),
        location=r.get("location"),
        comments=r.get("comments"),
        default_attend=as_bool(r.get("default_attend")),
        gig_count=as_bool(r.get("gig_count")),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: int) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EVENT_COLUMNS} FROM event WHERE id=%s", (int(event_id),))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_for_semester(self, semester: str) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_EVENT_COLUMNS} FROM event WHERE semester=%s ORDER BY call_time",
                (semester,),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def create_events(self, drafts: Sequence[EventDraft], *, gig_request_id: Optional[int] = None) -> int:
        if not drafts:
            raise ValidationError("No events to create")

        first_id: Optional[int] = None
        with db_cursor(self._conn_factory) as (_, cur):
            for d in drafts:
                cur.execute(
                    """
                    INSERT INTO event(
                        name, semester, type, call_time, release_time, points,
                        location, comments, default_attend, gig_count
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        d.name,
                        d.semester,
                        d.event_type,
                        d.call_time,
                        d.release_time,
                        int(d.points),
                        d.location,
                        d.comments,
                        bool(d.default_attend),
                        bool(d.gig_count),
                    ),
                )
                if first_id is None:
                    first_id = int(cur.lastrowid)

            if gig_request_id is not None:
                cur.execute(
                    "UPDATE gig_request SET status=%s, event=%s WHERE id=%s AND status=%s",
                    (
                        GigRequestStatus.ACCEPTED.value,
                        first_id,
                        int(gig_request_id),
                        GigRequestStatus.PENDING.value,
                    ),
                )
                if cur.rowcount == 0:
                    # Raising inside the block rolls back the inserted events too.
                    raise ValidationError("The gig request must be pending to create an event for it.")

        return int(first_id)

    def update(self, event_id: int, update: EventUpdate) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE event
                SET name=%s, semester=%s, type=%s, call_time=%s, release_time=%s, points=%s,
                    location=%s, comments=%s, default_attend=%s, gig_count=%s
                WHERE id=%s
                """,
                (
                    update.name,
                    update.semester,
                    update.event_type,
                    update.call_time,
                    update.release_time,
                    int(update.points),
                    update.location,
                    update.comments,
                    bool(update.default_attend),
                    bool(update.gig_count),
                    int(event_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, event_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM event WHERE id=%s", (int(event_id),))
            return cur.rowcount > 0

    def get_setlist(self, event_id: int) -> Sequence[GigSong]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT event, song, `order` FROM gig_song WHERE event=%s ORDER BY `order`",
                (int(event_id),),
            )
            return [
                GigSong(event_id=int(r["event"]), song_id=int(r["song"]), order=int(r["order"]))
                for r in fetchall(cur)
            ]

    def replace_setlist(self, event_id: int, song_ids: Sequence[int]) -> Sequence[GigSong]:
        setlist = [
            GigSong(event_id=int(event_id), song_id=int(song_id), order=index + 1)
            for index, song_id in enumerate(song_ids)
        ]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM gig_song WHERE event=%s", (int(event_id),))
            for gig_song in setlist:
                cur.execute(
                    "INSERT INTO gig_song(event, song, `order`) VALUES(%s,%s,%s)",
                    (gig_song.event_id, gig_song.song_id, gig_song.order),
                )
        return setlist

    def get_carpools(self, event_id: int) -> Sequence[Carpool]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, event, driver FROM carpool WHERE event=%s ORDER BY id", (int(event_id),))
            cars = fetchall(cur)
            cur.execute(
                """
                SELECT ri.carpool, ri.member
                FROM rides_in ri
                JOIN carpool c ON c.id = ri.carpool
                WHERE c.event=%s
                ORDER BY ri.member
                """,
                (int(event_id),),
            )
            riders: dict[int, list[str]] = {}
            for r in fetchall(cur):
                riders.setdefault(int(r["carpool"]), []).append(r["member"])

        return [
            Carpool(
                carpool_id=int(c["id"]),
                event_id=int(c["event"]),
                driver=c["driver"],
                passengers=tuple(riders.get(int(c["id"]), [])),
            )
            for c in cars
        ]

    def replace_carpools(self, event_id: int, carpools: Sequence[UpdatedCarpool]) -> Sequence[Carpool]:
        saved: list[Carpool] = []
        with db_cursor(self._conn_factory) as (_, cur):
            # rides_in rows go with their carpool (ON DELETE CASCADE)
            cur.execute("DELETE FROM carpool WHERE event=%s", (int(event_id),))
            for car in carpools:
                cur.execute("INSERT INTO carpool(event, driver) VALUES(%s,%s)", (int(event_id), car.driver))
                carpool_id = int(cur.lastrowid)
                for passenger in car.passengers:
                    cur.execute("INSERT INTO rides_in(member, carpool) VALUES(%s,%s)", (passenger, carpool_id))
                saved.append(
                    Carpool(carpool_id=carpool_id, event_id=int(event_id), driver=car.driver, passengers=car.passengers)
                )
        return saved
