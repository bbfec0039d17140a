from __future__ import annotations

from dataclasses import dataclass

from .absence_requests.mysql_absence_request_repository import MySQLAbsenceRequestRepository
from .absence_requests.service import AbsenceRequestService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.service import EventService
from .gig_requests.mysql_gig_request_repository import MySQLGigRequestRepository
from .gig_requests.service import GigRequestService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.service import AuthService, MemberService
from .permissions.catalog import CatalogProvider
from .permissions.engine import AuthorizationEngine
from .permissions.mysql_permission_repository import MySQLPermissionRepository
from .permissions.service import PermissionService
from .semesters.mysql_semester_repository import MySQLSemesterRepository
from .todos.mysql_todo_repository import MySQLTodoRepository
from .todos.service import TodoService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    catalogs: CatalogProvider
    engine: AuthorizationEngine

    auth_service: AuthService
    member_service: MemberService
    permission_service: PermissionService
    event_service: EventService
    attendance_service: AttendanceService
    absence_request_service: AbsenceRequestService
    gig_request_service: GigRequestService
    todo_service: TodoService


def build_container(*, db_config: dict, cache_catalog: bool = True) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    permissions_repo = MySQLPermissionRepository(conn)
    members_repo = MySQLMemberRepository(conn)
    semesters_repo = MySQLSemesterRepository(conn)
    events_repo = MySQLEventRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    absence_requests_repo = MySQLAbsenceRequestRepository(conn)
    gig_requests_repo = MySQLGigRequestRepository(conn)
    todos_repo = MySQLTodoRepository(conn)

    catalogs = CatalogProvider(permissions_repo, cache=cache_catalog)
    engine = AuthorizationEngine(catalogs)

    event_service = EventService(events_repo, semesters_repo, engine, catalogs)

    return Container(
        conn=conn,
        catalogs=catalogs,
        engine=engine,
        auth_service=AuthService(members_repo, semesters_repo),
        member_service=MemberService(members_repo),
        permission_service=PermissionService(permissions_repo, catalogs, engine),
        event_service=event_service,
        attendance_service=AttendanceService(
            attendance_repo,
            events_repo,
            members_repo,
            absence_requests_repo,
            engine,
        ),
        absence_request_service=AbsenceRequestService(absence_requests_repo, events_repo, semesters_repo, engine),
        gig_request_service=GigRequestService(gig_requests_repo, event_service, semesters_repo, engine),
        todo_service=TodoService(todos_repo, members_repo, engine),
    )
