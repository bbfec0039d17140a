from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body, login_required, success
from ..container import Container
from .model import AttendanceForm


def register(app: Flask, container: Container) -> None:
    auth = login_required(container.auth_service.load_principal)
    service = container.attendance_service

    @app.route("/events/<int:event_id>/attendance", methods=["GET"], endpoint="get_attendance")
    @auth
    def get_attendance(event_id: int):
        rows = service.get_attendance(principal=g.principal, event_id=event_id)
        return jsonify([r.to_json() for r in rows])

    @app.route("/events/<int:event_id>/see_whos_attending", methods=["GET"], endpoint="see_whos_attending")
    @auth
    def see_whos_attending(event_id: int):
        return jsonify(service.see_whos_attending(event_id))

    @app.route("/events/<int:event_id>/attendance/<member>", methods=["GET"], endpoint="get_member_attendance")
    @auth
    def get_member_attendance(event_id: int, member: str):
        row = service.get_member_attendance(principal=g.principal, event_id=event_id, member=member)
        return jsonify(row.to_json())

    @app.route("/events/<int:event_id>/attendance/<member>", methods=["POST"], endpoint="update_attendance")
    @auth
    def update_attendance(event_id: int, member: str):
        service.update(principal=g.principal, event_id=event_id, member=member, form=AttendanceForm.from_json(json_body()))
        return success()

    @app.route("/events/<int:event_id>/rsvp/<attending>", methods=["POST"], endpoint="rsvp")
    @auth
    def rsvp(event_id: int, attending: str):
        service.rsvp(principal=g.principal, event_id=event_id, attending=attending.lower() == "true")
        return success()

    @app.route("/events/<int:event_id>/confirm", methods=["POST"], endpoint="confirm")
    @auth
    def confirm(event_id: int):
        service.confirm(principal=g.principal, event_id=event_id)
        return success()

    @app.route(
        "/events/<int:event_id>/attendance/excuse_unconfirmed", methods=["POST"], endpoint="excuse_unconfirmed"
    )
    @auth
    def excuse_unconfirmed(event_id: int):
        count = service.excuse_unconfirmed(principal=g.principal, event_id=event_id)
        return success(excused=count)
