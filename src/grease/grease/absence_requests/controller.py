from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body, login_required, success
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = login_required(container.auth_service.load_principal)
    service = container.absence_request_service

    @app.route("/absence_requests", methods=["GET"], endpoint="get_absence_requests")
    @auth
    def get_absence_requests():
        return jsonify([r.to_json() for r in service.list_for_current_semester(principal=g.principal)])

    @app.route("/absence_requests/<int:event_id>", methods=["GET"], endpoint="get_absence_request")
    @auth
    def get_absence_request(event_id: int):
        return jsonify(service.get_for_member(principal=g.principal, event_id=event_id).to_json())

    @app.route("/absence_requests/<int:event_id>/is_excused", methods=["GET"], endpoint="member_is_excused")
    @auth
    def member_is_excused(event_id: int):
        return jsonify({"excused": service.is_excused(member=g.principal.email, event_id=event_id)})

    @app.route("/absence_requests/<int:event_id>", methods=["POST"], endpoint="submit_absence_request")
    @auth
    def submit_absence_request(event_id: int):
        service.submit(principal=g.principal, event_id=event_id, reason=json_body().get("reason", ""))
        return success()

    @app.route(
        "/absence_requests/<int:event_id>/<member>/approve", methods=["POST"], endpoint="approve_absence_request"
    )
    @auth
    def approve_absence_request(event_id: int, member: str):
        service.approve(principal=g.principal, event_id=event_id, member=member)
        return success()

    @app.route("/absence_requests/<int:event_id>/<member>/deny", methods=["POST"], endpoint="deny_absence_request")
    @auth
    def deny_absence_request(event_id: int, member: str):
        service.deny(principal=g.principal, event_id=event_id, member=member)
        return success()
