from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import json_body, login_required, success
from ..container import Container
from ..core.exceptions import ValidationError
from .model import EventUpdate, NewEvent, UpdatedCarpool


def register(app: Flask, container: Container) -> None:
    auth = login_required(container.auth_service.load_principal)

    @app.route("/events/<int:event_id>", methods=["GET"], endpoint="get_event")
    @auth
    def get_event(event_id: int):
        return jsonify(container.event_service.get_event(event_id).to_json())

    @app.route("/events", methods=["GET"], endpoint="get_events")
    @auth
    def get_events():
        events = container.event_service.list_events(semester=request.args.get("semester") or None)
        return jsonify([e.to_json() for e in events])

    @app.route("/events", methods=["POST"], endpoint="new_event")
    @auth
    def new_event():
        new_id = container.event_service.create_event(principal=g.principal, form=NewEvent.from_json(json_body()))
        return jsonify({"id": new_id})

    @app.route("/events/<int:event_id>", methods=["POST"], endpoint="update_event")
    @auth
    def update_event(event_id: int):
        container.event_service.update_event(
            principal=g.principal, event_id=event_id, update=EventUpdate.from_json(json_body())
        )
        return success()

    @app.route("/events/<int:event_id>", methods=["DELETE"], endpoint="delete_event")
    @auth
    def delete_event(event_id: int):
        container.event_service.delete_event(principal=g.principal, event_id=event_id)
        return success()

    @app.route("/events/<int:event_id>/setlist", methods=["GET"], endpoint="get_setlist")
    @auth
    def get_setlist(event_id: int):
        return jsonify([s.to_json() for s in container.event_service.get_setlist(event_id)])

    @app.route("/events/<int:event_id>/setlist", methods=["POST"], endpoint="edit_setlist")
    @auth
    def edit_setlist(event_id: int):
        data = request.get_json(silent=True)
        if not isinstance(data, list):
            data = json_body().get("songs", [])
        setlist = container.event_service.edit_setlist(
            principal=g.principal, event_id=event_id, song_ids=[int(s) for s in data]
        )
        return jsonify([s.to_json() for s in setlist])

    @app.route("/events/<int:event_id>/carpools", methods=["GET"], endpoint="get_carpools")
    @auth
    def get_carpools(event_id: int):
        return jsonify([c.to_json() for c in container.event_service.get_carpools(event_id)])

    @app.route("/events/<int:event_id>/carpools", methods=["POST"], endpoint="update_carpools")
    @auth
    def update_carpools(event_id: int):
        data = request.get_json(silent=True)
        if not isinstance(data, list):
            raise ValidationError("Expected a list of carpools")
        carpools = container.event_service.update_carpools(
            principal=g.principal, event_id=event_id, carpools=[UpdatedCarpool.from_json(c) for c in data]
        )
        return jsonify([c.to_json() for c in carpools])
