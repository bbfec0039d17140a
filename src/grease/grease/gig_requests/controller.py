from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body, login_required, query_flag, success
from ..container import Container
from ..events.model import NewEvent
from .model import NewGigRequest


def register(app: Flask, container: Container) -> None:
    auth = login_required(container.auth_service.load_principal)
    service = container.gig_request_service

    @app.route("/gig_requests/<int:request_id>", methods=["GET"], endpoint="get_gig_request")
    @auth
    def get_gig_request(request_id: int):
        return jsonify(service.get(principal=g.principal, request_id=request_id).to_json())

    @app.route("/gig_requests", methods=["GET"], endpoint="get_gig_requests")
    @auth
    def get_gig_requests():
        requests = service.list(principal=g.principal, include_all=query_flag("all"))
        return jsonify([r.to_json() for r in requests])

    @app.route("/gig_requests", methods=["POST"], endpoint="new_gig_request")
    def new_gig_request():
        return jsonify({"id": service.submit(NewGigRequest.from_json(json_body()))})

    @app.route("/gig_requests/<int:request_id>/dismiss", methods=["POST"], endpoint="dismiss_gig_request")
    @auth
    def dismiss_gig_request(request_id: int):
        service.dismiss(principal=g.principal, request_id=request_id)
        return success()

    @app.route("/gig_requests/<int:request_id>/reopen", methods=["POST"], endpoint="reopen_gig_request")
    @auth
    def reopen_gig_request(request_id: int):
        service.reopen(principal=g.principal, request_id=request_id)
        return success()

    @app.route("/gig_requests/<int:request_id>/create_event", methods=["POST"], endpoint="create_event_from_gig_request")
    @auth
    def create_event_from_gig_request(request_id: int):
        new_id = service.create_event_from_gig_request(
            principal=g.principal, request_id=request_id, form=NewEvent.from_json(json_body())
        )
        return jsonify({"id": new_id})
