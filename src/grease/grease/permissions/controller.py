from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body, login_required, success
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = login_required(container.auth_service.load_principal)

    @app.route("/static", methods=["GET"], endpoint="static_data")
    def static_data():
        return jsonify(container.permission_service.static_data())

    @app.route("/permissions", methods=["GET"], endpoint="get_permissions")
    def get_permissions():
        return jsonify(container.permission_service.static_data()["permissions"])

    @app.route("/event_types", methods=["GET"], endpoint="get_event_types")
    def get_event_types():
        return jsonify(container.permission_service.static_data()["eventTypes"])

    @app.route("/sections", methods=["GET"], endpoint="get_sections")
    @auth
    def get_sections():
        return jsonify(container.permission_service.list_sections())

    @app.route("/roles", methods=["GET"], endpoint="get_roles")
    def get_roles():
        return jsonify(container.permission_service.static_data()["roles"])

    @app.route("/role_permissions", methods=["GET"], endpoint="role_permissions")
    @auth
    def role_permissions():
        return jsonify(container.permission_service.list_role_grants())

    @app.route("/permissions/<member>", methods=["GET"], endpoint="member_permissions")
    @auth
    def member_permissions(member: str):
        target = container.auth_service.load_principal(member)
        return jsonify(container.permission_service.permissions_for(target))

    def _grant_args() -> dict:
        data = json_body()
        return {"permission": data.get("name", ""), "event_type": data.get("eventType") or None}

    @app.route("/permissions/<role>/enable", methods=["POST"], endpoint="enable_permission")
    @auth
    def enable_permission(role: str):
        container.permission_service.enable_grant(principal=g.principal, role=role, **_grant_args())
        return success()

    @app.route("/permissions/<role>/disable", methods=["POST"], endpoint="disable_permission")
    @auth
    def disable_permission(role: str):
        container.permission_service.disable_grant(principal=g.principal, role=role, **_grant_args())
        return success()
