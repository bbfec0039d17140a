from __future__ import annotations

from flask import Flask, g, jsonify, session

from ..common.http import SESSION_KEY, json_body, login_required, success
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = login_required(container.auth_service.load_principal)

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        principal = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = True
        session[SESSION_KEY] = principal.email
        return success(email=principal.email)

    @app.route("/logout", methods=["GET"], endpoint="logout")
    def logout():
        session.clear()
        return success()

    @app.route("/user", methods=["GET"], endpoint="current_user")
    @auth
    def current_user():
        principal = g.principal
        active = principal.active_semester
        return jsonify(
            {
                **principal.member.to_json(),
                "roles": list(principal.roles),
                "semester": active.semester if active else None,
                "section": active.section if active else None,
                "enrollment": active.enrollment.value if active else None,
            }
        )

    @app.route("/members/<email>", methods=["GET"], endpoint="get_member")
    @auth
    def get_member(email: str):
        return jsonify(container.member_service.get_member(email).to_json())
