from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body, login_required, success
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = login_required(container.auth_service.load_principal)

    @app.route("/todos", methods=["GET"], endpoint="get_todos")
    @auth
    def get_todos():
        return jsonify([t.to_json() for t in container.todo_service.list_for_member(principal=g.principal)])

    @app.route("/todos", methods=["POST"], endpoint="add_todo_for_members")
    @auth
    def add_todo_for_members():
        data = json_body()
        added = container.todo_service.add_for_members(
            principal=g.principal, text=data.get("text", ""), members=list(data.get("members") or [])
        )
        return success(added=added)

    @app.route("/todos/<int:todo_id>", methods=["POST"], endpoint="mark_todo_as_complete")
    @auth
    def mark_todo_as_complete(todo_id: int):
        container.todo_service.mark_complete(principal=g.principal, todo_id=todo_id)
        return success()
