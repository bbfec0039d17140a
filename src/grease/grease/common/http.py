from __future__ import annotations

import logging
from functools import wraps
from typing import Callable

from flask import Flask, g, jsonify, request, session

from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, ValidationError
from ..members.model import Principal

logger = logging.getLogger(__name__)

SESSION_KEY = "email"


def login_required(load_principal: Callable[[str], Principal]):
    """Build a view decorator that resolves the logged-in principal into ``g.principal``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            email = session.get(SESSION_KEY)
            if not email:
                raise AuthenticationError("You must be logged in")
            g.principal = load_principal(email)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data


def query_flag(name: str) -> bool:
    return (request.args.get(name) or "").lower() in ("1", "true", "yes")


def success(**extra):
    return jsonify({"message": "success", **extra})


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        body = {"message": str(exc)}
        if isinstance(exc, AuthorizationError) and exc.permission:
            body["requiredPermission"] = exc.permission
        if exc.status_code >= 500:
            logger.error("request failed: %s", exc)
        return jsonify(body), exc.status_code
