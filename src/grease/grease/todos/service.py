from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.constants import ADD_MULTI_TODOS
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..members.model import Principal
from ..members.repository import MemberRepository
from ..permissions.engine import AuthorizationEngine
from .model import Todo
from .repository import TodoRepository

logger = logging.getLogger(__name__)


class TodoService:
    def __init__(self, todos: TodoRepository, members: MemberRepository, engine: AuthorizationEngine):
        self._todos = todos
        self._members = members
        self._engine = engine

    def list_for_member(self, *, principal: Principal) -> Sequence[Todo]:
        return self._todos.list_incomplete_for_member(principal.email)

    def add_for_members(self, *, principal: Principal, text: str, members: Sequence[str]) -> int:
        self._engine.require(principal, ADD_MULTI_TODOS)

        text = require_non_empty(text, "Todo text")
        unique = list(dict.fromkeys(members))
        if not unique:
            raise ValidationError("Pick at least one member to give the todo to")
        for email in unique:
            if not self._members.get_by_email(email):
                raise NotFoundError(f"No member with the email {email}.")

        added = self._todos.create_for_members(text=text, members=unique)
        logger.info("%s added a todo for %d members", principal.email, added)
        return added

    def mark_complete(self, *, principal: Principal, todo_id: int) -> None:
        todo = self._todos.get(int(todo_id))
        if not todo:
            raise NotFoundError(f"No todo with id {todo_id}.")
        if todo.member != principal.email:
            raise AuthorizationError(message="You can only complete your own todos")
        self._todos.mark_complete(todo.todo_id)
