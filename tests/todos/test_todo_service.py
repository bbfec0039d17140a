from __future__ import annotations

import pytest

from src.grease.grease.core.constants import ADD_MULTI_TODOS
from src.grease.grease.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_officer_adds_one_todo_per_member(org):
    president = org.members.principal("pres.ident@example.com")

    added = org.todo_service.add_for_members(
        principal=president,
        text="Turn in uniform",
        members=["lead.er@example.com", "omb.uds@example.com", "lead.er@example.com"],
    )

    assert added == 2
    leader = org.members.principal("lead.er@example.com")
    assert [t.text for t in org.todo_service.list_for_member(principal=leader)] == ["Turn in uniform"]


def test_unknown_member_aborts_the_whole_batch(org):
    president = org.members.principal("pres.ident@example.com")

    with pytest.raises(NotFoundError):
        org.todo_service.add_for_members(
            principal=president, text="Pay dues", members=["lead.er@example.com", "ghost@example.com"]
        )
    assert org.todos_repo.todos == {}


def test_adding_todos_needs_permission(org):
    leader = org.members.principal("lead.er@example.com")

    with pytest.raises(AuthorizationError) as exc:
        org.todo_service.add_for_members(principal=leader, text="x", members=["omb.uds@example.com"])
    assert exc.value.permission == ADD_MULTI_TODOS


def test_empty_text_or_members(org):
    president = org.members.principal("pres.ident@example.com")

    with pytest.raises(ValidationError):
        org.todo_service.add_for_members(principal=president, text=" ", members=["lead.er@example.com"])
    with pytest.raises(ValidationError):
        org.todo_service.add_for_members(principal=president, text="x", members=[])


def test_only_owner_completes_a_todo(org):
    president = org.members.principal("pres.ident@example.com")
    leader = org.members.principal("lead.er@example.com")
    org.todo_service.add_for_members(principal=president, text="Learn music", members=[leader.email])
    todo = org.todo_service.list_for_member(principal=leader)[0]

    with pytest.raises(AuthorizationError):
        org.todo_service.mark_complete(principal=president, todo_id=todo.todo_id)

    org.todo_service.mark_complete(principal=leader, todo_id=todo.todo_id)
    assert org.todo_service.list_for_member(principal=leader) == []
