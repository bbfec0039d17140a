from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Todo


class TodoRepository(Protocol):
    def get(self, todo_id: int) -> Optional[Todo]:
        raise NotImplementedError

    def list_incomplete_for_member(self, member: str) -> Sequence[Todo]:
        raise NotImplementedError

    def create_for_members(self, *, text: str, members: Sequence[str]) -> int:
        """Insert one todo per member in a single transaction; returns how many were added."""

        raise NotImplementedError

    def mark_complete(self, todo_id: int) -> bool:
        raise NotImplementedError
