from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Todo:
    todo_id: int
    text: str
    member: str
    completed: bool = False

    def to_json(self) -> dict:
        return {"id": self.todo_id, "text": self.text, "member": self.member, "completed": self.completed}
