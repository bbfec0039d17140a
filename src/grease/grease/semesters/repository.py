from __future__ import annotations

from typing import Optional, Protocol

from .model import Semester


class SemesterRepository(Protocol):
    def get_current(self) -> Optional[Semester]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Semester]:
        raise NotImplementedError
