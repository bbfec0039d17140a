from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Semester:
    name: str
    start_date: datetime
    end_date: datetime
    current: bool = False
