from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Optional


@dataclass
class Student:
    id: int
    first_name: str
    last_name: str
    birthday: Optional[date] = None

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["birthday"] = self.birthday.isoformat() if self.birthday else None
        return out
