from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rpos.domain.common.ids import UserId


@dataclass(frozen=True)
class User:
    user_id: UserId
    username: str
    email: str
    phone: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        for field_name in ("username", "email", "phone"):
            if not getattr(self, field_name).strip():
                raise ValueError(f"{field_name} must be non-empty")
