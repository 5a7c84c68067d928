from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Member:
    """Domain entity: a gym member. Owned by member management, read-only here."""

    member_id: int
    gym_id: int
    name: str
    user_id: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None
