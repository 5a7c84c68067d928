from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Note: plain data object, no DB access code here.
    """

    user_id: int
    email: str
    full_name: str
    password_hash: str
    role: Role
    gym_id: Optional[int]
    is_active: bool = True
