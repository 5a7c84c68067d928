from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Member]:
        raise NotImplementedError

    def list_for_gym(self, gym_id: int) -> Sequence[Member]:
        raise NotImplementedError
