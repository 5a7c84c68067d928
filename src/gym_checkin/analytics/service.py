from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..checkins.repository import AttendanceStore
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LEADERBOARD_SIZE, STATS_SESSION_LIMIT
from ..core.enums import Capability, Role
from ..members.repository import MemberRepository
from ..users.access import AccessProvider, Caller
from . import stats
from .model import Badge, GymOverview, Leaderboard, MemberStats


class AnalyticsService:
    def __init__(
        self,
        store: AttendanceStore,
        members: MemberRepository,
        access: AccessProvider,
        *,
        leaderboard_size: int = DEFAULT_LEADERBOARD_SIZE,
    ):
        self._store = store
        self._members = members
        self._access = access
        self._leaderboard_size = int(leaderboard_size)

    def member_stats(self, caller: Caller, *, now: Optional[datetime] = None) -> tuple[MemberStats, list[Badge]]:
        self._access.require(caller, Capability.VIEW_OWN_STATS)
        member = self._access.member_for_caller(caller)
        sessions = self._store.list_for_member(member.member_id, STATS_SESSION_LIMIT)
        result = stats.member_stats(list(sessions), now=now or now_local())
        return result, stats.badges_for(result)

    def leaderboard(self, caller: Caller) -> Leaderboard:
        if caller.role == Role.MEMBER:
            member = self._access.member_for_caller(caller)
            gym_id, my_member_id = member.gym_id, member.member_id
        else:
            gym_id, my_member_id = self._access.staff_gym(caller, Capability.VIEW_MEMBERS), None

        ranked = stats.rank_members(list(self._members.list_for_gym(gym_id)), list(self._store.list_for_gym(gym_id)))
        my_rank = next((i + 1 for i, e in enumerate(ranked) if e.member_id == my_member_id), None)
        return Leaderboard(entries=ranked[: self._leaderboard_size], my_rank=my_rank)

    def gym_overview(self, caller: Caller, *, now: Optional[datetime] = None) -> GymOverview:
        gym_id = self._access.staff_gym(caller, Capability.VIEW_GYM_OVERVIEW)
        now = now or now_local()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)

        return GymOverview(
            member_count=len(self._members.list_for_gym(gym_id)),
            checkins_today=len(self._store.list_for_gym(gym_id, since=start_of_day)),
            currently_inside=len({s.member_id for s in self._store.list_open_for_gym(gym_id)}),
        )
