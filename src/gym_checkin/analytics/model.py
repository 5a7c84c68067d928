from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class MemberStats:
    total_checkins: int = 0
    total_minutes: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    early_bird_count: int = 0
    this_month_checkins: int = 0
    average_session_minutes: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Badge:
    label: str
    description: str
    unlocked: bool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LeaderboardEntry:
    member_id: int
    name: str
    checkins: int
    total_minutes: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Leaderboard:
    entries: list[LeaderboardEntry]
    my_rank: Optional[int] = None

    def to_dict(self) -> dict:
        return {"entries": [e.to_dict() for e in self.entries], "my_rank": self.my_rank}


@dataclass(frozen=True)
class GymOverview:
    member_count: int
    checkins_today: int
    currently_inside: int

    def to_dict(self) -> dict:
        return asdict(self)
