"""Pure attendance calculations: totals, streaks, badges, leaderboard order.

Inputs are plain session lists so these functions can be tested without a store.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from ..checkins.model import AttendanceSession
from ..core.constants import EARLY_BIRD_HOUR
from ..members.model import Member
from .model import Badge, LeaderboardEntry, MemberStats

# (label, description, total check-ins needed)
COUNT_BADGES: tuple[tuple[str, str, int], ...] = (
    ("First Steps", "Your first check-in!", 1),
    ("Getting Started", "5 check-ins completed", 5),
    ("Regular", "20 check-ins completed", 20),
    ("Dedicated", "50 check-ins completed", 50),
    ("Champion", "100 check-ins completed", 100),
)

STREAK_MASTER_DAYS = 7
EARLY_BIRD_BADGE_COUNT = 10
TIME_MASTER_MINUTES = 600
MONTHLY_HERO_CHECKINS = 15


def _closed_seconds(sessions: Iterable[AttendanceSession]) -> tuple[float, int]:
    total = 0.0
    completed = 0
    for s in sessions:
        if s.check_out is None:
            continue
        total += max(0.0, (s.check_out - s.check_in).total_seconds())
        completed += 1
    return total, completed


def calculate_streaks(check_in_days: Iterable[date], *, today: date) -> tuple[int, int]:
    """Return (current, longest) runs of consecutive check-in days.

    The current streak only counts if the latest check-in day is today or yesterday.
    """

    days = sorted(set(check_in_days), reverse=True)
    if not days:
        return 0, 0

    current = 0
    if days[0] in (today, today - timedelta(days=1)):
        current = 1
        for prev, nxt in zip(days, days[1:]):
            if prev - nxt != timedelta(days=1):
                break
            current += 1

    longest = 1
    run = 1
    for prev, nxt in zip(days, days[1:]):
        if prev - nxt == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    return current, longest


def member_stats(sessions: Sequence[AttendanceSession], *, now: datetime) -> MemberStats:
    if not sessions:
        return MemberStats()

    total_seconds, completed = _closed_seconds(sessions)
    total_minutes = total_seconds / 60
    current, longest = calculate_streaks((s.check_in.date() for s in sessions), today=now.date())

    return MemberStats(
        total_checkins=len(sessions),
        total_minutes=round(total_minutes),
        current_streak=current,
        longest_streak=longest,
        early_bird_count=sum(1 for s in sessions if s.check_in.hour < EARLY_BIRD_HOUR),
        this_month_checkins=sum(
            1 for s in sessions if s.check_in.year == now.year and s.check_in.month == now.month
        ),
        average_session_minutes=round(total_minutes / completed) if completed else 0,
    )


def badges_for(stats: MemberStats) -> list[Badge]:
    badges = [
        Badge(label=label, description=desc, unlocked=stats.total_checkins >= needed)
        for label, desc, needed in COUNT_BADGES
    ]
    badges.extend(
        [
            Badge("Streak Master", f"{STREAK_MASTER_DAYS}+ day streak", stats.current_streak >= STREAK_MASTER_DAYS),
            Badge(
                "Early Bird",
                f"{EARLY_BIRD_BADGE_COUNT}+ early check-ins",
                stats.early_bird_count >= EARLY_BIRD_BADGE_COUNT,
            ),
            Badge("Time Master", "10+ hours total", stats.total_minutes >= TIME_MASTER_MINUTES),
            Badge(
                "Monthly Hero",
                f"{MONTHLY_HERO_CHECKINS}+ check-ins this month",
                stats.this_month_checkins >= MONTHLY_HERO_CHECKINS,
            ),
        ]
    )
    return badges


def rank_members(members: Sequence[Member], sessions: Sequence[AttendanceSession]) -> list[LeaderboardEntry]:
    """All members ordered by check-ins, then total minutes (both descending)."""

    by_member: dict[int, list[AttendanceSession]] = {m.member_id: [] for m in members}
    for s in sessions:
        if s.member_id in by_member:
            by_member[s.member_id].append(s)

    entries = []
    for m in members:
        own = by_member[m.member_id]
        seconds, _ = _closed_seconds(own)
        entries.append(
            LeaderboardEntry(
                member_id=m.member_id,
                name=m.name,
                checkins=len(own),
                total_minutes=round(seconds / 60),
            )
        )

    entries.sort(key=lambda e: (-e.checkins, -e.total_minutes, e.member_id))
    return entries
