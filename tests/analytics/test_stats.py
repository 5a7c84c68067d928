from __future__ import annotations

from datetime import date, datetime, timedelta

from gym_checkin.analytics.model import MemberStats
from gym_checkin.analytics.stats import badges_for, calculate_streaks, member_stats, rank_members
from gym_checkin.checkins.model import AttendanceSession
from gym_checkin.members.model import Member


def _session(sid: int, member_id: int, start: datetime, minutes: int | None = None) -> AttendanceSession:
    end = start + timedelta(minutes=minutes) if minutes is not None else None
    return AttendanceSession(session_id=sid, member_id=member_id, check_in=start, check_out=end)


def test_streak_counts_consecutive_days_ending_today():
    today = date(2026, 2, 10)
    days = [today, today - timedelta(days=1), today - timedelta(days=2), today - timedelta(days=5)]

    assert calculate_streaks(days, today=today) == (3, 3)


def test_streak_from_yesterday_still_counts():
    today = date(2026, 2, 10)
    days = [today - timedelta(days=1), today - timedelta(days=2)]

    assert calculate_streaks(days, today=today) == (2, 2)


def test_streak_broken_when_last_visit_is_old():
    today = date(2026, 2, 10)
    days = [today - timedelta(days=d) for d in (3, 4, 5, 6, 9)]

    assert calculate_streaks(days, today=today) == (0, 4)


def test_streak_ignores_multiple_visits_on_same_day():
    today = date(2026, 2, 10)

    assert calculate_streaks([today, today, today], today=today) == (1, 1)
    assert calculate_streaks([], today=today) == (0, 0)


def test_member_stats_totals():
    now = datetime(2026, 2, 10, 20, 0)
    sessions = [
        _session(1, 5, datetime(2026, 2, 10, 18, 0)),  # still open
        _session(2, 5, datetime(2026, 2, 9, 7, 0), 90),
        _session(3, 5, datetime(2026, 1, 20, 12, 0), 30),
    ]

    s = member_stats(sessions, now=now)

    assert s.total_checkins == 3
    assert s.total_minutes == 120
    assert s.early_bird_count == 1
    assert s.this_month_checkins == 2
    assert s.average_session_minutes == 60
    assert s.current_streak == 2
    assert s.longest_streak == 2


def test_member_stats_empty():
    assert member_stats([], now=datetime(2026, 2, 10)) == MemberStats()


def test_badges_follow_thresholds():
    unlocked = {b.label for b in badges_for(MemberStats(total_checkins=5, total_minutes=600)) if b.unlocked}

    assert unlocked == {"First Steps", "Getting Started", "Time Master"}


def test_streak_and_monthly_badges():
    stats = MemberStats(total_checkins=15, current_streak=7, early_bird_count=10, this_month_checkins=15)
    unlocked = {b.label for b in badges_for(stats) if b.unlocked}

    assert {"Streak Master", "Early Bird", "Monthly Hero", "Getting Started"} <= unlocked
    assert "Regular" not in unlocked


def test_rank_members_orders_by_checkins_then_minutes():
    members = [
        Member(member_id=1, gym_id=1, name="A"),
        Member(member_id=2, gym_id=1, name="B"),
        Member(member_id=3, gym_id=1, name="C"),
    ]
    start = datetime(2026, 2, 1, 10, 0)
    sessions = [
        _session(1, 1, start, 30),
        _session(2, 2, start, 90),
        _session(3, 3, start, 10),
        _session(4, 3, start + timedelta(days=1), 10),
        _session(5, 99, start, 500),  # other gym
    ]

    ranked = rank_members(members, sessions)

    assert [e.member_id for e in ranked] == [3, 2, 1]
    assert ranked[0].checkins == 2
    assert ranked[1].total_minutes == 90
