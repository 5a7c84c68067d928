from __future__ import annotations

from datetime import timedelta

import pytest

from gym_checkin.core.exceptions import AuthorizationError
from tests.fakes import World


def test_member_stats_for_logged_in_member(world, fixed_now):
    world.store.add(World.ALICE, fixed_now - timedelta(hours=3), fixed_now - timedelta(hours=2))

    stats, badges = world.container.analytics_service.member_stats(world.alice, now=fixed_now)

    assert stats.total_checkins == 1
    assert stats.total_minutes == 60
    assert any(b.label == "First Steps" and b.unlocked for b in badges)


def test_member_stats_not_for_staff(world):
    with pytest.raises(AuthorizationError):
        world.container.analytics_service.member_stats(world.staff_a)


def test_leaderboard_gives_rank_of_caller(world, fixed_now):
    world.store.add(World.BOB, fixed_now - timedelta(days=1), fixed_now - timedelta(days=1, minutes=-30))
    world.store.add(World.BOB, fixed_now - timedelta(days=2), fixed_now - timedelta(days=2, minutes=-30))
    world.store.add(World.ALICE, fixed_now - timedelta(days=1), fixed_now - timedelta(days=1, minutes=-30))
    world.store.add(World.CAROL, fixed_now - timedelta(days=1))

    board = world.container.analytics_service.leaderboard(world.alice)

    assert [e.member_id for e in board.entries] == [World.BOB, World.ALICE]
    assert board.my_rank == 2
    assert world.container.analytics_service.leaderboard(world.staff_a).my_rank is None


def test_gym_overview_counts_today_and_inside(world, fixed_now):
    world.store.add(World.ALICE, fixed_now - timedelta(hours=1))
    world.store.add(World.BOB, fixed_now - timedelta(hours=3), fixed_now - timedelta(hours=2))
    world.store.add(World.BOB, fixed_now - timedelta(days=1), fixed_now - timedelta(days=1, minutes=-5))
    world.store.add(World.CAROL, fixed_now - timedelta(hours=1))

    overview = world.container.analytics_service.gym_overview(world.owner_a, now=fixed_now)

    assert overview.member_count == 2
    assert overview.checkins_today == 2
    assert overview.currently_inside == 1


def test_gym_overview_is_owner_only(world):
    with pytest.raises(AuthorizationError):
        world.container.analytics_service.gym_overview(world.staff_a)
