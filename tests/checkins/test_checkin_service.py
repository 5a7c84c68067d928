from __future__ import annotations

from datetime import timedelta

import pytest

from gym_checkin.core.exceptions import AuthorizationError, ValidationError
from tests.fakes import QR_A, World


def test_presence_roster_marks_who_is_inside(world, fixed_now):
    world.container.checkin_service.scan(world.alice, QR_A, now=fixed_now)

    roster = world.container.checkin_service.presence_roster(world.staff_a)

    by_id = {r.member_id: r for r in roster}
    assert set(by_id) == {World.ALICE, World.BOB}
    assert by_id[World.ALICE].checked_in is True
    assert by_id[World.ALICE].checkin_time == fixed_now
    assert by_id[World.BOB].checked_in is False
    assert by_id[World.BOB].session_id is None


def test_presence_roster_search_matches_name_or_email(world):
    svc = world.container.checkin_service

    assert [r.member_id for r in svc.presence_roster(world.staff_a, search="ALI")] == [World.ALICE]
    assert [r.member_id for r in svc.presence_roster(world.staff_a, search="bob@")] == [World.BOB]
    assert svc.presence_roster(world.staff_a, search="carol") == []


def test_presence_roster_is_staff_only(world):
    with pytest.raises(AuthorizationError):
        world.container.checkin_service.presence_roster(world.alice)


def test_member_reads_own_history_newest_first(world, fixed_now):
    world.store.add(World.ALICE, fixed_now - timedelta(days=2), fixed_now - timedelta(days=2, hours=-1))
    world.store.add(World.ALICE, fixed_now - timedelta(days=1), fixed_now - timedelta(days=1, hours=-1))
    world.store.add(World.BOB, fixed_now)

    rows = world.container.checkin_service.member_history(world.alice, World.ALICE)

    assert [r.check_in for r in rows] == [fixed_now - timedelta(days=1), fixed_now - timedelta(days=2)]


def test_member_cannot_read_someone_elses_history(world):
    with pytest.raises(AuthorizationError):
        world.container.checkin_service.member_history(world.alice, World.BOB)


def test_staff_history_is_limited_to_own_gym(world, fixed_now):
    for i in range(3):
        world.store.add(World.BOB, fixed_now - timedelta(days=i))

    assert len(world.container.checkin_service.member_history(world.staff_a, World.BOB, limit=2)) == 2
    with pytest.raises(AuthorizationError):
        world.container.checkin_service.member_history(world.staff_b, World.BOB)


def test_current_session_is_none_when_checked_out(world, fixed_now):
    world.store.add(World.ALICE, fixed_now - timedelta(hours=2), fixed_now - timedelta(hours=1))

    assert world.container.checkin_service.current_session(world.alice) is None


def test_find_orphans_reports_members_with_several_open_sessions(world, fixed_now):
    old = world.store.add(World.BOB, fixed_now - timedelta(days=3))
    new = world.store.add(World.BOB, fixed_now - timedelta(hours=1))
    world.store.add(World.ALICE, fixed_now)

    reports = world.container.checkin_service.find_orphans(world.owner_a)

    assert len(reports) == 1
    assert reports[0].member_id == World.BOB
    assert reports[0].kept_session_id == new.session_id
    assert reports[0].orphaned_session_ids == (old.session_id,)


def test_find_orphans_needs_audit_capability(world):
    with pytest.raises(AuthorizationError):
        world.container.checkin_service.find_orphans(world.staff_a)


@pytest.mark.parametrize("limit", [0, -1, "abc"])
def test_history_limit_must_be_positive(world, fixed_now, limit):
    for i in range(3):
        world.store.add(World.BOB, fixed_now - timedelta(days=i))

    with pytest.raises(ValidationError):
        world.container.checkin_service.member_history(world.staff_a, World.BOB, limit=limit)


def test_history_without_limit_uses_default(world, fixed_now):
    for i in range(3):
        world.store.add(World.BOB, fixed_now - timedelta(days=i))

    assert len(world.container.checkin_service.member_history(world.staff_a, World.BOB)) == 3
