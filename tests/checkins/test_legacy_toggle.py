from __future__ import annotations

from datetime import datetime

import pytest

from gym_checkin.checkins.legacy import LegacyToggle
from gym_checkin.core.exceptions import ValidationError


def test_legacy_toggle_alternates_per_user():
    toggle = LegacyToggle()
    now = datetime(2026, 3, 1, 9, 0)

    first = toggle.toggle("u1", "tok", now=now)
    other = toggle.toggle("u2", "tok", now=now)
    second = toggle.toggle("u1", "tok", now=now)

    assert first.checked_in is True
    assert other.checked_in is True
    assert second.checked_in is False
    assert second.message == "Checked out!"


def test_legacy_toggle_is_labelled_non_durable():
    toggle = LegacyToggle()

    payload = toggle.toggle("u1", "tok", now=datetime(2026, 3, 1, 9, 0)).to_dict()

    assert toggle.durable is False
    assert payload["durable"] is False
    assert payload["checkedIn"] is True
    assert payload["message"] == "Checked in!"
    assert payload["time"] == "2026-03-01T09:00:00"


def test_legacy_toggle_forgets_on_reset():
    toggle = LegacyToggle()
    toggle.toggle("u1", "tok")
    toggle.reset()

    assert toggle.toggle("u1", "tok").checked_in is True


@pytest.mark.parametrize("user_id,token", [(None, "tok"), ("u1", None), ("", "tok"), ("u1", "")])
def test_legacy_toggle_requires_user_and_token(user_id, token):
    with pytest.raises(ValidationError):
        LegacyToggle().toggle(user_id, token)


def test_legacy_toggle_does_not_touch_the_store(world):
    world.container.legacy_toggle.toggle("11", "whatever")
    world.container.legacy_toggle.toggle("11", "whatever")

    assert world.store.reads == 0
    assert world.store.all_rows() == []
