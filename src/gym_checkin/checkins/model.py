from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_iso
from ..core.enums import CheckinAction


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one check-in to check-out interval of a member."""

    session_id: int
    member_id: int
    check_in: datetime
    check_out: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "member_id": self.member_id,
            "check_in": format_iso(self.check_in),
            "check_out": format_iso(self.check_out),
        }


@dataclass(frozen=True)
class SessionOutcome:
    """Result of one reconcile call."""

    action: CheckinAction
    member_id: int
    session_id: int
    opened_at: datetime
    occurred_at: datetime
    duration_minutes: Optional[int] = None
    orphaned_session_ids: tuple[int, ...] = ()

    def to_dict(self) -> dict:
        payload = {
            "action": self.action.value,
            "member_id": self.member_id,
            "session_id": self.session_id,
            "opened_at": format_iso(self.opened_at),
            "occurred_at": format_iso(self.occurred_at),
        }
        if self.action == CheckinAction.CHECK_OUT:
            payload["duration_minutes"] = self.duration_minutes
        if self.orphaned_session_ids:
            payload["orphaned_session_ids"] = list(self.orphaned_session_ids)
        return payload


@dataclass(frozen=True)
class OrphanReport:
    """A member with more than one open session, for operator cleanup."""

    member_id: int
    kept_session_id: int
    orphaned_session_ids: tuple[int, ...]

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "kept_session_id": self.kept_session_id,
            "orphaned_session_ids": list(self.orphaned_session_ids),
        }


@dataclass(frozen=True)
class RosterEntry:
    """Staff desk view of one member and whether they are inside right now."""

    member_id: int
    name: str
    email: Optional[str]
    checked_in: bool
    session_id: Optional[int] = None
    checkin_time: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "name": self.name,
            "email": self.email,
            "checked_in": self.checked_in,
            "session_id": self.session_id,
            "checkin_time": format_iso(self.checkin_time),
        }
