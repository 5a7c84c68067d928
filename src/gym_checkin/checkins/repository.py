from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import AttendanceSession


class AttendanceStore(Protocol):
    def find_open_sessions(self, member_id: int) -> Sequence[AttendanceSession]:
        """Open sessions of a member, newest check_in first."""

        raise NotImplementedError

    def insert_session(self, *, member_id: int, opened_at: datetime) -> AttendanceSession:
        """Insert an open session.

        Raises DuplicateOpenSessionError when the store already holds an open
        session for the member and enforces uniqueness itself.
        """

        raise NotImplementedError

    def close_session(self, *, session_id: int, member_id: int, closed_at: datetime) -> bool:
        raise NotImplementedError

    def list_for_member(self, member_id: int, limit: int) -> Sequence[AttendanceSession]:
        """Sessions of a member, newest check_in first."""

        raise NotImplementedError

    def list_for_gym(self, gym_id: int, *, since: datetime | None = None) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def list_open_for_gym(self, gym_id: int) -> Sequence[AttendanceSession]:
        raise NotImplementedError
