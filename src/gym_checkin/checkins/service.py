from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import Capability, CheckinSource, Role
from ..common.validators import require_positive_id
from ..core.exceptions import AuthorizationError
from ..members.repository import MemberRepository
from ..users.access import AccessProvider, Caller
from .audit import orphan_reports
from .model import AttendanceSession, OrphanReport, RosterEntry, SessionOutcome
from .reconciler import SessionReconciler
from .repository import AttendanceStore


class CheckinService:
    """Use cases behind the check-in call sites and their read side."""

    def __init__(
        self,
        reconciler: SessionReconciler,
        store: AttendanceStore,
        members: MemberRepository,
        access: AccessProvider,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._reconciler = reconciler
        self._store = store
        self._members = members
        self._access = access
        self._history_limit = int(history_limit)

    def scan(self, caller: Caller, scanned_code: Optional[str], *, now: Optional[datetime] = None) -> SessionOutcome:
        """Member self-service: scanned the gym's QR code."""

        member = self._access.member_for_caller(caller)
        return self._reconciler.reconcile(
            caller=caller,
            member_id=member.member_id,
            gym_id=member.gym_id,
            presented_credential=scanned_code,
            source=CheckinSource.QR_SCAN,
            now=now,
        )

    def staff_toggle(self, caller: Caller, member_id: int, *, now: Optional[datetime] = None) -> SessionOutcome:
        """Staff desk: toggle a member of the staff's own gym."""

        gym_id = self._access.staff_gym(caller, Capability.MANUAL_CHECKIN)
        return self._reconciler.reconcile(
            caller=caller,
            member_id=member_id,
            gym_id=gym_id,
            source=CheckinSource.STAFF_MANUAL,
            now=now,
        )

    def current_session(self, caller: Caller) -> Optional[AttendanceSession]:
        member = self._access.member_for_caller(caller)
        return self._reconciler.current_open_session(member.member_id)

    def member_history(self, caller: Caller, member_id: int, *, limit: Optional[int] = None) -> list[AttendanceSession]:
        member_id = int(member_id)
        if caller.role == Role.MEMBER:
            own = self._access.member_for_caller(caller)
            if own.member_id != member_id:
                raise AuthorizationError("Access denied")
        else:
            gym_id = self._access.staff_gym(caller, Capability.VIEW_MEMBERS)
            member = self._members.get_by_id(member_id)
            if not member or member.gym_id != gym_id:
                raise AuthorizationError("Access denied")

        limit = self._history_limit if limit is None else require_positive_id(limit, "Limit")
        return list(self._store.list_for_member(member_id, limit))

    def presence_roster(self, caller: Caller, *, search: str = "") -> list[RosterEntry]:
        gym_id = self._access.staff_gym(caller, Capability.VIEW_MEMBERS)
        newest_open: dict[int, AttendanceSession] = {}
        for s in self._store.list_open_for_gym(gym_id):
            kept = newest_open.get(s.member_id)
            if kept is None or s.check_in > kept.check_in:
                newest_open[s.member_id] = s

        needle = (search or "").strip().lower()
        out: list[RosterEntry] = []
        for m in self._members.list_for_gym(gym_id):
            if needle and needle not in m.name.lower() and needle not in (m.email or "").lower():
                continue
            s = newest_open.get(m.member_id)
            out.append(
                RosterEntry(
                    member_id=m.member_id,
                    name=m.name,
                    email=m.email,
                    checked_in=s is not None,
                    session_id=s.session_id if s else None,
                    checkin_time=s.check_in if s else None,
                )
            )
        return out

    def find_orphans(self, caller: Caller) -> list[OrphanReport]:
        """Members holding more than one open session; the newest one is kept."""

        gym_id = self._access.staff_gym(caller, Capability.AUDIT_SESSIONS)
        return orphan_reports(self._store.list_open_for_gym(gym_id))
