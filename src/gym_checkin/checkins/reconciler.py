from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, whole_minutes_between
from ..common.validators import require_non_empty, require_positive_id
from ..core.enums import CheckinAction, CheckinSource
from ..core.exceptions import AuthorizationError, DuplicateOpenSessionError, InconsistentStateError
from ..members.repository import MemberRepository
from ..users.access import AccessProvider, Caller
from .factory import CheckinPolicyFactory
from .locks import MemberLocks
from .model import AttendanceSession, SessionOutcome
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


class SessionReconciler:
    """Decide check-in or check-out for one member from stored state, and persist it.

    The caller never says which action to take. The reconciler reads the
    member's open sessions and either opens a new one or closes the newest,
    then re-reads to make sure a check-out actually landed.
    """

    durable = True

    def __init__(
        self,
        store: AttendanceStore,
        members: MemberRepository,
        access: AccessProvider,
        *,
        locks: Optional[MemberLocks] = None,
        policy_factory: Optional[CheckinPolicyFactory] = None,
    ):
        self._store = store
        self._members = members
        self._access = access
        self._locks = locks or MemberLocks()
        self._factory = policy_factory or CheckinPolicyFactory()

    def reconcile(
        self,
        *,
        caller: Caller,
        member_id: int,
        gym_id: int,
        presented_credential: Optional[str] = None,
        source: CheckinSource = CheckinSource.QR_SCAN,
        now: Optional[datetime] = None,
    ) -> SessionOutcome:
        member_id = require_positive_id(member_id, "Member id")
        gym_id = require_positive_id(gym_id, "Gym id")
        policy = self._factory.for_source(source)
        if policy.requires_credential:
            presented_credential = require_non_empty(str(presented_credential or ""), "QR code")

        member = self._members.get_by_id(member_id)
        if not member or member.gym_id != gym_id:
            raise AuthorizationError("Member does not belong to this gym")
        policy.authorize(caller=caller, member=member, access=self._access)

        if policy.requires_credential:
            policy.verify_credential(
                presented=presented_credential,
                current=self._access.facility_credential(gym_id),
            )

        with self._locks.hold(member_id):
            # stored timestamps have whole-second precision
            now = (now or now_local()).replace(microsecond=0)
            open_sessions = self._store.find_open_sessions(member_id)
            if not open_sessions:
                return self._check_in(member_id=member_id, now=now, source=policy.source)

            current, orphans = self._split_newest(member_id, open_sessions)
            return self._check_out(member_id=member_id, current=current, orphans=orphans, now=now, source=policy.source)

    def current_open_session(self, member_id: int) -> Optional[AttendanceSession]:
        open_sessions = self._store.find_open_sessions(member_id)
        if not open_sessions:
            return None
        current, _ = self._split_newest(member_id, open_sessions)
        return current

    def _split_newest(
        self, member_id: int, open_sessions: Sequence[AttendanceSession]
    ) -> tuple[AttendanceSession, tuple[AttendanceSession, ...]]:
        ordered = sorted(open_sessions, key=lambda s: (s.check_in, s.session_id), reverse=True)
        current, orphans = ordered[0], tuple(ordered[1:])
        if orphans:
            logger.warning(
                "member %s has %d open sessions; using %s, orphaned %s",
                member_id,
                len(ordered),
                current.session_id,
                [s.session_id for s in orphans],
            )
        return current, orphans

    def _check_in(self, *, member_id: int, now: datetime, source: CheckinSource) -> SessionOutcome:
        try:
            session = self._store.insert_session(member_id=member_id, opened_at=now)
        except DuplicateOpenSessionError as e:
            logger.error("check-in for member %s lost a race with another check-in", member_id)
            raise InconsistentStateError(
                "Another check-in was recorded at the same time. Refresh and try again.",
                member_id=member_id,
            ) from e

        logger.info("member %s checked in (session %s, via %s)", member_id, session.session_id, source.value)
        return SessionOutcome(
            action=CheckinAction.CHECK_IN,
            member_id=member_id,
            session_id=session.session_id,
            opened_at=session.check_in,
            occurred_at=now,
        )

    def _check_out(
        self,
        *,
        member_id: int,
        current: AttendanceSession,
        orphans: tuple[AttendanceSession, ...],
        now: datetime,
        source: CheckinSource,
    ) -> SessionOutcome:
        if not self._store.close_session(session_id=current.session_id, member_id=member_id, closed_at=now):
            logger.warning("closing session %s for member %s matched no open row", current.session_id, member_id)

        orphan_ids = {s.session_id for s in orphans}
        still_open = [s for s in self._store.find_open_sessions(member_id) if s.session_id not in orphan_ids]
        if still_open:
            logger.error(
                "check-out of session %s for member %s did not take effect; open: %s",
                current.session_id,
                member_id,
                [s.session_id for s in still_open],
            )
            raise InconsistentStateError(
                "Check-out did not take effect. Please contact support.",
                member_id=member_id,
                open_session=still_open[0],
            )

        duration = whole_minutes_between(current.check_in, now)
        logger.info(
            "member %s checked out (session %s, %d min, via %s)",
            member_id,
            current.session_id,
            duration,
            source.value,
        )
        return SessionOutcome(
            action=CheckinAction.CHECK_OUT,
            member_id=member_id,
            session_id=current.session_id,
            opened_at=current.check_in,
            occurred_at=now,
            duration_minutes=duration,
            orphaned_session_ids=tuple(s.session_id for s in orphans),
        )
