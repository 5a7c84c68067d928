from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_iso, now_local
from ..common.validators import require_non_empty
from ..core.enums import CheckinAction


@dataclass(frozen=True)
class LegacyToggleResult:
    user_id: str
    checked_in: bool
    time: datetime

    @property
    def message(self) -> str:
        return "Checked in!" if self.checked_in else "Checked out!"

    def to_dict(self) -> dict:
        # same keys as the old endpoint, plus "durable"
        return {
            "message": self.message,
            "checkedIn": self.checked_in,
            "time": format_iso(self.time),
            "durable": False,
        }


@dataclass(frozen=True)
class _LastAction:
    time: datetime
    action: CheckinAction
    qr_token: str


class LegacyToggle:
    """Non-durable / demo check-in toggle.

    State lives only in this process and is lost on restart. It never reads
    the attendance store, so its idea of "checked in" can disagree with the
    real sessions.
    """

    durable = False

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last: dict[str, _LastAction] = {}

    def toggle(self, user_id: Optional[str], qr_token: Optional[str], *, now: Optional[datetime] = None) -> LegacyToggleResult:
        user_id = require_non_empty(str(user_id or ""), "userId")
        qr_token = require_non_empty(str(qr_token or ""), "qrToken")
        now = now or now_local()

        with self._lock:
            last = self._last.get(user_id)
            if last is None or last.action == CheckinAction.CHECK_OUT:
                action = CheckinAction.CHECK_IN
            else:
                action = CheckinAction.CHECK_OUT
            self._last[user_id] = _LastAction(time=now, action=action, qr_token=qr_token)

        return LegacyToggleResult(user_id=user_id, checked_in=action == CheckinAction.CHECK_IN, time=now)

    def reset(self) -> None:
        with self._lock:
            self._last.clear()
