from __future__ import annotations

from typing import Optional

from ...core.enums import Capability, CheckinSource
from ...gyms.model import FacilityCredential
from ...members.model import Member
from ...users.access import AccessProvider, Caller
from .base import CheckinPolicy


class StaffManualPolicy(CheckinPolicy):
    """Staff toggles a member from the desk; the staff login stands in for the QR code."""

    source = CheckinSource.STAFF_MANUAL
    requires_credential = False

    def authorize(self, *, caller: Caller, member: Member, access: AccessProvider) -> None:
        access.require(caller, Capability.MANUAL_CHECKIN, gym_id=member.gym_id)

    def verify_credential(self, *, presented: Optional[str], current: Optional[FacilityCredential]) -> None:
        return None
