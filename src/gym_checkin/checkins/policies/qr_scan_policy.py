from __future__ import annotations

import hmac
from typing import Optional

from ...core.enums import Capability, CheckinSource
from ...core.exceptions import AuthorizationError, InvalidCredentialError
from ...gyms.model import FacilityCredential
from ...members.model import Member
from ...users.access import AccessProvider, Caller
from .base import CheckinPolicy


class QrScanPolicy(CheckinPolicy):
    """Member scans the gym's code for themself."""

    source = CheckinSource.QR_SCAN
    requires_credential = True

    def authorize(self, *, caller: Caller, member: Member, access: AccessProvider) -> None:
        access.require(caller, Capability.SELF_CHECKIN)
        if member.user_id != caller.user_id:
            raise AuthorizationError("You can only check yourself in")

    def verify_credential(self, *, presented: Optional[str], current: Optional[FacilityCredential]) -> None:
        if current is None:
            raise InvalidCredentialError("No valid QR code found for your gym. Please contact gym staff.")
        if not presented or not hmac.compare_digest(
            presented.strip().encode("utf-8"),
            current.qr_value.encode("utf-8"),
        ):
            raise InvalidCredentialError("Invalid QR code. Please scan your gym's official QR code.")
