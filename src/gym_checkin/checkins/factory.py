from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import CheckinSource
from ..core.exceptions import ValidationError
from .policies.base import CheckinPolicy
from .policies.qr_scan_policy import QrScanPolicy
from .policies.staff_manual_policy import StaffManualPolicy


@dataclass
class CheckinPolicyFactory:
    """Factory Pattern: choose the policy for a call site."""

    def for_source(self, source: CheckinSource | str) -> CheckinPolicy:
        try:
            source = CheckinSource(source)
        except ValueError:
            raise ValidationError(f"Unknown check-in source: {source}") from None

        if source == CheckinSource.QR_SCAN:
            return QrScanPolicy()
        if source == CheckinSource.STAFF_MANUAL:
            return StaffManualPolicy()
        raise ValidationError(f"Unknown check-in source: {source.value}")
