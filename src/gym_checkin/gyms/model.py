from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FacilityCredential:
    """The QR value a gym prints at the door. Rotating it invalidates the old one."""

    gym_id: int
    qr_value: str
    created_at: datetime
