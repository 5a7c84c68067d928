from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import FacilityCredential


class CredentialRepository(Protocol):
    def get_current(self, gym_id: int) -> Optional[FacilityCredential]:
        raise NotImplementedError

    def replace(self, *, gym_id: int, qr_value: str, created_at: datetime) -> FacilityCredential:
        """Store qr_value as the gym's only credential."""

        raise NotImplementedError
