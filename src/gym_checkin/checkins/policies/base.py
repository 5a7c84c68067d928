from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import CheckinSource
from ...gyms.model import FacilityCredential
from ...members.model import Member
from ...users.access import AccessProvider, Caller


class CheckinPolicy(ABC):
    """Strategy Pattern: encapsulate how much a call site is trusted."""

    source: CheckinSource
    requires_credential: bool = True

    @abstractmethod
    def authorize(self, *, caller: Caller, member: Member, access: AccessProvider) -> None:
        raise NotImplementedError

    @abstractmethod
    def verify_credential(self, *, presented: Optional[str], current: Optional[FacilityCredential]) -> None:
        raise NotImplementedError
