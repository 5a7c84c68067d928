from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import Capability, Role, capabilities_for
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..gyms.model import FacilityCredential
from ..gyms.repository import CredentialRepository
from ..members.model import Member
from ..members.repository import MemberRepository
from .repository import UserRepository


@dataclass(frozen=True)
class Caller:
    """Who is making the current request.

    Resolved once per request and passed explicitly into every service call.
    """

    user_id: int
    email: str
    role: Role
    gym_id: Optional[int]
    full_name: str = ""

    def can(self, capability: Capability) -> bool:
        return capability in capabilities_for(self.role)


class AccessProvider:
    """Identity lookups the check-in core depends on."""

    def __init__(self, users: UserRepository, members: MemberRepository, credentials: CredentialRepository):
        self._users = users
        self._members = members
        self._credentials = credentials

    def current_caller(self, session_data: Mapping[str, Any]) -> Caller:
        raw_id = session_data.get("user_id")
        if not raw_id:
            raise AuthenticationError("Please log in to continue")

        user = self._users.get_by_id(int(raw_id))
        if not user or not user.is_active:
            raise AuthenticationError("Please log in to continue")

        return Caller(
            user_id=user.user_id,
            email=user.email,
            role=user.role,
            gym_id=user.gym_id,
            full_name=user.full_name,
        )

    def member_for_caller(self, caller: Caller) -> Member:
        if caller.role != Role.MEMBER:
            raise AuthorizationError("Only members have a member profile")
        member = self._members.get_by_user_id(caller.user_id)
        if not member:
            raise AuthorizationError("Member profile not found. Please contact support.")
        return member

    def require(self, caller: Caller, capability: Capability, *, gym_id: Optional[int] = None) -> None:
        if not caller.can(capability):
            raise AuthorizationError("Access denied")
        if gym_id is not None and caller.gym_id != gym_id:
            raise AuthorizationError("Access denied")

    def staff_gym(self, caller: Caller, capability: Capability) -> int:
        """Gym of an owner/staff caller that holds `capability`."""

        self.require(caller, capability)
        if caller.gym_id is None:
            raise AuthorizationError("Your account is not assigned to a gym")
        return int(caller.gym_id)

    def facility_credential(self, gym_id: int) -> Optional[FacilityCredential]:
        return self._credentials.get_current(gym_id)
