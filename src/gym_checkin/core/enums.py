from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles; each one maps to a capability set below."""

    OWNER = "owner"
    STAFF = "staff"
    MEMBER = "member"


class Capability(str, Enum):
    SELF_CHECKIN = "self_checkin"
    VIEW_OWN_STATS = "view_own_stats"
    MANUAL_CHECKIN = "manual_checkin"
    VIEW_MEMBERS = "view_members"
    VIEW_GYM_OVERVIEW = "view_gym_overview"
    AUDIT_SESSIONS = "audit_sessions"
    VIEW_QR = "view_qr"
    ROTATE_QR = "rotate_qr"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.MEMBER: frozenset({Capability.SELF_CHECKIN, Capability.VIEW_OWN_STATS}),
    Role.STAFF: frozenset(
        {
            Capability.MANUAL_CHECKIN,
            Capability.VIEW_MEMBERS,
            Capability.VIEW_QR,
        }
    ),
    Role.OWNER: frozenset(
        {
            Capability.MANUAL_CHECKIN,
            Capability.VIEW_MEMBERS,
            Capability.VIEW_GYM_OVERVIEW,
            Capability.AUDIT_SESSIONS,
            Capability.VIEW_QR,
            Capability.ROTATE_QR,
        }
    ),
}


def capabilities_for(role: Role) -> frozenset[Capability]:
    """Raises KeyError for a role with no capability entry."""
    return ROLE_CAPABILITIES[role]


class CheckinAction(str, Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class CheckinSource(str, Enum):
    """Who triggered a reconcile call."""

    QR_SCAN = "qr_scan"
    STAFF_MANUAL = "staff_manual"
