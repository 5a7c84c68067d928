from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .analytics.service import AnalyticsService
from .checkins.factory import CheckinPolicyFactory
from .checkins.legacy import LegacyToggle
from .checkins.locks import MemberLocks
from .checkins.mysql_session_repository import MySQLAttendanceStore
from .checkins.reconciler import SessionReconciler
from .checkins.repository import AttendanceStore
from .checkins.service import CheckinService
from .database.connection import DBConfig, DatabaseConnection
from .gyms.mysql_credential_repository import MySQLCredentialRepository
from .gyms.repository import CredentialRepository
from .gyms.service import CredentialService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .users.access import AccessProvider
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    members_repo: MemberRepository
    credentials_repo: CredentialRepository
    attendance_store: AttendanceStore

    access: AccessProvider
    auth_service: AuthService
    reconciler: SessionReconciler
    checkin_service: CheckinService
    credential_service: CredentialService
    analytics_service: AnalyticsService
    legacy_toggle: LegacyToggle


def assemble(
    *,
    users_repo: UserRepository,
    members_repo: MemberRepository,
    credentials_repo: CredentialRepository,
    attendance_store: AttendanceStore,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of the given repositories."""

    access = AccessProvider(users_repo, members_repo, credentials_repo)
    reconciler = SessionReconciler(
        attendance_store,
        members_repo,
        access,
        locks=MemberLocks(),
        policy_factory=CheckinPolicyFactory(),
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        members_repo=members_repo,
        credentials_repo=credentials_repo,
        attendance_store=attendance_store,
        access=access,
        auth_service=AuthService(users_repo),
        reconciler=reconciler,
        checkin_service=CheckinService(reconciler, attendance_store, members_repo, access),
        credential_service=CredentialService(credentials_repo, access),
        analytics_service=AnalyticsService(attendance_store, members_repo, access),
        legacy_toggle=LegacyToggle(),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        members_repo=MySQLMemberRepository(conn),
        credentials_repo=MySQLCredentialRepository(conn),
        attendance_store=MySQLAttendanceStore(conn),
    )
