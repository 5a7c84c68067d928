from __future__ import annotations

from itertools import groupby
from typing import Iterable

from .model import AttendanceSession, OrphanReport


def orphan_reports(open_sessions: Iterable[AttendanceSession]) -> list[OrphanReport]:
    """Group open sessions by member; keep the newest, report the rest."""

    by_member = sorted(open_sessions, key=lambda s: s.member_id)
    reports: list[OrphanReport] = []
    for member_id, group in groupby(by_member, key=lambda s: s.member_id):
        ordered = sorted(group, key=lambda s: (s.check_in, s.session_id), reverse=True)
        if len(ordered) > 1:
            reports.append(
                OrphanReport(
                    member_id=member_id,
                    kept_session_id=ordered[0].session_id,
                    orphaned_session_ids=tuple(s.session_id for s in ordered[1:]),
                )
            )
    return reports
