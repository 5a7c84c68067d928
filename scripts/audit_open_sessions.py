"""List members holding more than one open session.

Usage: python scripts/audit_open_sessions.py <gym_id>

Exit code 1 when orphans are found. Nothing is modified.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from gym_checkin.checkins.audit import orphan_reports
from gym_checkin.container import build_container


def main(argv: list[str]) -> int:
    if len(argv) != 1 or not argv[0].isdigit():
        print(__doc__)
        return 2
    gym_id = int(argv[0])

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    reports = orphan_reports(container.attendance_store.list_open_for_gym(gym_id))
    for r in reports:
        print(f"member={r.member_id} kept={r.kept_session_id} orphaned={list(r.orphaned_session_ids)}")

    if reports:
        return 1
    print(f"OK: gym {gym_id} has at most one open session per member")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
