from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from gym_checkin.database.bootstrap import DEMO_PASSWORDS, apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    updated = ensure_demo_users(db_config)

    print(f"OK: Seeded demo gym into {db_config.get('database')} ({len(updated)} demo logins)")
    for email in updated:
        print(f"  {email} / {DEMO_PASSWORDS[email]}")


if __name__ == "__main__":
    main()
