"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; business rules live in the services.
"""

import importlib

from config import get_settings_module

from gym_checkin.core.enums import Role
from gym_checkin.container import build_container
from gym_checkin.users.access import Caller


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    staff = Caller(user_id=2, email="staff@demo.gym", role=Role.STAFF, gym_id=1)
    for row in container.checkin_service.presence_roster(staff):
        print(row.to_dict())


if __name__ == "__main__":
    main()
