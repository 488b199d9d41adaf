"""Example: using the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
import sys

from config import get_settings_module

from barber_school.container import build_container
from barber_school.database.bootstrap import apply_schema


def main(course_id: int = 1):
    settings = importlib.import_module(get_settings_module())
    apply_schema(settings.DB_CONFIG)
    container = build_container(db_config=settings.DB_CONFIG)

    for view in container.course_service.list_views():
        print(view.to_dict())

    grid = container.attendance_service.build_grid(course_id)
    print(f"{grid.course_name}: {len(grid.rows)} students x {len(grid.class_dates)} dates")


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 1)
