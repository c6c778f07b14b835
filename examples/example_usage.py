"""Example: use the service layer directly, without Flask.

Prints the last week of daily summaries for one employee.
"""

import importlib
from datetime import date, timedelta

from face_attendance.config import get_settings_module
from face_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    today = date.today()
    for summary in container.attendance_service.daily_summaries("E001", start=today - timedelta(days=7), end=today):
        print(summary.to_dict())


if __name__ == "__main__":
    main()
