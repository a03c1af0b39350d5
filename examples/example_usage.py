"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services and pure components.
"""

import importlib
from datetime import date

from config import get_settings_module

from time_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    today = date.today()
    report = container.report_service.build(year=today.year, month=today.month)
    for row in report.rows[:10]:
        print(row.work_date, row.full_name, row.shift_name, row.status.value)

    print(container.clock_service.state_for(1).to_json())


if __name__ == "__main__":
    main()
