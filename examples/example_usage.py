"""Example: use the service layer directly (without Flask).

Prints the attendance summary of one student for a group.
"""

import importlib
import sys

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container


def main():
    student_id = sys.argv[1] if len(sys.argv) > 1 else "demo-student"
    group = sys.argv[2] if len(sys.argv) > 2 else "TY CE-1"

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    for row in container.attendance_service.summary(student_id=student_id, group=group):
        pct = "N/A" if row.percentage is None else f"{row.percentage}%"
        print(f"{row.subject:<40} {row.attended:>3}/{row.total:<3} {pct}")


if __name__ == "__main__":
    main()
