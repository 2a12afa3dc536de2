from __future__ import annotations

from dataclasses import dataclass

from .attendance.guard import CapacityGuard
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DatabaseConnection, DBConfig
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import ProfileService
from .realtime.feed import ChangeFeed
from .totals.mysql_totals_repository import MySQLTotalsRepository
from .totals.repository import TotalsRepository
from .totals.service import TotalsService


@dataclass(frozen=True)
class Container:
    feed: ChangeFeed

    attendance_repo: AttendanceRepository
    totals_repo: TotalsRepository
    profiles_repo: ProfileRepository

    totals_service: TotalsService
    attendance_service: AttendanceService
    profile_service: ProfileService


def build_services(
    *,
    attendance_repo: AttendanceRepository,
    totals_repo: TotalsRepository,
    profiles_repo: ProfileRepository,
    feed: ChangeFeed | None = None,
) -> Container:
    feed = feed or ChangeFeed()
    totals_service = TotalsService(totals_repo, feed=feed)
    attendance_service = AttendanceService(
        attendance_repo,
        totals_service,
        guard=CapacityGuard(attendance_repo, totals_service),
        feed=feed,
    )
    return Container(
        feed=feed,
        attendance_repo=attendance_repo,
        totals_repo=totals_repo,
        profiles_repo=profiles_repo,
        totals_service=totals_service,
        attendance_service=attendance_service,
        profile_service=ProfileService(profiles_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        attendance_repo=MySQLAttendanceRepository(conn),
        totals_repo=MySQLTotalsRepository(conn),
        profiles_repo=MySQLProfileRepository(conn),
    )
