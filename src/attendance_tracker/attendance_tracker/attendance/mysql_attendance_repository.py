from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        student_id=str(r["student_id"]),
        subject=r["subject"],
        attendance_date=r["date"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        sql = """
            SELECT id, student_id, subject, date
            FROM attendance
            WHERE student_id=%s
            ORDER BY date DESC, id DESC
        """
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (student_id,))
            return [_to_record(r) for r in fetchall(cur)]

    def count_for_subject(self, *, student_id: str, subject: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM attendance WHERE student_id=%s AND subject=%s",
                (student_id, subject),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def insert(self, *, student_id: str, subject: str, attendance_date: date) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendance(student_id, subject, date) VALUES(%s,%s,%s)",
                (student_id, subject, attendance_date),
            )
            return AttendanceRecord(
                attendance_id=int(cur.lastrowid),
                student_id=student_id,
                subject=subject,
                attendance_date=attendance_date,
            )

    def delete_for_student(self, *, student_id: str, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE id=%s AND student_id=%s",
                (int(attendance_id), student_id),
            )
            return cur.rowcount > 0

    def delete_all_for_student(self, student_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE student_id=%s", (student_id,))
            return int(cur.rowcount)
