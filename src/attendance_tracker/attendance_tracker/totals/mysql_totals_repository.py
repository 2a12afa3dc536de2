from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import SubjectTotalOverride
from .repository import TotalsRepository


class MySQLTotalsRepository(TotalsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, student_id: str) -> Sequence[SubjectTotalOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, subject, group_name, total
                FROM student_subject_totals
                WHERE student_id=%s
                """,
                (student_id,),
            )
            return [
                SubjectTotalOverride(
                    student_id=str(r["student_id"]),
                    subject=r["subject"],
                    group_name=r["group_name"],
                    total=int(r["total"]),
                )
                for r in fetchall(cur)
            ]

    def upsert(self, *, student_id: str, subject: str, group_name: str, total: int) -> SubjectTotalOverride:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO student_subject_totals(student_id, subject, group_name, total)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE group_name=VALUES(group_name), total=VALUES(total)
                """,
                (student_id, subject, group_name, int(total)),
            )
        return SubjectTotalOverride(student_id=student_id, subject=subject, group_name=group_name, total=int(total))
