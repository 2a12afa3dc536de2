"""Pure attendance arithmetic: counting, percentages and the per-group summary."""
from __future__ import annotations

import math
from typing import Iterable, Mapping, Optional

from ..catalog.subjects import SUBJECT_TOTALS, SUBJECT_CODE_MAP, normalize_code
from ..totals.resolver import effective_totals
from .model import AttendanceRecord, SubjectSummary


def subject_key(subject: str) -> str:
    return SUBJECT_CODE_MAP.get(normalize_code(subject), subject)


def aggregate(records: Iterable[AttendanceRecord]) -> dict[str, int]:
    """Count records per catalog subject name; unmapped codes keep their raw value."""

    stats: dict[str, int] = {}
    for r in records:
        key = subject_key(r.subject)
        stats[key] = stats.get(key, 0) + 1
    return stats


def percentage(attended: int, total: int) -> Optional[int]:
    """Whole-number share of lectures attended, capped at 100.

    Returns None when there is nothing to attend. Halves round up.
    """

    if total <= 0:
        return None
    capped = min(max(attended, 0), total)
    return int(math.floor(100 * capped / total + 0.5))


def build_summary(
    records: Iterable[AttendanceRecord],
    group: str,
    overrides: Optional[Mapping[str, object]] = None,
) -> list[SubjectSummary]:
    stats = aggregate(records)
    totals = effective_totals(group, overrides)

    rows: list[SubjectSummary] = []
    for subject, total in totals.items():
        raw = stats.get(subject, 0)
        rows.append(
            SubjectSummary(
                subject=subject,
                attended=min(raw, total) if total > 0 else raw,
                raw_attended=raw,
                total=total,
                percentage=percentage(raw, total),
            )
        )

    catalog = SUBJECT_TOTALS.get(group, {})
    for subject, raw in stats.items():
        if subject in catalog:
            continue
        rows.append(SubjectSummary(subject=subject, attended=raw, raw_attended=raw, total=0, percentage=None))
    return rows
