"""Static subject catalog: groups, subject codes and default lecture totals.

Attendance rows are written with short subject codes ("CN") while totals are
keyed by the full catalog name ("Computer Network (CN)"). ``SUBJECT_CODE_MAP``
bridges the two and is deliberately partial.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DashboardSubject:
    code: str
    display_name: str


GROUPS: tuple[str, ...] = ("TY CE-1", "TY CE-2", "TY CE-3")

SUBJECT_TOTALS: dict[str, dict[str, int]] = {
    "TY CE-1": {
        "Analysis & Design of Algorithm (ADA)": 22,
        "Computer Network (CN)": 21,
        "Software Engineering (SE)": 16,
        "Elective (PDS/CS)": 11,
        "Professional Ethics (PEM)": 16,
        "Contributor Personality Dev Pr (CPDP)": 16,
        "Design Engineering (DE)": 0,
    },
    "TY CE-2": {
        "Analysis & Design of Algorithm (ADA)": 22,
        "Computer Network (CN)": 22,
        "Software Engineering (SE)": 15,
        "Elective (PDS/CS)": 11,
        "Professional Ethics (PEM)": 16,
        "Contributor Personality Dev Pr (CPDP)": 10,
        "Design Engineering (DE)": 0,
    },
    "TY CE-3": {
        "Analysis & Design of Algorithm (ADA)": 21,
        "Computer Network (CN)": 22,
        "Software Engineering (SE)": 16,
        "Elective (PDS/CS)": 11,
        "Professional Ethics (PEM)": 12,
        "Contributor Personality Dev Pr (CPDP)": 10,
        "Design Engineering (DE)": 0,
    },
}

SUBJECT_CODE_MAP: dict[str, str] = {
    "CN": "Computer Network (CN)",
    "ADA": "Analysis & Design of Algorithm (ADA)",
    "SE": "Software Engineering (SE)",
    "PE": "Professional Ethics (PEM)",
    "CPDP": "Contributor Personality Dev Pr (CPDP)",
    "CS/PYTHON": "Elective (PDS/CS)",
}

# Subjects offered on the mark-attendance screen, in display order.
DASHBOARD_SUBJECTS: tuple[DashboardSubject, ...] = (
    DashboardSubject("CN", "Computer Networks"),
    DashboardSubject("ADA", "Algorithm Design & Analysis"),
    DashboardSubject("SE", "Software Engineering"),
    DashboardSubject("PE", "Professional Ethics"),
    DashboardSubject("CPDP", "Career & Personality Development"),
    DashboardSubject("CS/PYTHON", "Computer Science/Python (Elective)"),
)

DEFAULT_GROUP = GROUPS[0]


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def to_full_name(code: Optional[str]) -> str:
    """Map a subject code to its catalog name; unmapped values pass through unchanged."""

    return SUBJECT_CODE_MAP.get(normalize_code(code), code or "")


def is_known_group(group: object) -> bool:
    return isinstance(group, str) and group in SUBJECT_TOTALS


def is_dashboard_code(code: Optional[str]) -> bool:
    return any(s.code == normalize_code(code) for s in DASHBOARD_SUBJECTS)


def default_total(group: str, full_name: str) -> int:
    return SUBJECT_TOTALS.get(group, {}).get(full_name, 0)
