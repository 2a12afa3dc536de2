import pytest

from src.attendance_tracker.attendance_tracker.catalog.subjects import SUBJECT_CODE_MAP
from src.attendance_tracker.attendance_tracker.totals.resolver import effective_totals, resolve


def test_default_total_from_catalog():
    assert resolve("TY CE-1", "CN", {}) == 21
    assert resolve("TY CE-2", "CN", None) == 22


@pytest.mark.parametrize("code", sorted(SUBJECT_CODE_MAP))
@pytest.mark.parametrize("value", [0, 5, 40])
def test_override_always_wins(code, value):
    overrides = {SUBJECT_CODE_MAP[code]: value}
    assert resolve("TY CE-3", code, overrides) == value


def test_override_for_other_subject_is_ignored():
    assert resolve("TY CE-1", "SE", {"Computer Network (CN)": 3}) == 16


def test_non_numeric_override_falls_back_to_default():
    assert resolve("TY CE-1", "ADA", {"Analysis & Design of Algorithm (ADA)": None}) == 22
    assert resolve("TY CE-1", "ADA", {"Analysis & Design of Algorithm (ADA)": True}) == 22


def test_unknown_group_or_subject_resolves_to_zero():
    assert resolve("TY CE-9", "CN", {}) == 0
    assert resolve("TY CE-1", "MATHS", {}) == 0


def test_full_name_resolves_like_code():
    assert resolve("TY CE-1", "Software Engineering (SE)", {}) == 16
    assert resolve("TY CE-2", "Design Engineering (DE)", {}) == 0


def test_effective_totals_merges_overrides():
    totals = effective_totals("TY CE-1", {"Computer Network (CN)": 5})

    assert totals["Computer Network (CN)"] == 5
    assert totals["Software Engineering (SE)"] == 16
    assert len(totals) == 7


def test_float_override_wins():
    assert resolve("TY CE-1", "CN", {"Computer Network (CN)": 5.0}) == 5
    assert resolve("TY CE-1", "CN", {"Computer Network (CN)": 0.0}) == 0
    assert resolve("TY CE-1", "CN", {"Computer Network (CN)": float("nan")}) == 21
