from __future__ import annotations

import math
from typing import Mapping, Optional

from ..catalog.subjects import SUBJECT_TOTALS, default_total, to_full_name


def _override_for(overrides: Optional[Mapping[str, object]], full_name: str) -> Optional[int]:
    if not overrides:
        return None
    value = overrides.get(full_name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def resolve(group: str, subject_code: str, overrides: Optional[Mapping[str, object]] = None) -> int:
    """Effective lecture total for a subject.

    An override always wins, including 0 ("no lectures scheduled"). Without one
    the group default applies, and anything unknown resolves to 0.
    """

    full_name = to_full_name(subject_code)
    override = _override_for(overrides, full_name)
    if override is not None:
        return override
    return default_total(group, full_name)


def effective_totals(group: str, overrides: Optional[Mapping[str, object]] = None) -> dict[str, int]:
    """Effective total of every catalog subject of a group, in catalog order."""

    return {name: resolve(group, name, overrides) for name in SUBJECT_TOTALS.get(group, {})}
