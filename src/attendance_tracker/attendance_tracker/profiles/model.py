from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Profile:
    """Domain entity: a student's profile, created at sign-up."""

    user_id: str
    name: str
