from __future__ import annotations

from ..core.exceptions import ValidationError
from .model import Profile
from .repository import ProfileRepository


class ProfileService:
    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get_profile(self, user_id: str) -> Profile:
        profile = self._profiles.get_by_user_id(user_id)
        if not profile:
            raise ValidationError("Profile not found")
        return profile
