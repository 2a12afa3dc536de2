from __future__ import annotations

import logging
from typing import MutableMapping, Optional

from ..core.constants import GROUP_SESSION_KEY
from ..core.exceptions import ValidationError
from .subjects import DEFAULT_GROUP, is_known_group

logger = logging.getLogger(__name__)


class GroupPreference:
    """The student's selected group, kept in client-side session storage.

    Reads never fail: a missing, unknown or unreadable value falls back to the
    first catalog group. Writes are validated against the catalog.
    """

    def __init__(self, storage: Optional[MutableMapping], *, key: str = GROUP_SESSION_KEY):
        self._storage = storage
        self._key = key

    def get(self) -> str:
        if self._storage is None:
            return DEFAULT_GROUP
        try:
            value = self._storage.get(self._key)
        except Exception:
            logger.warning("Group preference storage unavailable, using %s", DEFAULT_GROUP)
            return DEFAULT_GROUP
        return value if is_known_group(value) else DEFAULT_GROUP

    def set(self, group: str) -> str:
        group = group.strip() if isinstance(group, str) else group
        if not is_known_group(group):
            raise ValidationError(f"Unknown group: {group or '-'}")
        if self._storage is not None:
            self._storage[self._key] = group
        return group
