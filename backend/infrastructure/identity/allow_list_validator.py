"""Allow-list identity validator - Implements IIdentityValidator port."""

import logging
from typing import Iterable

logger = logging.getLogger(__name__)


def normalize_user_id(user_id: str) -> str:
    """Trim and lower-case a user id."""
    return user_id.strip().lower()


class AllowListIdentityValidator:
    """
    Validates user ids against a fixed set (case-insensitive, trimmed).

    Example:
        >>> validator = AllowListIdentityValidator(["JSmith", "ab123"])
        >>> await validator.is_allowed("  jsmith ")
        True
    """

    def __init__(self, allowed_ids: Iterable[str]):
        """
        Initialize validator.

        Args:
            allowed_ids: Accepted ids (normalized on load, blanks ignored)
        """
        self._allowed = frozenset(
            normalize_user_id(user_id) for user_id in allowed_ids if user_id.strip()
        )
        if not self._allowed:
            logger.warning("Allow-list is empty, every user id will be rejected")

    async def is_allowed(self, user_id: str) -> bool:
        return normalize_user_id(user_id) in self._allowed

    def __len__(self) -> int:
        return len(self._allowed)
