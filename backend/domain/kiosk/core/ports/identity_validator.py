"""IIdentityValidator port - user id allow-list oracle."""

from typing import Protocol


class IIdentityValidator(Protocol):
    """
    Interface for validating user identifiers typed at the kiosk.

    The kiosk treats the validator as an opaque boolean oracle.
    Examples of implementations:
    - Allow-list held in memory (configuration driven)
    - Remote validation endpoint over HTTP

    Example usage (application layer):
        >>> allowed = await validator.is_allowed("jsmith")
        >>> if not allowed:
        ...     ...  # dispatch IdentifyInvalid
    """

    async def is_allowed(self, user_id: str) -> bool:
        """
        Check whether a user may use the kiosk.

        Args:
            user_id: Candidate identifier as typed by the user

        Returns:
            True if the identifier is allowed

        Note:
            Implementations normalize the identifier themselves
            (trim + lower-case) before comparing.
        """
        ...
