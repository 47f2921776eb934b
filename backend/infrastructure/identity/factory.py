"""Identity validator factory.

Environment variable: IDENTITY_VALIDATOR
Values:
    - "allowlist": ALLOWED_USER_IDS comma list (default)
    - "http": remote endpoint at IDENTITY_API_URL
"""

import os
from typing import Optional

from domain.kiosk.core.ports.identity_validator import IIdentityValidator
from infrastructure.config import KioskSettings, load_kiosk_settings
from infrastructure.identity.allow_list_validator import AllowListIdentityValidator
from infrastructure.identity.http_validator import HttpIdentityValidator


def create_identity_validator(settings: Optional[KioskSettings] = None) -> IIdentityValidator:
    """Create identity validator based on IDENTITY_VALIDATOR env var.

    Raises:
        ValueError: If the mode is unknown or http mode lacks IDENTITY_API_URL
    """
    settings = settings or load_kiosk_settings()
    mode = os.getenv("IDENTITY_VALIDATOR", "allowlist").strip().lower()

    if mode == "http":
        if not settings.identity_api_url:
            raise ValueError(
                "IDENTITY_VALIDATOR=http but IDENTITY_API_URL not set. "
                "Set IDENTITY_API_URL in .env or use IDENTITY_VALIDATOR=allowlist"
            )
        return HttpIdentityValidator(settings.identity_api_url)

    if mode == "allowlist":
        return AllowListIdentityValidator(settings.allowed_user_ids)

    raise ValueError(f"IDENTITY_VALIDATOR must be 'allowlist' or 'http', got '{mode}'")


_identity_validator: Optional[IIdentityValidator] = None


def get_identity_validator() -> IIdentityValidator:
    """Get singleton identity validator instance."""
    global _identity_validator
    if _identity_validator is None:
        _identity_validator = create_identity_validator()
    return _identity_validator


def reset_identity_validator() -> None:
    """Reset singleton (for testing)."""
    global _identity_validator
    _identity_validator = None
