"""Identity validator adapters."""

from infrastructure.identity.allow_list_validator import AllowListIdentityValidator
from infrastructure.identity.http_validator import HttpIdentityValidator

__all__ = ["AllowListIdentityValidator", "HttpIdentityValidator"]
