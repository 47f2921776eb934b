"""CQRS Commands for the kiosk."""

from .identify_user import (
    IdentifyUserCommand,
    IdentifyUserCommandHandler,
    IdentifyUserResult,
)
from .submit_initials import (
    SubmitInitialsCommand,
    SubmitInitialsCommandHandler,
    SubmitInitialsResult,
)

__all__ = [
    "IdentifyUserCommand",
    "IdentifyUserCommandHandler",
    "IdentifyUserResult",
    "SubmitInitialsCommand",
    "SubmitInitialsCommandHandler",
    "SubmitInitialsResult",
]
