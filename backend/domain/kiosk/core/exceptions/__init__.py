"""Domain exceptions for the Kiosk bounded context."""

from domain.kiosk.core.exceptions.domain_errors import (
    InvalidIdentityError,
    InvalidLeaderboardEntryError,
    InvalidWeightSampleError,
    KioskDomainError,
    NoActiveScoreError,
    PersistenceError,
    ScoreNotQualifiedError,
    TransportError,
    WeightNotReadyError,
)

__all__ = [
    "KioskDomainError",
    "InvalidIdentityError",
    "TransportError",
    "PersistenceError",
    "InvalidLeaderboardEntryError",
    "InvalidWeightSampleError",
    "NoActiveScoreError",
    "ScoreNotQualifiedError",
    "WeightNotReadyError",
]
