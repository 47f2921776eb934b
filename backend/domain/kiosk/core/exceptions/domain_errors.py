"""Domain exceptions for the Kiosk bounded context.

This module defines the exception hierarchy for kiosk domain errors.
All domain exceptions inherit from KioskDomainError.
"""


class KioskDomainError(Exception):
    """Base exception for kiosk domain.

    Allows the application layer to catch and handle all kiosk domain errors uniformly.
    """

    pass


class InvalidIdentityError(KioskDomainError):
    """Raised when a user identifier is rejected by the identity validator."""

    def __init__(self, user_id: str, reason: str = "not allowed"):
        """Initialize with rejected user id.

        Args:
            user_id: Identifier that was rejected
            reason: Why it was rejected
        """
        self.user_id = user_id
        self.reason = reason
        super().__init__(f"Invalid user id '{user_id}': {reason}")


class TransportError(KioskDomainError):
    """Raised when the scale transport is disconnected or fails.

    Examples:
    - Device unplugged mid-session
    - Stream closed by the operating system
    """

    pass


class PersistenceError(KioskDomainError):
    """Raised by store adapters when a write or read fails.

    Never surfaced as a session transition: side-effect executors log it
    and the session continues.
    """

    pass


class InvalidLeaderboardEntryError(KioskDomainError, ValueError):
    """Raised when leaderboard entry invariants are violated.

    Examples:
    - Initials are not exactly three letters
    - Score outside [0, 100]
    """

    pass


class InvalidWeightSampleError(KioskDomainError, ValueError):
    """Raised when a transport produces an unusable weight value."""

    pass


class NoActiveScoreError(KioskDomainError):
    """Raised when initials are submitted while no score is on screen."""

    pass


class ScoreNotQualifiedError(KioskDomainError):
    """Raised when a score is below the leaderboard minimum."""

    def __init__(self, score: int, min_score: int):
        """Initialize with the rejected score.

        Args:
            score: Submitted score
            min_score: Minimum score accepted on the leaderboard
        """
        self.score = score
        self.min_score = min_score
        super().__init__(f"Score {score} does not qualify (minimum {min_score})")


class WeightNotReadyError(KioskDomainError):
    """Raised when identification is attempted before a settled, non-zero weight."""

    pass
