"""TreatmentGroup value object - study arm a user is assigned to."""

from enum import Enum

_INT32_MODULUS = 2**32
_INT32_MAX = 2**31 - 1


class TreatmentGroup(str, Enum):
    """Study arm deciding whether a user sees their score.

    - TREATMENT: score screen is shown after dish selection
    - CONTROL: thank-you screen only, weight is recorded as baseline data
    """

    TREATMENT = "treatment"
    CONTROL = "control"

    @classmethod
    def assign(cls, user_id: str) -> "TreatmentGroup":
        """Deterministically assign a user id to a group.

        The id is trimmed and lower-cased, hashed with a 32-bit signed
        rolling hash (h = h * 31 + code point) and split on parity, which
        gives a stable, roughly 50/50 assignment.

        Example:
            >>> TreatmentGroup.assign("JSmith") == TreatmentGroup.assign("jsmith ")
            True
        """
        return cls.TREATMENT if abs(user_id_hash(user_id)) % 2 == 0 else cls.CONTROL


def user_id_hash(user_id: str) -> int:
    """Signed 32-bit rolling hash of the normalized user id."""
    value = 0
    for char in user_id.strip().lower():
        value = (value * 31 + ord(char)) % _INT32_MODULUS
    if value > _INT32_MAX:
        value -= _INT32_MODULUS
    return value
