"""SessionContext - data carried by the kiosk session."""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from ..core.entities.leaderboard_entry import LeaderboardEntry
from ..core.value_objects.dish_kind import DishKind
from ..core.value_objects.treatment_group import TreatmentGroup
from ..core.value_objects.weight_sample import WeightSample
from .sample_buffer import SampleBuffer

IDLE_TIMEOUT_SECONDS = 25
IDLE_WARNING_SECONDS = 5
CONTROL_AUTO_EXIT_SECONDS = 5
MAX_READINGS = 50
MAX_STABLE_READINGS = 10


def _readings_buffer() -> SampleBuffer:
    return SampleBuffer(MAX_READINGS)


def _stable_buffer() -> SampleBuffer:
    return SampleBuffer(MAX_STABLE_READINGS)


@dataclass
class SessionContext:
    """State machine context.

    Instances handed to ``step`` are treated as read-only: transitions
    return a new context holding new sample buffer versions.

    Attributes:
        user_id: Identified user, None before identification
        treatment_group: Study arm assigned at identification
        dish_kind: Selected dish (set exactly in THANK_YOU, SCORE, LEADERBOARD)
        current_score: Score of the current measurement
        previous_score: User's last score for this meal period
        readings: Last MAX_READINGS samples
        stable_readings: Last MAX_STABLE_READINGS samples flagged stable
        idle_countdown: Seconds left before the idle warning (or the reset)
        show_idle_warning: Idle warning displayed
        error_message: Message shown in ERROR
        score_persisted: Current score already written to the score store
        debug_weight_override: Operator net weight replacing the scale reading
        leaderboard: Ranked snapshot (survives session resets)
        auto_exit_countdown: Seconds left before THANK_YOU exits on its own,
            None when no automatic exit is pending
    """

    user_id: Optional[str] = None
    treatment_group: Optional[TreatmentGroup] = None
    dish_kind: Optional[DishKind] = None
    current_score: Optional[int] = None
    previous_score: Optional[int] = None
    readings: SampleBuffer = field(default_factory=_readings_buffer)
    stable_readings: SampleBuffer = field(default_factory=_stable_buffer)
    idle_countdown: int = IDLE_TIMEOUT_SECONDS
    show_idle_warning: bool = False
    error_message: Optional[str] = None
    score_persisted: bool = False
    debug_weight_override: Optional[float] = None
    leaderboard: Tuple[LeaderboardEntry, ...] = ()
    auto_exit_countdown: Optional[int] = None

    @classmethod
    def initial(cls, leaderboard: Iterable[LeaderboardEntry] = ()) -> "SessionContext":
        """Fresh context, optionally keeping a leaderboard snapshot."""
        return cls(leaderboard=tuple(leaderboard))

    def reset(self) -> "SessionContext":
        """Full reset: everything back to defaults except the leaderboard."""
        return SessionContext.initial(self.leaderboard)

    def with_sample(self, sample: WeightSample) -> "SessionContext":
        """New context with the sample appended to the bounded buffers."""
        stable_readings = self.stable_readings
        if sample.is_flagged_stable():
            stable_readings = stable_readings.appended(sample)
        return replace(
            self,
            readings=self.readings.appended(sample),
            stable_readings=stable_readings,
        )

    def without_samples(self) -> "SessionContext":
        return replace(self, readings=_readings_buffer(), stable_readings=_stable_buffer())

    def latest_sample(self) -> Optional[WeightSample]:
        return self.readings.latest()

    def latest_weight(self) -> float:
        """Latest raw weight in grams, 0.0 when no sample was received."""
        sample = self.readings.latest()
        return sample.grams if sample is not None else 0.0
