"""Kiosk session state machine.

``step`` is a pure transition function: given the current state, context
and one event it returns the next state, a new context and the side-effect
intents to execute. The input context is never mutated and no I/O happens
here; timers, persistence and hardware live in the application layer.

Rules applied for every event, in order:
1. ReadingUpdate appends the sample to the bounded buffers (any state)
2. the state-specific transition, if the (state, event) pair has one
3. the events accepted in any state (idle, error, setters)

Pairs matching none of the above are no-ops.
"""

from dataclasses import replace
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple, Type

from ..core.value_objects.treatment_group import TreatmentGroup
from ..leaderboard.ranker import insert, rank_entries
from ..scoring.waste_score import dish_score
from .context import (
    CONTROL_AUTO_EXIT_SECONDS,
    IDLE_TIMEOUT_SECONDS,
    IDLE_WARNING_SECONDS,
    SessionContext,
)
from .effects import PersistBaseline, PersistScore, SideEffect
from .events import (
    Back,
    ErrorOccurred,
    Exit,
    IdentifyInvalid,
    IdentifyValid,
    IdleReset,
    IdleTick,
    LeaderboardEntryAdded,
    ReadingUpdate,
    ScorePersistFailed,
    ScorePersisted,
    SelectDish,
    SessionEvent,
    SetDebugWeight,
    SetLeaderboard,
    SetPreviousScore,
    ShowLeaderboard,
)
from .states import SessionState

DEFAULT_INVALID_ID_MESSAGE = "User ID not recognized. Please check it and try again."


class StepResult(NamedTuple):
    """Outcome of one transition."""

    state: SessionState
    context: SessionContext
    effects: List[SideEffect]


Transition = Callable[
    [SessionContext, SessionEvent, List[SideEffect]],
    Tuple[SessionState, SessionContext],
]


# ---------------------------------------------------------------------------
# State-specific transitions
# ---------------------------------------------------------------------------


def _identify_valid(ctx, event, effects):
    return SessionState.DISH_SELECT, replace(
        ctx,
        user_id=event.user_id,
        treatment_group=event.treatment_group,
        error_message=None,
    )


def _identify_invalid(ctx, event, effects):
    return SessionState.ERROR, replace(
        ctx,
        error_message=event.message or DEFAULT_INVALID_ID_MESSAGE,
    )


def _select_dish(ctx, event, effects):
    weight = ctx.latest_weight()
    current_score = dish_score(weight, event.dish_kind, ctx.debug_weight_override)
    ctx = replace(ctx, dish_kind=event.dish_kind, current_score=current_score)

    if ctx.treatment_group is TreatmentGroup.TREATMENT:
        return SessionState.SCORE, ctx

    # control arm never sees its score, only the raw weight is recorded
    effects.append(PersistBaseline(ctx.user_id, event.dish_kind, weight))
    return SessionState.THANK_YOU, replace(ctx, auto_exit_countdown=CONTROL_AUTO_EXIT_SECONDS)


def _full_reset(ctx, event, effects):
    return SessionState.WELCOME, ctx.reset()


def _exit_with_score(ctx, event, effects):
    if (
        not ctx.score_persisted
        and ctx.user_id is not None
        and ctx.dish_kind is not None
        and ctx.current_score is not None
    ):
        effects.append(
            PersistScore(ctx.user_id, ctx.dish_kind, ctx.current_score, ctx.latest_weight())
        )
    return SessionState.WELCOME, ctx.reset()


def _score_back(ctx, event, effects):
    return SessionState.DISH_SELECT, replace(
        ctx.without_samples(),
        dish_kind=None,
        current_score=None,
        score_persisted=False,
    )


def _rescore(ctx, event, effects):
    # ctx already holds the new sample
    return SessionState.SCORE, replace(
        ctx,
        current_score=dish_score(event.sample.grams, ctx.dish_kind, ctx.debug_weight_override),
    )


def _show_leaderboard(ctx, event, effects):
    return SessionState.LEADERBOARD, ctx


def _leaderboard_back(ctx, event, effects):
    return SessionState.SCORE, ctx


_TRANSITIONS: Dict[Tuple[SessionState, Type[SessionEvent]], Transition] = {
    (SessionState.WELCOME, IdentifyValid): _identify_valid,
    (SessionState.WELCOME, IdentifyInvalid): _identify_invalid,
    (SessionState.DISH_SELECT, SelectDish): _select_dish,
    (SessionState.DISH_SELECT, Back): _full_reset,
    (SessionState.SCORE, ShowLeaderboard): _show_leaderboard,
    (SessionState.SCORE, Exit): _exit_with_score,
    (SessionState.SCORE, Back): _score_back,
    (SessionState.SCORE, ReadingUpdate): _rescore,
    (SessionState.LEADERBOARD, Exit): _exit_with_score,
    (SessionState.LEADERBOARD, Back): _leaderboard_back,
    (SessionState.THANK_YOU, Back): _full_reset,
    (SessionState.THANK_YOU, Exit): _full_reset,
    (SessionState.ERROR, Exit): _full_reset,
}


# ---------------------------------------------------------------------------
# Events accepted in any state
# ---------------------------------------------------------------------------


def _idle_tick(state: SessionState, ctx: SessionContext) -> Tuple[SessionState, SessionContext]:
    if not state.is_interactive():
        return state, ctx

    if state is SessionState.THANK_YOU and ctx.auto_exit_countdown is not None:
        if ctx.auto_exit_countdown <= 1:
            return SessionState.WELCOME, ctx.reset()
        ctx = replace(ctx, auto_exit_countdown=ctx.auto_exit_countdown - 1)

    if ctx.show_idle_warning:
        if ctx.idle_countdown <= 1:
            return SessionState.WELCOME, ctx.reset()
        return state, replace(ctx, idle_countdown=ctx.idle_countdown - 1)

    if ctx.idle_countdown <= 0:
        return state, replace(ctx, show_idle_warning=True, idle_countdown=IDLE_WARNING_SECONDS)
    return state, replace(ctx, idle_countdown=ctx.idle_countdown - 1)


def _apply_global(
    state: SessionState,
    ctx: SessionContext,
    event: SessionEvent,
) -> Optional[Tuple[SessionState, SessionContext]]:
    """Apply an event valid in every state; None if the event is not one."""
    if isinstance(event, IdleTick):
        return _idle_tick(state, ctx)

    if isinstance(event, IdleReset):
        return state, replace(ctx, show_idle_warning=False, idle_countdown=IDLE_TIMEOUT_SECONDS)

    if isinstance(event, ErrorOccurred):
        return SessionState.ERROR, replace(
            ctx,
            error_message=event.message,
            dish_kind=None,
            current_score=None,
        )

    if isinstance(event, SetPreviousScore):
        return state, replace(ctx, previous_score=event.score)

    if isinstance(event, SetDebugWeight):
        ctx = replace(ctx, debug_weight_override=event.grams)
        if state is SessionState.SCORE and ctx.dish_kind is not None:
            ctx = replace(
                ctx,
                current_score=dish_score(ctx.latest_weight(), ctx.dish_kind, event.grams),
            )
        return state, ctx

    if isinstance(event, SetLeaderboard):
        return state, replace(ctx, leaderboard=tuple(rank_entries(event.entries)))

    if isinstance(event, LeaderboardEntryAdded):
        return state, replace(ctx, leaderboard=tuple(insert(ctx.leaderboard, event.entry)))

    if isinstance(event, ScorePersisted):
        return state, replace(ctx, score_persisted=True)

    if isinstance(event, ScorePersistFailed):
        return state, replace(ctx, score_persisted=False)

    return None


def step(state: SessionState, context: SessionContext, event: SessionEvent) -> StepResult:
    """Apply one event to the session.

    Args:
        state: Current state
        context: Current context (not mutated)
        event: Event to apply

    Returns:
        StepResult: (new state, new context, side effects to execute)

    Example:
        >>> result = step(SessionState.WELCOME, SessionContext(), IdentifyValid("abc"))
        >>> result.state, result.context.user_id
        (<SessionState.DISH_SELECT: 'dish_select'>, 'abc')
    """
    effects: List[SideEffect] = []
    new_state, ctx = state, context
    handled = False

    if isinstance(event, ReadingUpdate):
        ctx = ctx.with_sample(event.sample)
        handled = True

    transition = _TRANSITIONS.get((state, type(event)))
    if transition is not None:
        new_state, ctx = transition(ctx, event, effects)
        handled = True
    else:
        outcome = _apply_global(state, ctx, event)
        if outcome is not None:
            new_state, ctx = outcome
            handled = True

    if not handled:
        return StepResult(state, context, [])
    return StepResult(new_state, ctx, effects)
