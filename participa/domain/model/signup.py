"""Signup completion state machine.

A pending account moves through:

    AWAITING_INPUT
        -> AWAITING_COLLISION_RESOLUTION (0..n times)
        -> AWAITING_CONFIRMATION
        -> COMPLETE

All legal transitions live in ``TRANSITIONS``; any (state, event) pair
missing from it is rejected.
"""

from participa.domain.error import InvalidSignupTransition
from participa.domain.value import SignupEvent, SignupState

TRANSITIONS: dict[tuple[SignupState, SignupEvent], SignupState] = {
    (
        SignupState.AWAITING_INPUT,
        SignupEvent.SUBMISSION_COLLIDED,
    ): SignupState.AWAITING_COLLISION_RESOLUTION,
    (
        SignupState.AWAITING_INPUT,
        SignupEvent.SUBMISSION_ACCEPTED,
    ): SignupState.AWAITING_CONFIRMATION,
    (
        SignupState.AWAITING_INPUT,
        SignupEvent.SUBMISSION_CONFIRMED,
    ): SignupState.COMPLETE,
    (
        SignupState.AWAITING_COLLISION_RESOLUTION,
        SignupEvent.SUBMISSION_COLLIDED,
    ): SignupState.AWAITING_COLLISION_RESOLUTION,
    (
        SignupState.AWAITING_COLLISION_RESOLUTION,
        SignupEvent.SUBMISSION_ACCEPTED,
    ): SignupState.AWAITING_CONFIRMATION,
    (
        SignupState.AWAITING_COLLISION_RESOLUTION,
        SignupEvent.SUBMISSION_CONFIRMED,
    ): SignupState.COMPLETE,
    (
        SignupState.AWAITING_CONFIRMATION,
        SignupEvent.TOKEN_CONSUMED,
    ): SignupState.COMPLETE,
}

# States in which the pending account still accepts form submissions
SUBMITTABLE_STATES = frozenset(
    {SignupState.AWAITING_INPUT, SignupState.AWAITING_COLLISION_RESOLUTION}
)


def next_state(state: SignupState, event: SignupEvent) -> SignupState:
    """Return the state reached by applying ``event`` in ``state``.

    Raises:
        InvalidSignupTransition: If the transition is not defined
    """
    try:
        return TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidSignupTransition(state.value, event.value) from None


def can_submit(state: SignupState) -> bool:
    """Whether a completion form submission is accepted in ``state``."""
    return state in SUBMITTABLE_STATES
