"""Lifecycle transition rules for file storage objects."""

from fss.errors import ServiceError
from fss.schemas.file_storage import LifecycleState

_TERMINAL_STATES: set[LifecycleState] = {
    LifecycleState.DELETED,
    LifecycleState.FAILED,
}

_ALLOWED_TRANSITIONS: dict[LifecycleState, set[LifecycleState]] = {
    LifecycleState.CREATING: {LifecycleState.ACTIVE, LifecycleState.FAILED},
    LifecycleState.ACTIVE: {LifecycleState.ACTIVE, LifecycleState.DELETING},
    LifecycleState.DELETING: {LifecycleState.DELETED, LifecycleState.FAILED},
    LifecycleState.DELETED: set(),
    LifecycleState.FAILED: set(),
}


def is_terminal(state: LifecycleState) -> bool:
    return state in _TERMINAL_STATES


def allowed_next_states(state: LifecycleState) -> list[LifecycleState]:
    """Return deterministically ordered allowed successors for a state."""
    return sorted(_ALLOWED_TRANSITIONS.get(state, set()), key=lambda s: s.value)


def ensure_transition(old_state: LifecycleState, new_state: LifecycleState) -> None:
    """Validate a lifecycle transition, raising the control plane's 409 shape."""
    if old_state in _TERMINAL_STATES:
        raise ServiceError(
            status_code=409,
            code="IncorrectState",
            message=f"Resource in terminal state {old_state.value} cannot be modified",
            details={
                "current_state": old_state.value,
                "attempted_state": new_state.value,
                "allowed_next_states": [],
            },
        )

    if new_state not in _ALLOWED_TRANSITIONS.get(old_state, set()):
        raise ServiceError(
            status_code=409,
            code="IncorrectState",
            message=f"Resource in state {old_state.value} cannot move to {new_state.value}",
            details={
                "current_state": old_state.value,
                "attempted_state": new_state.value,
                "allowed_next_states": [state.value for state in allowed_next_states(old_state)],
            },
        )


def ensure_updatable(state: LifecycleState) -> None:
    """Only ACTIVE objects accept in-place updates."""
    ensure_transition(state, LifecycleState.ACTIVE)
    if state is not LifecycleState.ACTIVE:
        raise ServiceError(
            status_code=409,
            code="IncorrectState",
            message=f"Resource in state {state.value} cannot be updated",
            details={
                "current_state": state.value,
                "attempted_state": LifecycleState.ACTIVE.value,
                "allowed_next_states": [s.value for s in allowed_next_states(state)],
            },
        )
