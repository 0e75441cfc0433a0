"""Polling helpers for lifecycle state transitions."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Collection
from dataclasses import dataclass
from typing import Protocol, TypeVar

from fss.core.config import Settings
from fss.core.logging_safety import safe_log_identifier
from fss.errors import WaitTimeoutError
from fss.schemas.file_storage import LifecycleState

logger = logging.getLogger(__name__)


class _HasLifecycle(Protocol):
    id: str
    lifecycle_state: LifecycleState


T = TypeVar("T", bound=_HasLifecycle)


@dataclass(frozen=True, slots=True)
class WaitPolicy:
    poll_interval_seconds: float = 5.0
    max_polls: int = 60

    @classmethod
    def from_settings(cls, settings: Settings) -> WaitPolicy:
        return cls(
            poll_interval_seconds=settings.poll_interval_seconds,
            max_polls=settings.max_state_polls,
        )


def wait_for_state(
    fetch: Callable[[], T],
    *,
    target: Collection[LifecycleState],
    pending: Collection[LifecycleState],
    policy: WaitPolicy,
    description: str,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Poll ``fetch`` until the object reaches a target state.

    Raises ``WaitTimeoutError`` when the object lands in a state that is
    neither pending nor a target, or when the poll budget runs out.
    """
    last_state: LifecycleState | None = None
    for attempt in range(1, policy.max_polls + 1):
        current = fetch()
        last_state = current.lifecycle_state
        if last_state in target:
            return current
        if last_state not in pending:
            raise WaitTimeoutError(
                f"{description} reached unexpected state {last_state.value}",
                last_state=last_state.value,
            )

        logger.info(
            "wait.pending object_id=%s state=%s attempt=%d max_polls=%d",
            safe_log_identifier(current.id),
            last_state.value,
            attempt,
            policy.max_polls,
        )
        if attempt < policy.max_polls:
            sleep(policy.poll_interval_seconds)

    raise WaitTimeoutError(
        f"{description} did not reach {'/'.join(sorted(s.value for s in target))} "
        f"after {policy.max_polls} polls",
        last_state=last_state.value if last_state is not None else None,
    )
