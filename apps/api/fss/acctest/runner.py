"""Sequential lifecycle test driver."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from fss.acctest.checks import CheckFunc
from fss.engine.apply import apply, destroy, refresh
from fss.engine.configuration import Configuration
from fss.engine.importer import verify_import_round_trip
from fss.engine.plan import plan
from fss.engine.state import State
from fss.errors import CheckFailure, ConfigurationError, ServiceError, StepFailure, WaitTimeoutError
from fss.provider import Provider

logger = logging.getLogger(__name__)

_APPLY_ERRORS = (ServiceError, ConfigurationError, WaitTimeoutError)


@dataclass(slots=True)
class TestStep:
    """One apply-and-assert stage of a lifecycle test."""

    __test__ = False

    config: Configuration
    check: CheckFunc | None = None
    import_state: bool = False
    import_state_verify: bool = False
    import_state_verify_ignore: tuple[str, ...] = ()
    resource_name: str | None = None
    expect_non_empty_plan: bool = False


@dataclass(slots=True)
class TestCase:
    __test__ = False

    provider_factory: Callable[[], Provider]
    steps: list[TestStep] = field(default_factory=list)
    pre_check: Callable[[], None] | None = None
    check_destroy: CheckFunc | None = None


def run_test_case(case: TestCase) -> State:
    """Run every step in order, then destroy what is left in state.

    ``pre_check`` runs before the provider is built; a ``SetupError`` there
    aborts the run before any step. The first failing step raises
    ``StepFailure`` and later steps are skipped. Returns the state as it was
    before the final destroy.
    """
    if case.pre_check is not None:
        case.pre_check()

    provider = case.provider_factory()
    state = State()
    try:
        for number, step in enumerate(case.steps, start=1):
            run_step(number, step, state, provider)
    except Exception:
        try:
            destroy(state, provider)
        except _APPLY_ERRORS:
            logger.exception("acctest.destroy_failed resources=%d", len(state.managed_addresses()))
        raise

    try:
        destroy(state, provider)
    except _APPLY_ERRORS as exc:
        raise StepFailure(len(case.steps), f"destroy failed: {exc}") from exc

    if case.check_destroy is not None:
        try:
            case.check_destroy(state)
        except CheckFailure as exc:
            raise AssertionError(f"Check destroy error: {exc}") from exc
    return state


def run_step(number: int, step: TestStep, state: State, provider: Provider) -> State:
    """Run one step against ``state``, updating it in place.

    The caller keeps the same object across a failure, so cleanup sees every
    object the step created and none that it already destroyed.
    """
    logger.info("acctest.step_started step=%d blocks=%d", number, len(step.config.blocks))
    try:
        _refresh_in_place(state, provider)
        apply(step.config, state, provider)
    except _APPLY_ERRORS as exc:
        raise StepFailure(number, f"apply failed: {exc}") from exc

    if step.check is not None:
        try:
            step.check(state)
        except CheckFailure as exc:
            raise StepFailure(number, str(exc)) from exc

    if step.import_state or step.import_state_verify:
        _verify_import(number, step, state, provider)

    try:
        after = plan(step.config, refresh(state, provider), provider)
    except _APPLY_ERRORS as exc:
        raise StepFailure(number, f"post-apply plan failed: {exc}") from exc
    if not after.is_empty and not step.expect_non_empty_plan:
        raise StepFailure(number, f"After applying this step, the plan was not empty: {after.summary()}")

    logger.info("acctest.step_passed step=%d resources=%d", number, len(state.resources))
    return state


def _verify_import(number: int, step: TestStep, state: State, provider: Provider) -> None:
    addresses = [step.resource_name] if step.resource_name else state.managed_addresses()
    for address in addresses:
        try:
            drift = verify_import_round_trip(
                state,
                address,
                provider,
                ignore=step.import_state_verify_ignore,
            )
        except _APPLY_ERRORS as exc:
            raise StepFailure(number, f"import of {address} failed: {exc}") from exc

        if drift and step.import_state_verify:
            details = "; ".join(f"{key}: {left!r} != {right!r}" for key, (left, right) in drift.items())
            raise StepFailure(number, f"ImportStateVerify attributes not equivalent for {address}: {details}")


def _refresh_in_place(state: State, provider: Provider) -> None:
    refreshed = refresh(state, provider)
    state.resources = refreshed.resources
    state.serial = refreshed.serial
