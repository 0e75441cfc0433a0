"""State assertions for lifecycle steps.

A check is any callable taking the post-apply ``State`` and raising
``CheckFailure`` when the assertion does not hold.
"""

from __future__ import annotations

from collections.abc import Callable

from fss.engine.state import InstanceState, State
from fss.errors import CheckFailure

CheckFunc = Callable[[State], None]


def _instance(state: State, name: str) -> InstanceState:
    resource = state.get(name)
    if resource is None:
        raise CheckFailure(f"Not found: {name} in state")
    return resource.instance


def _attribute(instance: InstanceState, key: str) -> str | None:
    if key == "id":
        return instance.id
    return instance.attributes.get(key)


def from_instance_state(state: State, name: str, key: str) -> str:
    """Return a single attribute of a state entry or fail the check."""
    value = _attribute(_instance(state, name), key)
    if value is None:
        raise CheckFailure(f"{name}: Attribute '{key}' not found")
    return value


def check_resource_attr(name: str, key: str, value: str) -> CheckFunc:
    def check(state: State) -> None:
        actual = _attribute(_instance(state, name), key)
        if actual is None:
            # A zero-length list or map may be absent from flat state altogether.
            if key.endswith((".#", ".%")) and value == "0":
                return
            raise CheckFailure(f"{name}: Attribute '{key}' not found")
        if actual != value:
            raise CheckFailure(f"{name}: Attribute '{key}' expected {value!r}, got {actual!r}")

    return check


def check_resource_attr_set(name: str, key: str) -> CheckFunc:
    def check(state: State) -> None:
        actual = _attribute(_instance(state, name), key)
        if actual is None or actual == "":
            raise CheckFailure(f"{name}: Attribute '{key}' expected to be set")

    return check


def check_no_resource_attr(name: str, key: str) -> CheckFunc:
    def check(state: State) -> None:
        actual = _attribute(_instance(state, name), key)
        if actual is not None and not (key.endswith((".#", ".%")) and actual == "0"):
            raise CheckFailure(f"{name}: Attribute '{key}' found when not expected")

    return check


def compose_check(*checks: CheckFunc) -> CheckFunc:
    """Run checks in order and stop at the first failure."""

    def check(state: State) -> None:
        for index, item in enumerate(checks):
            try:
                item(state)
            except CheckFailure as exc:
                raise CheckFailure(f"Check {index + 1}/{len(checks)} error: {exc}") from exc

    return check


def compose_aggregate_check(*checks: CheckFunc) -> CheckFunc:
    """Run every check and report all failures together."""

    def check(state: State) -> None:
        errors: list[str] = []
        for index, item in enumerate(checks):
            try:
                item(state)
            except CheckFailure as exc:
                errors.append(f"Check {index + 1}/{len(checks)} error: {exc}")
        if errors:
            raise CheckFailure("\n".join(errors))

    return check


class IdentityLog:
    """Ordered log of identity values captured across steps.

    Used to tell an in-place update from a destroy-and-recreate: capture the
    id after one step and compare against it after the next.
    """

    def __init__(self) -> None:
        self.snapshots: list[tuple[str, str]] = []

    @property
    def last(self) -> str | None:
        return self.snapshots[-1][1] if self.snapshots else None

    def capture(self, name: str, key: str = "id") -> CheckFunc:
        def check(state: State) -> None:
            self.snapshots.append((name, from_instance_state(state, name, key)))

        return check

    def expect_unchanged(self, name: str, key: str = "id") -> CheckFunc:
        def check(state: State) -> None:
            previous = self._require_previous(name)
            current = from_instance_state(state, name, key)
            self.snapshots.append((name, current))
            if current != previous:
                raise CheckFailure("Resource recreated when it was supposed to be updated.")

        return check

    def expect_changed(self, name: str, key: str = "id") -> CheckFunc:
        def check(state: State) -> None:
            previous = self._require_previous(name)
            current = from_instance_state(state, name, key)
            self.snapshots.append((name, current))
            if current == previous:
                raise CheckFailure("Resource was expected to be recreated but it wasn't.")

        return check

    def _require_previous(self, name: str) -> str:
        previous = self.last
        if previous is None:
            raise CheckFailure(f"{name}: no identity captured by an earlier step")
        return previous
