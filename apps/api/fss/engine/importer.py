"""Importing existing objects into state and verifying the result."""

from __future__ import annotations

from collections.abc import Collection

from fss.engine.state import InstanceState, ResourceState, State, flatten_attributes
from fss.errors import ConfigurationError
from fss.provider import Provider


def import_resource(provider: Provider, type_name: str, resource_id: str) -> ResourceState:
    """Build a state entry for an existing object from its id alone."""
    data = provider.resource(type_name).import_resource(resource_id)
    if data is None:
        raise ConfigurationError(f"Cannot import non-existent remote object {type_name} {resource_id}")
    return ResourceState(
        mode="managed",
        type=type_name,
        instance=InstanceState(id=data.id, attributes=flatten_attributes(data.attributes)),
    )


def export_state(state: State) -> str:
    return state.to_json()


def attribute_drift(
    expected: InstanceState,
    actual: InstanceState,
    *,
    ignore: Collection[str] = (),
) -> dict[str, tuple[str | None, str | None]]:
    """Return ``{key: (expected, actual)}`` for every differing attribute.

    Keys in ``ignore`` are skipped, and so is anything nested under them.
    """

    def skipped(key: str) -> bool:
        return any(key == prefix or key.startswith(f"{prefix}.") for prefix in ignore)

    drift: dict[str, tuple[str | None, str | None]] = {}
    if expected.id != actual.id:
        drift["id"] = (expected.id, actual.id)
    for key in sorted(set(expected.attributes) | set(actual.attributes)):
        if skipped(key):
            continue
        left = expected.attributes.get(key)
        right = actual.attributes.get(key)
        if left != right:
            drift[key] = (left, right)
    return drift


def verify_import_round_trip(
    state: State,
    address: str,
    provider: Provider,
    *,
    ignore: Collection[str] = (),
) -> dict[str, tuple[str | None, str | None]]:
    """Export state, re-read it, import ``address`` by id and diff against live state.

    Returns the attribute drift; an empty mapping means the round trip is
    lossless.
    """
    restored = State.from_json(export_state(state))
    live = restored.get(address)
    if live is None:
        raise ConfigurationError(f"{address} is not in state")

    drift = attribute_drift(state.resources[address].instance, live.instance)
    imported = import_resource(provider, live.type, live.instance.id)
    drift.update(attribute_drift(live.instance, imported.instance, ignore=ignore))
    return drift
