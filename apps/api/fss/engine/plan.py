"""Diffing desired configuration against state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fss.engine.configuration import UNKNOWN, Block, Configuration, Ref, contains_unknown
from fss.engine.graph import order_blocks, topological_order
from fss.engine.state import State, flatten_attributes, format_scalar
from fss.errors import ConfigurationError
from fss.provider import Provider
from fss.provider.schema import ResourceSchema


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    REPLACE = "replace"
    DELETE = "delete"
    NOOP = "no-op"


_CHANGING_ACTIONS = frozenset({Action.CREATE, Action.UPDATE, Action.REPLACE, Action.DELETE})


@dataclass(slots=True)
class PlannedChange:
    address: str
    action: Action
    changed_attributes: tuple[str, ...] = ()
    force_new_attributes: tuple[str, ...] = ()


@dataclass(slots=True)
class Plan:
    changes: list[PlannedChange] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not any(change.action in _CHANGING_ACTIONS for change in self.changes)

    def get(self, address: str) -> PlannedChange | None:
        for change in self.changes:
            if change.address == address:
                return change
        return None

    def summary(self) -> str:
        counts = {action: 0 for action in (Action.CREATE, Action.UPDATE, Action.REPLACE, Action.DELETE)}
        for change in self.changes:
            if change.action in counts:
                counts[change.action] += 1
        return ", ".join(f"{count} to {action.value}" for action, count in counts.items())


def state_lookup(state: State, *, unknown: set[str] | None = None, strict: bool = False):
    """Build a ``Ref`` resolver that reads flat attributes from ``state``.

    References to addresses in ``unknown`` or to values missing from state
    resolve to ``UNKNOWN``; with ``strict`` set they raise instead.
    """
    pending = unknown if unknown is not None else set()

    def lookup(ref: Ref) -> Any:
        resource = state.get(ref.address)
        if ref.address in pending or resource is None:
            if strict:
                raise ConfigurationError(f"Reference to {ref.address}.{ref.attribute} before it was applied")
            return UNKNOWN
        if ref.attribute == "id":
            return resource.instance.id
        value = resource.instance.attributes.get(ref.attribute)
        if value is None:
            if strict:
                raise ConfigurationError(f"{ref.address} has no attribute {ref.attribute}")
            return UNKNOWN
        return value

    return lookup


def diff_block(
    address: str,
    schema: ResourceSchema,
    inputs: dict[str, Any],
    prior: dict[str, str] | None,
) -> PlannedChange:
    """Classify the change needed to bring ``prior`` attributes to ``inputs``."""
    missing = [name for name in schema.required_names if inputs.get(name) is None]
    if missing:
        raise ConfigurationError(f"{schema.type_name} is missing required attributes: {', '.join(missing)}")

    if prior is None:
        return PlannedChange(address=address, action=Action.CREATE)

    changed: list[str] = []
    for attribute in schema.inputs:
        desired = inputs.get(attribute.name)
        if desired is None:
            # Optional+computed values left unset keep whatever the server assigned.
            if attribute.computed or attribute.name not in prior:
                continue
            changed.append(attribute.name)
        elif contains_unknown(desired) or not _equal(attribute.name, desired, prior):
            changed.append(attribute.name)

    force_new = [name for name in changed if name in schema.force_new_names]

    if force_new:
        action = Action.REPLACE
    elif changed:
        action = Action.UPDATE
    else:
        action = Action.NOOP
    return PlannedChange(
        address=address,
        action=action,
        changed_attributes=tuple(changed),
        force_new_attributes=tuple(force_new),
    )


def plan_block(block: Block, state: State, provider: Provider, lookup) -> PlannedChange:
    if block.mode == "data":
        provider.data_source(block.type_name)
        return PlannedChange(address=block.address, action=Action.READ)

    resource = provider.resource(block.type_name)
    prior = state.get(block.address)
    inputs = block.resolve_inputs(lookup)
    return diff_block(
        block.address,
        resource.schema,
        inputs,
        prior.instance.attributes if prior is not None else None,
    )


def orphan_addresses(configuration: Configuration, state: State) -> list[str]:
    """Managed state entries with no block, ordered so dependents go first."""
    declared = set(configuration.addresses)
    orphans = [address for address in state.managed_addresses() if address not in declared]
    edges = {address: state.resources[address].dependencies for address in orphans}
    return list(reversed(topological_order(orphans, edges)))


def plan(configuration: Configuration, state: State, provider: Provider) -> Plan:
    """Compute the changes an apply would make, without making them."""
    result = Plan()
    unknown: set[str] = set()
    lookup = state_lookup(state, unknown=unknown)
    for block in order_blocks(configuration):
        change = plan_block(block, state, provider, lookup)
        if change.action in (Action.CREATE, Action.REPLACE):
            unknown.add(block.address)
        result.changes.append(change)

    for address in orphan_addresses(configuration, state):
        result.changes.append(PlannedChange(address=address, action=Action.DELETE))
    return result


def _equal(name: str, desired: Any, prior: dict[str, str]) -> bool:
    if isinstance(desired, (list, tuple, dict)):
        expected = flatten_attributes({name: desired})
        actual = {key: value for key, value in prior.items() if key == name or key.startswith(f"{name}.")}
        return expected == actual
    return prior.get(name) == format_scalar(desired)
