"""Apply, refresh and destroy against a provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fss.core.logging_safety import safe_log_identifier
from fss.engine.configuration import Block, Configuration
from fss.engine.graph import order_blocks, topological_order
from fss.engine.plan import Action, PlannedChange, orphan_addresses, plan_block, state_lookup
from fss.engine.state import InstanceState, ResourceState, State, flatten_attributes
from fss.provider import Provider, ResourceData

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplyResult:
    state: State
    applied: list[PlannedChange] = field(default_factory=list)

    def action_for(self, address: str) -> Action | None:
        for change in self.applied:
            if change.address == address:
                return change.action
        return None


def refresh(state: State, provider: Provider) -> State:
    """Re-read every managed instance; drop the ones that no longer exist."""
    refreshed = state.model_copy(deep=True)
    for address in refreshed.managed_addresses():
        entry = refreshed.resources[address]
        data = provider.resource(entry.type).read(entry.instance.id)
        if data is None:
            logger.warning(
                "refresh.gone address=%s resource_id=%s",
                address,
                safe_log_identifier(entry.instance.id),
            )
            refreshed.remove(address)
            continue
        entry.instance = InstanceState(id=data.id, attributes=flatten_attributes(data.attributes))
    return refreshed


def apply(configuration: Configuration, state: State, provider: Provider) -> ApplyResult:
    """Converge remote objects and state on ``configuration``.

    Each block is planned just before it is applied, once everything it
    references has been applied, so no value is unknown at apply time.
    Replacement destroys the old object before creating the new one. Orphans
    are destroyed last, dependents first. ``state`` is updated in place so a
    failed apply still records everything it created.
    """
    result = ApplyResult(state=state)
    current = result.state
    lookup = state_lookup(current, strict=True)

    for block in order_blocks(configuration):
        change = plan_block(block, current, provider, lookup)
        _apply_block(block, change, current, provider, lookup)
        result.applied.append(change)

    for address in orphan_addresses(configuration, current):
        entry = current.resources[address]
        _log_change(address, Action.DELETE, entry.instance.id)
        provider.resource(entry.type).delete(entry.instance.id)
        current.remove(address)
        result.applied.append(PlannedChange(address=address, action=Action.DELETE))

    declared = set(configuration.addresses)
    for address in [address for address, entry in current.resources.items() if entry.mode == "data"]:
        if address not in declared:
            current.remove(address)

    return result


def destroy(state: State, provider: Provider) -> State:
    """Delete every managed instance in state, dependents first."""
    current = state.model_copy(deep=True)
    addresses = current.managed_addresses()
    edges = {address: current.resources[address].dependencies for address in addresses}
    for address in reversed(topological_order(addresses, edges)):
        entry = current.resources[address]
        _log_change(address, Action.DELETE, entry.instance.id)
        provider.resource(entry.type).delete(entry.instance.id)
        current.remove(address)
    for address in list(current.resources):
        current.remove(address)
    return current


def _apply_block(block: Block, change: PlannedChange, state: State, provider: Provider, lookup) -> None:
    inputs = block.resolve_inputs(lookup)

    if change.action is Action.READ:
        data = provider.data_source(block.type_name).read(inputs)
        _store(state, block, data, mode="data")
        return

    if change.action is Action.NOOP:
        return

    resource = provider.resource(block.type_name)
    prior = state.get(block.address)

    if change.action is Action.REPLACE and prior is not None:
        _log_change(block.address, Action.REPLACE, prior.instance.id, fields=change.force_new_attributes)
        resource.delete(prior.instance.id)
        state.remove(block.address)

    if change.action in (Action.CREATE, Action.REPLACE):
        data = resource.create(inputs)
        _log_change(block.address, Action.CREATE, data.id)
        _store(state, block, data, mode="managed")
        return

    if change.action is Action.UPDATE and prior is not None:
        data = resource.update(prior.instance.id, inputs, set(change.changed_attributes))
        _log_change(block.address, Action.UPDATE, data.id, fields=change.changed_attributes)
        _store(state, block, data, mode="managed")


def _store(state: State, block: Block, data: ResourceData, *, mode: str) -> None:
    state.put(
        block.address,
        ResourceState(
            mode=mode,
            type=block.type_name,
            dependencies=block.dependency_addresses(),
            instance=InstanceState(id=data.id, attributes=flatten_attributes(data.attributes)),
        ),
    )


def _log_change(address: str, action: Action, resource_id: str, *, fields: tuple[str, ...] = ()) -> None:
    logger.info(
        "apply.%s address=%s resource_id=%s fields=%s",
        action.value,
        address,
        safe_log_identifier(resource_id),
        ",".join(fields) or "-",
    )
