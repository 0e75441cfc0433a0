"""Dependency ordering for configuration blocks and state entries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from fss.engine.configuration import Block, Configuration
from fss.errors import ConfigurationError


def order_blocks(configuration: Configuration) -> list[Block]:
    """Return blocks in dependency order.

    Managed resources come before data sources; ties keep declaration order.
    Unknown references and cycles raise ``ConfigurationError``.
    """
    known = set(configuration.addresses)
    edges: dict[str, list[str]] = {}
    for block in configuration.blocks:
        for address in block.dependency_addresses():
            if address not in known:
                raise ConfigurationError(f"{block.address} references undeclared {address}")
            if address == block.address:
                raise ConfigurationError(f"{block.address} references itself")
        edges[block.address] = block.dependency_addresses()

    declared = configuration.managed_blocks + configuration.data_blocks
    ordered = topological_order([block.address for block in declared], edges)
    by_address = {block.address: block for block in configuration.blocks}
    return [by_address[address] for address in ordered]


def topological_order(addresses: Sequence[str], edges: Mapping[str, Sequence[str]]) -> list[str]:
    """Order ``addresses`` so each comes after its dependencies.

    Dependencies outside ``addresses`` are ignored. Among ready nodes the
    original sequence order wins.
    """
    members = set(addresses)
    remaining = {address: {dep for dep in edges.get(address, ()) if dep in members} for address in addresses}
    ordered: list[str] = []
    while remaining:
        ready = [address for address in addresses if address in remaining and not remaining[address]]
        if not ready:
            cycle = ", ".join(sorted(remaining))
            raise ConfigurationError(f"Dependency cycle between {cycle}")
        address = ready[0]
        ordered.append(address)
        del remaining[address]
        for deps in remaining.values():
            deps.discard(address)
    return ordered
