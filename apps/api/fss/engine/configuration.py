"""Structured desired-state configuration.

Blocks reference each other through explicit ``Ref`` values instead of
interpolated names; the engine resolves references in dependency order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from fss.errors import ConfigurationError

BlockMode = Literal["managed", "data"]


class Ref(BaseModel):
    """Reference to an attribute of another block, by address."""

    model_config = ConfigDict(frozen=True)

    address: str
    attribute: str = "id"


class _Unknown:
    """Placeholder for a value that is only known after apply."""

    _instance: _Unknown | None = None

    def __new__(cls) -> _Unknown:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<unknown>"


UNKNOWN = _Unknown()


class Block(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mode: ClassVar[BlockMode] = "managed"
    type_name: ClassVar[str]

    name: str = Field(min_length=1)
    depends_on: list[str] = Field(default_factory=list)

    @property
    def address(self) -> str:
        if self.mode == "data":
            return f"data.{self.type_name}.{self.name}"
        return f"{self.type_name}.{self.name}"

    def raw_inputs(self) -> dict[str, Any]:
        return {
            key: getattr(self, key)
            for key in type(self).model_fields
            if key not in {"name", "depends_on"}
        }

    def references(self) -> list[Ref]:
        return list(_iter_refs(self.raw_inputs()))

    def dependency_addresses(self) -> list[str]:
        addresses: list[str] = []
        for address in [ref.address for ref in self.references()] + list(self.depends_on):
            if address not in addresses:
                addresses.append(address)
        return addresses

    def resolve_inputs(self, lookup: Callable[[Ref], Any]) -> dict[str, Any]:
        """Return inputs as plain data with every ``Ref`` replaced by ``lookup(ref)``."""
        return {key: _resolve(value, lookup) for key, value in self.raw_inputs().items()}


class MountTargetBlock(Block):
    type_name: ClassVar[str] = "file_storage_mount_target"

    availability_domain: str | Ref
    compartment_id: str | Ref
    subnet_id: str | Ref
    display_name: str | Ref | None = None


class ExportSetBlock(Block):
    type_name: ClassVar[str] = "file_storage_export_set"

    mount_target_id: str | Ref
    display_name: str | Ref | None = None
    max_fs_stat_bytes: int | None = Field(default=None, ge=0)
    max_fs_stat_files: int | None = Field(default=None, ge=0)


class FilterBlock(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    values: list[str | Ref] = Field(min_length=1)
    regex: bool = False


class ExportSetsDataBlock(Block):
    mode: ClassVar[BlockMode] = "data"
    type_name: ClassVar[str] = "file_storage_export_sets"

    availability_domain: str | Ref
    compartment_id: str | Ref
    display_name: str | Ref | None = None
    id: str | Ref | None = None
    state: str | None = None
    filter: list[FilterBlock] = Field(default_factory=list)


@dataclass(slots=True)
class Configuration:
    """An ordered collection of blocks making up one desired state."""

    blocks: list[Block] = field(default_factory=list)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for block in self.blocks:
            if block.address in seen:
                raise ConfigurationError(f"Duplicate block {block.address}")
            seen.add(block.address)

    def merge(self, *others: Configuration) -> Configuration:
        blocks = list(self.blocks)
        for other in others:
            blocks.extend(other.blocks)
        return Configuration(blocks)

    def get(self, address: str) -> Block | None:
        for block in self.blocks:
            if block.address == address:
                return block
        return None

    @property
    def addresses(self) -> list[str]:
        return [block.address for block in self.blocks]

    @property
    def managed_blocks(self) -> list[Block]:
        return [block for block in self.blocks if block.mode == "managed"]

    @property
    def data_blocks(self) -> list[Block]:
        return [block for block in self.blocks if block.mode == "data"]


def _iter_refs(value: Any) -> Iterator[Ref]:
    if isinstance(value, Ref):
        yield value
    elif isinstance(value, BaseModel):
        for key in type(value).model_fields:
            yield from _iter_refs(getattr(value, key))
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _iter_refs(item)
    elif isinstance(value, dict):
        for item in value.values():
            yield from _iter_refs(item)


def _resolve(value: Any, lookup: Callable[[Ref], Any]) -> Any:
    if isinstance(value, Ref):
        return lookup(value)
    if isinstance(value, BaseModel):
        return {key: _resolve(getattr(value, key), lookup) for key in type(value).model_fields}
    if isinstance(value, (list, tuple)):
        return [_resolve(item, lookup) for item in value]
    if isinstance(value, dict):
        return {key: _resolve(item, lookup) for key, item in value.items()}
    return value


def contains_unknown(value: Any) -> bool:
    if value is UNKNOWN:
        return True
    if isinstance(value, (list, tuple)):
        return any(contains_unknown(item) for item in value)
    if isinstance(value, dict):
        return any(contains_unknown(item) for item in value.values())
    return False
