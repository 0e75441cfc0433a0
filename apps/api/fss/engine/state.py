"""Persisted state: what the engine knows about applied blocks."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class InstanceState(BaseModel):
    id: str
    attributes: dict[str, str] = Field(default_factory=dict)


class ResourceState(BaseModel):
    mode: Literal["managed", "data"] = "managed"
    type: str
    dependencies: list[str] = Field(default_factory=list)
    instance: InstanceState


class State(BaseModel):
    serial: int = 0
    resources: dict[str, ResourceState] = Field(default_factory=dict)

    def get(self, address: str) -> ResourceState | None:
        return self.resources.get(address)

    def put(self, address: str, resource: ResourceState) -> None:
        self.resources[address] = resource
        self.serial += 1

    def remove(self, address: str) -> None:
        if self.resources.pop(address, None) is not None:
            self.serial += 1

    def managed_addresses(self) -> list[str]:
        return [address for address, resource in self.resources.items() if resource.mode == "managed"]

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, text: str) -> State:
        return cls.model_validate_json(text)


def format_scalar(value: Any) -> str:
    """Render a scalar the way flat state stores it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def flatten_attributes(values: Mapping[str, Any]) -> dict[str, str]:
    """Flatten nested attribute values into dotted string keys.

    Lists record their length under ``<key>.#`` and maps under ``<key>.%``;
    ``None`` values are omitted.
    """
    flat: dict[str, str] = {}
    for key, value in values.items():
        _flatten_into(flat, key, value)
    return flat


def _flatten_into(flat: dict[str, str], key: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, Mapping):
        flat[f"{key}.%"] = str(len(value))
        for sub_key, sub_value in value.items():
            _flatten_into(flat, f"{key}.{sub_key}", sub_value)
        return
    if isinstance(value, (list, tuple)):
        flat[f"{key}.#"] = str(len(value))
        for index, item in enumerate(value):
            _flatten_into(flat, f"{key}.{index}", item)
        return
    flat[key] = format_scalar(value)
