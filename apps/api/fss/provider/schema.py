"""Attribute schemas for resources and data sources."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Attribute:
    name: str
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False

    @property
    def is_input(self) -> bool:
        return self.required or self.optional


@dataclass(frozen=True, slots=True)
class ResourceSchema:
    type_name: str
    attributes: tuple[Attribute, ...]

    @property
    def inputs(self) -> tuple[Attribute, ...]:
        return tuple(attribute for attribute in self.attributes if attribute.is_input)

    @property
    def required_names(self) -> tuple[str, ...]:
        return tuple(attribute.name for attribute in self.attributes if attribute.required)

    @property
    def force_new_names(self) -> tuple[str, ...]:
        return tuple(attribute.name for attribute in self.attributes if attribute.force_new)
