"""Resource and data source interfaces implemented by the provider."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from fss.adapters.file_storage import FileStorageClient
from fss.provider.schema import ResourceSchema
from fss.provider.waiters import WaitPolicy


@dataclass(slots=True)
class ResourceData:
    """Identity and attribute values returned by CRUD operations."""

    id: str
    attributes: dict[str, Any] = field(default_factory=dict)


class Resource(ABC):
    schema: ClassVar[ResourceSchema]

    def __init__(self, client: FileStorageClient, wait_policy: WaitPolicy) -> None:
        self._client = client
        self._wait_policy = wait_policy

    @abstractmethod
    def create(self, inputs: dict[str, Any]) -> ResourceData:
        """Create the remote object and return its settled state."""

    @abstractmethod
    def read(self, resource_id: str) -> ResourceData | None:
        """Return current remote state, or ``None`` once the object is gone."""

    @abstractmethod
    def update(self, resource_id: str, inputs: dict[str, Any], changed: set[str]) -> ResourceData:
        """Apply in-place changes to non force-new attributes."""

    @abstractmethod
    def delete(self, resource_id: str) -> None:
        """Remove the remote object."""

    def import_resource(self, resource_id: str) -> ResourceData | None:
        return self.read(resource_id)


class DataSource(ABC):
    schema: ClassVar[ResourceSchema]

    def __init__(self, client: FileStorageClient) -> None:
        self._client = client

    @abstractmethod
    def read(self, inputs: dict[str, Any]) -> ResourceData:
        """Run the query described by ``inputs``."""
