"""Provider: the set of resource and data source implementations."""

from __future__ import annotations

from fss.adapters.file_storage import FileStorageClient, build_client
from fss.core.config import Settings
from fss.errors import ConfigurationError
from fss.provider.base import DataSource, Resource
from fss.provider.export_set import ExportSetResource
from fss.provider.export_sets_data import ExportSetsDataSource
from fss.provider.mount_target import MountTargetResource
from fss.provider.waiters import WaitPolicy

_RESOURCE_TYPES: tuple[type[Resource], ...] = (ExportSetResource, MountTargetResource)
_DATA_SOURCE_TYPES: tuple[type[DataSource], ...] = (ExportSetsDataSource,)


class Provider:
    def __init__(self, client: FileStorageClient, *, wait_policy: WaitPolicy | None = None) -> None:
        policy = wait_policy or WaitPolicy()
        self.client = client
        self._resources = {cls.schema.type_name: cls(client, policy) for cls in _RESOURCE_TYPES}
        self._data_sources = {cls.schema.type_name: cls(client) for cls in _DATA_SOURCE_TYPES}

    @classmethod
    def from_settings(cls, settings: Settings) -> Provider:
        return cls(build_client(settings), wait_policy=WaitPolicy.from_settings(settings))

    def resource(self, type_name: str) -> Resource:
        try:
            return self._resources[type_name]
        except KeyError:
            raise ConfigurationError(f"Unsupported resource type {type_name}") from None

    def data_source(self, type_name: str) -> DataSource:
        try:
            return self._data_sources[type_name]
        except KeyError:
            raise ConfigurationError(f"Unsupported data source type {type_name}") from None
