"""Client adapter that calls the emulator's services without a transport."""

from fss.adapters.file_storage.base import FileStorageClient
from fss.repositories.memory import InMemoryStore
from fss.schemas.file_storage import (
    CreateMountTargetDetails,
    ExportSet,
    ExportSetSummary,
    ListExportSetsRequest,
    MountTarget,
    UpdateExportSetDetails,
    UpdateMountTargetDetails,
)
from fss.services.export_sets import ExportSetService
from fss.services.mount_targets import MountTargetService


class InProcessFileStorageClient(FileStorageClient):
    """Backs the provider with an ``InMemoryStore`` in the same process."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store if store is not None else InMemoryStore()
        self._mount_targets = MountTargetService(self.store)
        self._export_sets = ExportSetService(self.store)

    def create_mount_target(self, details: CreateMountTargetDetails) -> MountTarget:
        return self._mount_targets.create_mount_target(details=details)

    def get_mount_target(self, mount_target_id: str) -> MountTarget:
        return self._mount_targets.get_mount_target(mount_target_id=mount_target_id)

    def update_mount_target(self, mount_target_id: str, details: UpdateMountTargetDetails) -> MountTarget:
        return self._mount_targets.update_mount_target(mount_target_id=mount_target_id, details=details)

    def delete_mount_target(self, mount_target_id: str) -> None:
        self._mount_targets.delete_mount_target(mount_target_id=mount_target_id)

    def get_export_set(self, export_set_id: str) -> ExportSet:
        return self._export_sets.get_export_set(export_set_id=export_set_id)

    def update_export_set(self, export_set_id: str, details: UpdateExportSetDetails) -> ExportSet:
        return self._export_sets.update_export_set(export_set_id=export_set_id, details=details)

    def list_export_sets(self, request: ListExportSetsRequest) -> list[ExportSetSummary]:
        return self._export_sets.list_export_sets(request=request)


__all__ = ["InProcessFileStorageClient"]
