"""File storage client interfaces."""

from abc import ABC, abstractmethod

from fss.schemas.file_storage import (
    CreateMountTargetDetails,
    ExportSet,
    ExportSetSummary,
    ListExportSetsRequest,
    MountTarget,
    UpdateExportSetDetails,
    UpdateMountTargetDetails,
)


class FileStorageClient(ABC):
    """Transport-neutral file storage control plane client.

    Implementations raise ``ServiceError`` for control plane errors.
    """

    @abstractmethod
    def create_mount_target(self, details: CreateMountTargetDetails) -> MountTarget:
        """Create a mount target together with its export set."""

    @abstractmethod
    def get_mount_target(self, mount_target_id: str) -> MountTarget:
        """Fetch a mount target by id."""

    @abstractmethod
    def update_mount_target(self, mount_target_id: str, details: UpdateMountTargetDetails) -> MountTarget:
        """Update mutable mount target fields."""

    @abstractmethod
    def delete_mount_target(self, mount_target_id: str) -> None:
        """Start deleting a mount target."""

    @abstractmethod
    def get_export_set(self, export_set_id: str) -> ExportSet:
        """Fetch an export set by id."""

    @abstractmethod
    def update_export_set(self, export_set_id: str, details: UpdateExportSetDetails) -> ExportSet:
        """Update mutable export set fields."""

    @abstractmethod
    def list_export_sets(self, request: ListExportSetsRequest) -> list[ExportSetSummary]:
        """List export sets in a compartment and availability domain."""


__all__ = ["FileStorageClient"]
