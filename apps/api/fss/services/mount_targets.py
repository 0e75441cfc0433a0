"""Mount target service layer."""

import logging

from fss.core.logging_safety import safe_log_identifier
from fss.errors import not_found_error
from fss.repositories.memory import InMemoryStore, MountTargetRecord
from fss.schemas.file_storage import CreateMountTargetDetails, MountTarget, UpdateMountTargetDetails

logger = logging.getLogger(__name__)


class MountTargetService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def create_mount_target(self, *, details: CreateMountTargetDetails) -> MountTarget:
        record = self._store.create_mount_target(
            availability_domain=details.availability_domain,
            compartment_id=details.compartment_id,
            subnet_id=details.subnet_id,
            display_name=details.display_name,
        )
        logger.info(
            "mount_target.created mount_target_id=%s export_set_id=%s state=%s",
            safe_log_identifier(record.id),
            safe_log_identifier(record.export_set_id),
            record.lifecycle_state.value,
        )
        return self._to_mount_target(record)

    def get_mount_target(self, *, mount_target_id: str) -> MountTarget:
        return self._to_mount_target(self._require(mount_target_id))

    def update_mount_target(self, *, mount_target_id: str, details: UpdateMountTargetDetails) -> MountTarget:
        record = self._require(mount_target_id)
        self._store.update_mount_target(mount_target=record, display_name=details.display_name)
        return self._to_mount_target(record)

    def delete_mount_target(self, *, mount_target_id: str) -> None:
        record = self._require(mount_target_id)
        self._store.delete_mount_target(mount_target=record)
        logger.info(
            "mount_target.deleting mount_target_id=%s state=%s",
            safe_log_identifier(record.id),
            record.lifecycle_state.value,
        )

    def _require(self, mount_target_id: str) -> MountTargetRecord:
        record = self._store.get_mount_target(mount_target_id)
        if record is None:
            raise not_found_error()
        return record

    @staticmethod
    def _to_mount_target(record: MountTargetRecord) -> MountTarget:
        return MountTarget(
            id=record.id,
            availability_domain=record.availability_domain,
            compartment_id=record.compartment_id,
            subnet_id=record.subnet_id,
            display_name=record.display_name,
            export_set_id=record.export_set_id,
            lifecycle_state=record.lifecycle_state,
            time_created=record.time_created,
        )
