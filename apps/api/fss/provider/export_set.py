"""``file_storage_export_set`` resource.

Export sets are created and destroyed by the control plane together with
their mount target. Creating this resource adopts the export set of the
referenced mount target and applies the configured optional attributes to
it; destroying it only drops it from state.
"""

from __future__ import annotations

import logging
from typing import Any

from fss.core.logging_safety import safe_log_identifier
from fss.errors import ServiceError
from fss.provider.base import Resource, ResourceData
from fss.provider.schema import Attribute, ResourceSchema
from fss.provider.waiters import wait_for_state
from fss.schemas.file_storage import ExportSet, LifecycleState, UpdateExportSetDetails

logger = logging.getLogger(__name__)

_UPDATABLE_ATTRIBUTES = ("display_name", "max_fs_stat_bytes", "max_fs_stat_files")


class ExportSetResource(Resource):
    schema = ResourceSchema(
        type_name="file_storage_export_set",
        attributes=(
            Attribute("mount_target_id", required=True, force_new=True),
            Attribute("display_name", optional=True, computed=True),
            Attribute("max_fs_stat_bytes", optional=True, computed=True),
            Attribute("max_fs_stat_files", optional=True, computed=True),
            Attribute("availability_domain", computed=True),
            Attribute("compartment_id", computed=True),
            Attribute("state", computed=True),
            Attribute("time_created", computed=True),
        ),
    )

    def create(self, inputs: dict[str, Any]) -> ResourceData:
        mount_target_id = inputs["mount_target_id"]
        mount_target = wait_for_state(
            lambda: self._client.get_mount_target(mount_target_id),
            target={LifecycleState.ACTIVE},
            pending={LifecycleState.CREATING},
            policy=self._wait_policy,
            description="Mount target",
        )
        logger.info(
            "export_set.adopted export_set_id=%s mount_target_id=%s",
            safe_log_identifier(mount_target.export_set_id),
            safe_log_identifier(mount_target_id),
        )

        details = self._update_details(inputs, set(_UPDATABLE_ATTRIBUTES))
        if details.model_dump(exclude_none=True):
            self._client.update_export_set(mount_target.export_set_id, details)

        export_set = self._wait_active(mount_target.export_set_id)
        return self._to_data(export_set)

    def read(self, resource_id: str) -> ResourceData | None:
        try:
            export_set = self._client.get_export_set(resource_id)
        except ServiceError as exc:
            if exc.status_code == 404:
                return None
            raise
        if export_set.lifecycle_state is LifecycleState.DELETED:
            return None
        return self._to_data(export_set)

    def update(self, resource_id: str, inputs: dict[str, Any], changed: set[str]) -> ResourceData:
        details = self._update_details(inputs, changed)
        self._client.update_export_set(resource_id, details)
        return self._to_data(self._wait_active(resource_id))

    def delete(self, resource_id: str) -> None:
        # Export sets go away with their mount target; nothing to call here.
        logger.info("export_set.released export_set_id=%s", safe_log_identifier(resource_id))

    def _wait_active(self, export_set_id: str) -> ExportSet:
        return wait_for_state(
            lambda: self._client.get_export_set(export_set_id),
            target={LifecycleState.ACTIVE},
            pending={LifecycleState.CREATING},
            policy=self._wait_policy,
            description="Export set",
        )

    @staticmethod
    def _update_details(inputs: dict[str, Any], names: set[str]) -> UpdateExportSetDetails:
        return UpdateExportSetDetails(
            **{name: inputs.get(name) for name in _UPDATABLE_ATTRIBUTES if name in names}
        )

    @staticmethod
    def _to_data(export_set: ExportSet) -> ResourceData:
        return ResourceData(
            id=export_set.id,
            attributes={
                "mount_target_id": export_set.mount_target_id,
                "availability_domain": export_set.availability_domain,
                "compartment_id": export_set.compartment_id,
                "display_name": export_set.display_name,
                "max_fs_stat_bytes": export_set.max_fs_stat_bytes,
                "max_fs_stat_files": export_set.max_fs_stat_files,
                "state": export_set.lifecycle_state.value,
                "time_created": export_set.time_created.isoformat(),
            },
        )
