"""``file_storage_mount_target`` resource."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fss.core.logging_safety import safe_log_identifier
from fss.errors import ServiceError
from fss.provider.base import Resource, ResourceData
from fss.provider.schema import Attribute, ResourceSchema
from fss.provider.waiters import wait_for_state
from fss.schemas.file_storage import (
    CreateMountTargetDetails,
    LifecycleState,
    MountTarget,
    UpdateMountTargetDetails,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Deleted:
    id: str
    lifecycle_state: LifecycleState = LifecycleState.DELETED


class MountTargetResource(Resource):
    schema = ResourceSchema(
        type_name="file_storage_mount_target",
        attributes=(
            Attribute("availability_domain", required=True, force_new=True),
            Attribute("compartment_id", required=True, force_new=True),
            Attribute("subnet_id", required=True, force_new=True),
            Attribute("display_name", optional=True, computed=True),
            Attribute("export_set_id", computed=True),
            Attribute("state", computed=True),
            Attribute("time_created", computed=True),
        ),
    )

    def create(self, inputs: dict[str, Any]) -> ResourceData:
        created = self._client.create_mount_target(
            CreateMountTargetDetails(
                availability_domain=inputs["availability_domain"],
                compartment_id=inputs["compartment_id"],
                subnet_id=inputs["subnet_id"],
                display_name=inputs.get("display_name"),
            )
        )
        mount_target = wait_for_state(
            lambda: self._client.get_mount_target(created.id),
            target={LifecycleState.ACTIVE},
            pending={LifecycleState.CREATING},
            policy=self._wait_policy,
            description="Mount target",
        )
        return self._to_data(mount_target)

    def read(self, resource_id: str) -> ResourceData | None:
        try:
            mount_target = self._client.get_mount_target(resource_id)
        except ServiceError as exc:
            if exc.status_code == 404:
                return None
            raise
        if mount_target.lifecycle_state is LifecycleState.DELETED:
            return None
        return self._to_data(mount_target)

    def update(self, resource_id: str, inputs: dict[str, Any], changed: set[str]) -> ResourceData:
        details = UpdateMountTargetDetails(display_name=inputs.get("display_name") if "display_name" in changed else None)
        return self._to_data(self._client.update_mount_target(resource_id, details))

    def delete(self, resource_id: str) -> None:
        current = self._fetch_for_delete(resource_id)
        if current.lifecycle_state is LifecycleState.DELETED:
            return
        if current.lifecycle_state is not LifecycleState.DELETING:
            try:
                self._client.delete_mount_target(resource_id)
            except ServiceError as exc:
                if exc.status_code == 404:
                    return
                raise

        wait_for_state(
            lambda: self._fetch_for_delete(resource_id),
            target={LifecycleState.DELETED},
            pending={LifecycleState.DELETING},
            policy=self._wait_policy,
            description="Mount target deletion",
        )
        logger.info("mount_target.deleted mount_target_id=%s", safe_log_identifier(resource_id))

    def _fetch_for_delete(self, resource_id: str) -> MountTarget | _Deleted:
        try:
            return self._client.get_mount_target(resource_id)
        except ServiceError as exc:
            if exc.status_code == 404:
                return _Deleted(id=resource_id)
            raise

    @staticmethod
    def _to_data(mount_target: MountTarget) -> ResourceData:
        return ResourceData(
            id=mount_target.id,
            attributes={
                "availability_domain": mount_target.availability_domain,
                "compartment_id": mount_target.compartment_id,
                "subnet_id": mount_target.subnet_id,
                "display_name": mount_target.display_name,
                "export_set_id": mount_target.export_set_id,
                "state": mount_target.lifecycle_state.value,
                "time_created": mount_target.time_created.isoformat(),
            },
        )
