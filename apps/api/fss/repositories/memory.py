"""In-memory file storage control plane used by the emulator and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from fss.domain.lifecycle_fsm import ensure_transition, ensure_updatable
from fss.schemas.file_storage import LifecycleState

# Opaque server-side quota defaults for a freshly created export set.
DEFAULT_MAX_FS_STAT_BYTES = 9223372036854775807
DEFAULT_MAX_FS_STAT_FILES = 9223372036854775807


def _ocid(resource_type: str, region: str) -> str:
    return f"ocid1.{resource_type}.oc1.{region}.{uuid4().hex}"


@dataclass(slots=True)
class ExportSetRecord:
    id: str
    mount_target_id: str
    availability_domain: str
    compartment_id: str
    display_name: str
    max_fs_stat_bytes: int
    max_fs_stat_files: int
    lifecycle_state: LifecycleState
    time_created: datetime


@dataclass(slots=True)
class MountTargetRecord:
    id: str
    availability_domain: str
    compartment_id: str
    subnet_id: str
    display_name: str
    export_set_id: str
    lifecycle_state: LifecycleState
    time_created: datetime
    pending_state: LifecycleState | None = None
    pending_reads: int = 0


@dataclass(slots=True)
class InMemoryStore:
    """Deterministic control plane state for the emulator and tests.

    ``activation_delay_reads`` keeps newly created or deleted mount targets in
    their transitional state for that many reads, so callers have to poll the
    way they would against a real endpoint.
    """

    region: str = "phx"
    mount_targets: dict[str, MountTargetRecord] = field(default_factory=dict)
    export_sets: dict[str, ExportSetRecord] = field(default_factory=dict)
    mount_target_write_count: int = 0
    export_set_write_count: int = 0
    activation_delay_reads: int = 0
    update_failure_message: str | None = None

    def create_mount_target(
        self,
        *,
        availability_domain: str,
        compartment_id: str,
        subnet_id: str,
        display_name: str | None = None,
    ) -> MountTargetRecord:
        now = datetime.now(UTC)
        mount_target_id = _ocid("mounttarget", self.region)
        name = display_name or f"MountTarget-{now.strftime('%Y%m%d%H%M%S')}"
        export_set = ExportSetRecord(
            id=_ocid("exportset", self.region),
            mount_target_id=mount_target_id,
            availability_domain=availability_domain,
            compartment_id=compartment_id,
            display_name=f"{name} - export set",
            max_fs_stat_bytes=DEFAULT_MAX_FS_STAT_BYTES,
            max_fs_stat_files=DEFAULT_MAX_FS_STAT_FILES,
            lifecycle_state=LifecycleState.CREATING,
            time_created=now,
        )
        mount_target = MountTargetRecord(
            id=mount_target_id,
            availability_domain=availability_domain,
            compartment_id=compartment_id,
            subnet_id=subnet_id,
            display_name=name,
            export_set_id=export_set.id,
            lifecycle_state=LifecycleState.CREATING,
            time_created=now,
        )
        self.mount_targets[mount_target.id] = mount_target
        self.export_sets[export_set.id] = export_set
        self.mount_target_write_count += 1
        self.export_set_write_count += 1
        self._schedule(mount_target, LifecycleState.ACTIVE)
        return mount_target

    def get_mount_target(self, mount_target_id: str) -> MountTargetRecord | None:
        mount_target = self.mount_targets.get(mount_target_id)
        if mount_target is not None:
            self._advance(mount_target)
        return mount_target

    def update_mount_target(self, *, mount_target: MountTargetRecord, display_name: str | None) -> None:
        ensure_updatable(mount_target.lifecycle_state)
        if display_name is not None:
            mount_target.display_name = display_name
        self.mount_target_write_count += 1

    def delete_mount_target(self, *, mount_target: MountTargetRecord) -> None:
        """Start deleting a mount target; its export set goes down with it."""
        self._transition(mount_target, LifecycleState.DELETING)
        self.mount_target_write_count += 1
        self._schedule(mount_target, LifecycleState.DELETED)

    def get_export_set(self, export_set_id: str) -> ExportSetRecord | None:
        export_set = self.export_sets.get(export_set_id)
        if export_set is None:
            return None
        mount_target = self.mount_targets.get(export_set.mount_target_id)
        if mount_target is not None:
            self._advance(mount_target)
        return export_set

    def update_export_set(
        self,
        *,
        export_set: ExportSetRecord,
        display_name: str | None = None,
        max_fs_stat_bytes: int | None = None,
        max_fs_stat_files: int | None = None,
    ) -> None:
        if self.update_failure_message is not None:
            message = self.update_failure_message
            self.update_failure_message = None
            raise RuntimeError(message)

        ensure_updatable(export_set.lifecycle_state)
        # Omitted fields keep their current values.
        if display_name is not None:
            export_set.display_name = display_name
        if max_fs_stat_bytes is not None:
            export_set.max_fs_stat_bytes = max_fs_stat_bytes
        if max_fs_stat_files is not None:
            export_set.max_fs_stat_files = max_fs_stat_files
        self.export_set_write_count += 1

    def list_export_sets(
        self,
        *,
        compartment_id: str,
        availability_domain: str,
        display_name: str | None = None,
        export_set_id: str | None = None,
        lifecycle_state: LifecycleState | None = None,
    ) -> list[ExportSetRecord]:
        for mount_target in list(self.mount_targets.values()):
            self._advance(mount_target)

        export_sets = [
            record
            for record in self.export_sets.values()
            if record.compartment_id == compartment_id
            and record.availability_domain == availability_domain
            and (display_name is None or record.display_name == display_name)
            and (export_set_id is None or record.id == export_set_id)
            and (lifecycle_state is None or record.lifecycle_state is lifecycle_state)
        ]
        export_sets.sort(key=lambda record: record.time_created)
        return export_sets

    def _schedule(self, mount_target: MountTargetRecord, target: LifecycleState) -> None:
        if self.activation_delay_reads <= 0:
            self._transition(mount_target, target)
            return
        mount_target.pending_state = target
        mount_target.pending_reads = self.activation_delay_reads

    def _advance(self, mount_target: MountTargetRecord) -> None:
        if mount_target.pending_state is None:
            return
        mount_target.pending_reads -= 1
        if mount_target.pending_reads > 0:
            return
        target = mount_target.pending_state
        mount_target.pending_state = None
        mount_target.pending_reads = 0
        self._transition(mount_target, target)

    def _transition(self, mount_target: MountTargetRecord, new_state: LifecycleState) -> None:
        """Move a mount target and its export set through the lifecycle together."""
        ensure_transition(mount_target.lifecycle_state, new_state)
        mount_target.lifecycle_state = new_state
        export_set = self.export_sets.get(mount_target.export_set_id)
        if export_set is not None and export_set.lifecycle_state is not new_state:
            ensure_transition(export_set.lifecycle_state, new_state)
            export_set.lifecycle_state = new_state
