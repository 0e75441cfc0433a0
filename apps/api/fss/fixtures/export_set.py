"""Configuration fixtures for export set lifecycle scenarios."""

from __future__ import annotations

from pydantic import BaseModel

from fss.engine.configuration import (
    Configuration,
    ExportSetBlock,
    ExportSetsDataBlock,
    FilterBlock,
    MountTargetBlock,
    Ref,
)

MOUNT_TARGET = "file_storage_mount_target.test_mount_target"
MOUNT_TARGET_2 = "file_storage_mount_target.test_mount_target_2"
EXPORT_SET = "file_storage_export_set.test_export_set"
EXPORT_SETS_QUERY = "data.file_storage_export_sets.test_export_sets"

DEFAULT_SUBNET_ID = "ocid1.subnet.oc1.phx.exportsetharness"


class ExportSetVariables(BaseModel):
    availability_domain: str = "kIdk:PHX-AD-1"
    display_name: str = "export set display name"
    max_bytes: int = 23843202333
    max_files: int = 223442
    state: str = "ACTIVE"
    subnet_id: str = DEFAULT_SUBNET_ID


def mount_target_dependencies(
    compartment_id: str,
    variables: ExportSetVariables,
    *,
    name: str = "test_mount_target",
) -> Configuration:
    return Configuration(
        [
            MountTargetBlock(
                name=name,
                availability_domain=variables.availability_domain,
                compartment_id=compartment_id,
                subnet_id=variables.subnet_id,
            )
        ]
    )


def required_only_config(compartment_id: str, variables: ExportSetVariables | None = None) -> Configuration:
    """Mount target plus an export set that sets only its parent reference."""
    variables = variables or ExportSetVariables()
    return mount_target_dependencies(compartment_id, variables).merge(
        Configuration([ExportSetBlock(name="test_export_set", mount_target_id=Ref(address=MOUNT_TARGET))])
    )


def full_config(compartment_id: str, variables: ExportSetVariables | None = None) -> Configuration:
    """Mount target plus an export set with every optional attribute set."""
    variables = variables or ExportSetVariables()
    return mount_target_dependencies(compartment_id, variables).merge(
        Configuration([_full_export_set(MOUNT_TARGET, variables)])
    )


def force_new_config(compartment_id: str, variables: ExportSetVariables | None = None) -> Configuration:
    """Point the export set at a second mount target; the first one is dropped."""
    variables = variables or ExportSetVariables(display_name="export set on mount target 2")
    return mount_target_dependencies(compartment_id, variables, name="test_mount_target_2").merge(
        Configuration([_full_export_set(MOUNT_TARGET_2, variables)])
    )


def query_config(compartment_id: str, variables: ExportSetVariables | None = None) -> Configuration:
    """Full configuration plus a query narrowed to the mount target's export set."""
    variables = variables or ExportSetVariables()
    export_set_id = Ref(address=MOUNT_TARGET, attribute="export_set_id")
    query = ExportSetsDataBlock(
        name="test_export_sets",
        availability_domain=variables.availability_domain,
        compartment_id=compartment_id,
        display_name=variables.display_name,
        id=export_set_id,
        state=variables.state,
        filter=[FilterBlock(name="id", values=[export_set_id])],
        depends_on=[EXPORT_SET],
    )
    return full_config(compartment_id, variables).merge(Configuration([query]))


def _full_export_set(mount_target_address: str, variables: ExportSetVariables) -> ExportSetBlock:
    return ExportSetBlock(
        name="test_export_set",
        mount_target_id=Ref(address=mount_target_address),
        display_name=variables.display_name,
        max_fs_stat_bytes=variables.max_bytes,
        max_fs_stat_files=variables.max_files,
    )
