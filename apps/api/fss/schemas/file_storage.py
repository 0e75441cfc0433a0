"""File storage control plane schemas.

Wire payloads use camelCase field names; Python code addresses fields by
their snake_case names.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LifecycleState(str, Enum):
    CREATING = "CREATING"
    ACTIVE = "ACTIVE"
    DELETING = "DELETING"
    DELETED = "DELETED"
    FAILED = "FAILED"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateMountTargetDetails(_WireModel):
    availability_domain: str = Field(min_length=1)
    compartment_id: str = Field(min_length=1)
    subnet_id: str = Field(min_length=1)
    display_name: str | None = None


class UpdateMountTargetDetails(_WireModel):
    display_name: str | None = None


class MountTarget(_WireModel):
    id: str
    availability_domain: str
    compartment_id: str
    subnet_id: str
    display_name: str
    export_set_id: str
    lifecycle_state: LifecycleState
    time_created: datetime


class UpdateExportSetDetails(_WireModel):
    display_name: str | None = None
    max_fs_stat_bytes: int | None = Field(default=None, ge=0)
    max_fs_stat_files: int | None = Field(default=None, ge=0)


class ExportSet(_WireModel):
    id: str
    mount_target_id: str
    availability_domain: str
    compartment_id: str
    display_name: str
    max_fs_stat_bytes: int
    max_fs_stat_files: int
    lifecycle_state: LifecycleState
    time_created: datetime


class ExportSetSummary(_WireModel):
    id: str
    availability_domain: str
    compartment_id: str
    display_name: str
    lifecycle_state: LifecycleState
    time_created: datetime


class ListExportSetsRequest(_WireModel):
    compartment_id: str
    availability_domain: str
    display_name: str | None = None
    id: str | None = None
    lifecycle_state: LifecycleState | None = None
