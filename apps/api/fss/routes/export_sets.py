"""Export set routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from fss.routes.dependencies import get_export_set_service
from fss.schemas.error import ErrorResponse
from fss.schemas.file_storage import (
    ExportSet,
    ExportSetSummary,
    LifecycleState,
    ListExportSetsRequest,
    UpdateExportSetDetails,
)
from fss.services.export_sets import ExportSetService

router = APIRouter(prefix="/exportSets", tags=["ExportSets"])


@router.get("", response_model=list[ExportSetSummary])
async def list_export_sets(
    compartment_id: Annotated[str, Query(alias="compartmentId", min_length=1)],
    availability_domain: Annotated[str, Query(alias="availabilityDomain", min_length=1)],
    service: Annotated[ExportSetService, Depends(get_export_set_service)],
    display_name: Annotated[str | None, Query(alias="displayName")] = None,
    export_set_id: Annotated[str | None, Query(alias="id")] = None,
    lifecycle_state: Annotated[LifecycleState | None, Query(alias="lifecycleState")] = None,
) -> list[ExportSetSummary]:
    return service.list_export_sets(
        request=ListExportSetsRequest(
            compartment_id=compartment_id,
            availability_domain=availability_domain,
            display_name=display_name,
            id=export_set_id,
            lifecycle_state=lifecycle_state,
        )
    )


@router.get(
    "/{exportSetId}",
    response_model=ExportSet,
    responses={404: {"model": ErrorResponse}},
)
async def get_export_set(
    export_set_id: Annotated[str, Path(alias="exportSetId")],
    service: Annotated[ExportSetService, Depends(get_export_set_service)],
) -> ExportSet:
    return service.get_export_set(export_set_id=export_set_id)


@router.put(
    "/{exportSetId}",
    response_model=ExportSet,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_export_set(
    export_set_id: Annotated[str, Path(alias="exportSetId")],
    payload: UpdateExportSetDetails,
    service: Annotated[ExportSetService, Depends(get_export_set_service)],
) -> ExportSet:
    return service.update_export_set(export_set_id=export_set_id, details=payload)
