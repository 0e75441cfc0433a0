"""Mount target routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from fss.routes.dependencies import get_mount_target_service
from fss.schemas.error import ErrorResponse
from fss.schemas.file_storage import CreateMountTargetDetails, MountTarget, UpdateMountTargetDetails
from fss.services.mount_targets import MountTargetService

router = APIRouter(prefix="/mountTargets", tags=["MountTargets"])


@router.post("", response_model=MountTarget)
async def create_mount_target(
    payload: CreateMountTargetDetails,
    service: Annotated[MountTargetService, Depends(get_mount_target_service)],
) -> MountTarget:
    return service.create_mount_target(details=payload)


@router.get(
    "/{mountTargetId}",
    response_model=MountTarget,
    responses={404: {"model": ErrorResponse}},
)
async def get_mount_target(
    mount_target_id: Annotated[str, Path(alias="mountTargetId")],
    service: Annotated[MountTargetService, Depends(get_mount_target_service)],
) -> MountTarget:
    return service.get_mount_target(mount_target_id=mount_target_id)


@router.put(
    "/{mountTargetId}",
    response_model=MountTarget,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_mount_target(
    mount_target_id: Annotated[str, Path(alias="mountTargetId")],
    payload: UpdateMountTargetDetails,
    service: Annotated[MountTargetService, Depends(get_mount_target_service)],
) -> MountTarget:
    return service.update_mount_target(mount_target_id=mount_target_id, details=payload)


@router.delete(
    "/{mountTargetId}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_mount_target(
    mount_target_id: Annotated[str, Path(alias="mountTargetId")],
    service: Annotated[MountTargetService, Depends(get_mount_target_service)],
) -> Response:
    service.delete_mount_target(mount_target_id=mount_target_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
