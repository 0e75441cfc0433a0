"""HTTP client adapter for a file storage control plane endpoint."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from fss.adapters.file_storage.base import FileStorageClient
from fss.errors import ServiceError
from fss.schemas.error import ErrorResponse
from fss.schemas.file_storage import (
    CreateMountTargetDetails,
    ExportSet,
    ExportSetSummary,
    ListExportSetsRequest,
    MountTarget,
    UpdateExportSetDetails,
    UpdateMountTargetDetails,
)

API_VERSION_PREFIX = "/20171215"

_summaries = TypeAdapter(list[ExportSetSummary])


class HttpFileStorageClient(FileStorageClient):
    """Talks to the control plane over HTTP using an ``httpx.Client``.

    Any ``httpx.Client`` works, including FastAPI's ``TestClient`` bound to
    the emulator app.
    """

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    @classmethod
    def from_endpoint(cls, endpoint: str, *, timeout_seconds: float = 30.0) -> HttpFileStorageClient:
        return cls(httpx.Client(base_url=endpoint, timeout=timeout_seconds))

    def create_mount_target(self, details: CreateMountTargetDetails) -> MountTarget:
        body = self._request("POST", "/mountTargets", json=_dump(details))
        return MountTarget.model_validate(body)

    def get_mount_target(self, mount_target_id: str) -> MountTarget:
        body = self._request("GET", f"/mountTargets/{mount_target_id}")
        return MountTarget.model_validate(body)

    def update_mount_target(self, mount_target_id: str, details: UpdateMountTargetDetails) -> MountTarget:
        body = self._request("PUT", f"/mountTargets/{mount_target_id}", json=_dump(details))
        return MountTarget.model_validate(body)

    def delete_mount_target(self, mount_target_id: str) -> None:
        self._request("DELETE", f"/mountTargets/{mount_target_id}")

    def get_export_set(self, export_set_id: str) -> ExportSet:
        body = self._request("GET", f"/exportSets/{export_set_id}")
        return ExportSet.model_validate(body)

    def update_export_set(self, export_set_id: str, details: UpdateExportSetDetails) -> ExportSet:
        body = self._request("PUT", f"/exportSets/{export_set_id}", json=_dump(details))
        return ExportSet.model_validate(body)

    def list_export_sets(self, request: ListExportSetsRequest) -> list[ExportSetSummary]:
        body = self._request("GET", "/exportSets", params=_dump(request))
        return _summaries.validate_python(body)

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._http.request(method, f"{API_VERSION_PREFIX}{path}", **kwargs)
        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

        try:
            payload = ErrorResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            payload = ErrorResponse(code="UnexpectedResponse", message=response.text or response.reason_phrase)
        raise ServiceError(
            status_code=response.status_code,
            code=payload.code,
            message=payload.message,
            details=payload.details,
        )


def _dump(model: Any) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["HttpFileStorageClient"]
