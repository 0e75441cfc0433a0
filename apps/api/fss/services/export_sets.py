"""Export set service layer."""

import logging

from fss.core.logging_safety import safe_log_identifier
from fss.errors import ServiceError, not_found_error
from fss.repositories.memory import ExportSetRecord, InMemoryStore
from fss.schemas.file_storage import (
    ExportSet,
    ExportSetSummary,
    ListExportSetsRequest,
    UpdateExportSetDetails,
)

logger = logging.getLogger(__name__)


class ExportSetService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get_export_set(self, *, export_set_id: str) -> ExportSet:
        return self._to_export_set(self._require(export_set_id))

    def update_export_set(self, *, export_set_id: str, details: UpdateExportSetDetails) -> ExportSet:
        record = self._require(export_set_id)
        try:
            self._store.update_export_set(
                export_set=record,
                display_name=details.display_name,
                max_fs_stat_bytes=details.max_fs_stat_bytes,
                max_fs_stat_files=details.max_fs_stat_files,
            )
        except RuntimeError as exc:
            logger.error(
                "export_set.update_failed export_set_id=%s reason=%s",
                safe_log_identifier(record.id),
                exc,
            )
            raise ServiceError(
                status_code=500,
                code="InternalServerError",
                message="Export set update failed",
                details={"reason": str(exc)},
            ) from exc

        logger.info(
            "export_set.updated export_set_id=%s fields=%s",
            safe_log_identifier(record.id),
            ",".join(sorted(details.model_dump(exclude_none=True))),
        )
        return self._to_export_set(record)

    def list_export_sets(self, *, request: ListExportSetsRequest) -> list[ExportSetSummary]:
        return [
            ExportSetSummary(
                id=record.id,
                availability_domain=record.availability_domain,
                compartment_id=record.compartment_id,
                display_name=record.display_name,
                lifecycle_state=record.lifecycle_state,
                time_created=record.time_created,
            )
            for record in self._store.list_export_sets(
                compartment_id=request.compartment_id,
                availability_domain=request.availability_domain,
                display_name=request.display_name,
                export_set_id=request.id,
                lifecycle_state=request.lifecycle_state,
            )
        ]

    def _require(self, export_set_id: str) -> ExportSetRecord:
        record = self._store.get_export_set(export_set_id)
        if record is None:
            raise not_found_error()
        return record

    @staticmethod
    def _to_export_set(record: ExportSetRecord) -> ExportSet:
        return ExportSet(
            id=record.id,
            mount_target_id=record.mount_target_id,
            availability_domain=record.availability_domain,
            compartment_id=record.compartment_id,
            display_name=record.display_name,
            max_fs_stat_bytes=record.max_fs_stat_bytes,
            max_fs_stat_files=record.max_fs_stat_files,
            lifecycle_state=record.lifecycle_state,
            time_created=record.time_created,
        )
