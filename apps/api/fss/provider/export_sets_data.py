"""``file_storage_export_sets`` data source."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from fss.errors import ConfigurationError
from fss.provider.base import DataSource, ResourceData
from fss.provider.filters import apply_filters
from fss.provider.schema import Attribute, ResourceSchema
from fss.schemas.file_storage import LifecycleState, ListExportSetsRequest


class ExportSetsDataSource(DataSource):
    schema = ResourceSchema(
        type_name="file_storage_export_sets",
        attributes=(
            Attribute("availability_domain", required=True),
            Attribute("compartment_id", required=True),
            Attribute("display_name", optional=True),
            Attribute("id", optional=True),
            Attribute("state", optional=True),
            Attribute("filter", optional=True),
            Attribute("export_sets", computed=True),
        ),
    )

    def read(self, inputs: dict[str, Any]) -> ResourceData:
        request = ListExportSetsRequest(
            compartment_id=inputs["compartment_id"],
            availability_domain=inputs["availability_domain"],
            display_name=inputs.get("display_name"),
            id=inputs.get("id"),
            lifecycle_state=self._lifecycle_state(inputs.get("state")),
        )
        items = [
            {
                "id": summary.id,
                "availability_domain": summary.availability_domain,
                "compartment_id": summary.compartment_id,
                "display_name": summary.display_name,
                "state": summary.lifecycle_state.value,
                "time_created": summary.time_created.isoformat(),
            }
            for summary in self._client.list_export_sets(request)
        ]
        matches = apply_filters(items, inputs.get("filter") or [])

        attributes = {key: value for key, value in inputs.items() if value is not None and value != []}
        attributes["export_sets"] = matches
        return ResourceData(id=self._query_id(inputs), attributes=attributes)

    @staticmethod
    def _lifecycle_state(value: str | None) -> LifecycleState | None:
        if value is None:
            return None
        try:
            return LifecycleState(value)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown export set state {value!r}") from exc

    @staticmethod
    def _query_id(inputs: dict[str, Any]) -> str:
        digest = hashlib.sha256(json.dumps(inputs, sort_keys=True, default=str).encode("utf-8")).hexdigest()
        return f"ExportSetsDataSource-{digest[:16]}"
