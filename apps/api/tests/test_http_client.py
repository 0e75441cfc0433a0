"""HTTP client adapter tests against the emulator app."""

from __future__ import annotations

import unittest

import httpx
from fastapi.testclient import TestClient

from fss.adapters.file_storage import HttpFileStorageClient
from fss.errors import ServiceError
from fss.main import create_app
from fss.repositories.memory import InMemoryStore
from fss.schemas.file_storage import (
    CreateMountTargetDetails,
    LifecycleState,
    ListExportSetsRequest,
    UpdateExportSetDetails,
)

_DETAILS = CreateMountTargetDetails(
    availability_domain="kIdk:PHX-AD-1",
    compartment_id="ocid1.compartment.oc1..test",
    subnet_id="ocid1.subnet.oc1.phx.test",
)


class HttpFileStorageClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryStore()
        self.client = HttpFileStorageClient(TestClient(create_app(self.store)))

    def test_round_trips_typed_models(self) -> None:
        mount_target = self.client.create_mount_target(_DETAILS)
        self.assertIs(mount_target.lifecycle_state, LifecycleState.ACTIVE)

        updated = self.client.update_export_set(
            mount_target.export_set_id,
            UpdateExportSetDetails(display_name="export set display name", max_fs_stat_files=223442),
        )
        self.assertEqual(updated.display_name, "export set display name")
        self.assertEqual(updated.max_fs_stat_files, 223442)
        self.assertEqual(updated.mount_target_id, mount_target.id)

        summaries = self.client.list_export_sets(
            ListExportSetsRequest(
                compartment_id=_DETAILS.compartment_id,
                availability_domain=_DETAILS.availability_domain,
                display_name="export set display name",
            )
        )
        self.assertEqual([summary.id for summary in summaries], [mount_target.export_set_id])

    def test_error_bodies_become_service_errors(self) -> None:
        with self.assertRaises(ServiceError) as context:
            self.client.get_export_set("ocid1.exportset.oc1.phx.missing")
        self.assertEqual(context.exception.status_code, 404)
        self.assertEqual(context.exception.code, "NotAuthorizedOrNotFound")

    def test_delete_returns_none_and_object_reports_deleted(self) -> None:
        mount_target = self.client.create_mount_target(_DETAILS)

        self.assertIsNone(self.client.delete_mount_target(mount_target.id))
        self.assertIs(self.client.get_mount_target(mount_target.id).lifecycle_state, LifecycleState.DELETED)

    def test_non_json_error_body_is_still_reported(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        client = HttpFileStorageClient(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://fss"))
        with self.assertRaises(ServiceError) as context:
            client.get_mount_target("ocid1.mounttarget.oc1.phx.any")
        self.assertEqual(context.exception.status_code, 502)
        self.assertEqual(context.exception.code, "UnexpectedResponse")


if __name__ == "__main__":
    unittest.main()
