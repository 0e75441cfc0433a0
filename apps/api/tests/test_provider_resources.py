"""Resource, data source and waiter tests for the file storage provider."""

from __future__ import annotations

import unittest

from fss.adapters.file_storage import InProcessFileStorageClient
from fss.errors import ConfigurationError, ServiceError, WaitTimeoutError
from fss.provider import Provider, WaitPolicy
from fss.provider.waiters import wait_for_state
from fss.repositories.memory import DEFAULT_MAX_FS_STAT_BYTES, InMemoryStore
from fss.schemas.file_storage import LifecycleState

_MOUNT_TARGET_INPUTS = {
    "availability_domain": "kIdk:PHX-AD-1",
    "compartment_id": "ocid1.compartment.oc1..test",
    "subnet_id": "ocid1.subnet.oc1.phx.test",
    "display_name": None,
}


class _Observed:
    def __init__(self, states: list[LifecycleState]) -> None:
        self.id = "ocid1.exportset.oc1.phx.observed"
        self._states = list(states)
        self.lifecycle_state = self._states[0]

    def fetch(self) -> _Observed:
        self.lifecycle_state = self._states.pop(0)
        return self


class WaitForStateTests(unittest.TestCase):
    def test_returns_once_target_state_is_reached(self) -> None:
        observed = _Observed([LifecycleState.CREATING, LifecycleState.CREATING, LifecycleState.ACTIVE])
        sleeps: list[float] = []

        result = wait_for_state(
            observed.fetch,
            target={LifecycleState.ACTIVE},
            pending={LifecycleState.CREATING},
            policy=WaitPolicy(poll_interval_seconds=2.5, max_polls=5),
            description="Export set",
            sleep=sleeps.append,
        )

        self.assertIs(result.lifecycle_state, LifecycleState.ACTIVE)
        self.assertEqual(sleeps, [2.5, 2.5])

    def test_unexpected_state_fails_immediately(self) -> None:
        observed = _Observed([LifecycleState.FAILED])
        with self.assertRaises(WaitTimeoutError) as context:
            wait_for_state(
                observed.fetch,
                target={LifecycleState.ACTIVE},
                pending={LifecycleState.CREATING},
                policy=WaitPolicy(poll_interval_seconds=0, max_polls=5),
                description="Export set",
                sleep=lambda _: None,
            )
        self.assertEqual(context.exception.last_state, "FAILED")

    def test_exhausted_poll_budget_times_out(self) -> None:
        observed = _Observed([LifecycleState.CREATING] * 3)
        with self.assertRaises(WaitTimeoutError) as context:
            wait_for_state(
                observed.fetch,
                target={LifecycleState.ACTIVE},
                pending={LifecycleState.CREATING},
                policy=WaitPolicy(poll_interval_seconds=0, max_polls=3),
                description="Export set",
                sleep=lambda _: None,
            )
        self.assertIn("after 3 polls", str(context.exception))
        self.assertEqual(context.exception.last_state, "CREATING")


class ProviderResourceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryStore(activation_delay_reads=2)
        self.provider = Provider(
            InProcessFileStorageClient(self.store),
            wait_policy=WaitPolicy(poll_interval_seconds=0, max_polls=5),
        )
        self.mount_targets = self.provider.resource("file_storage_mount_target")
        self.export_sets = self.provider.resource("file_storage_export_set")

    def test_mount_target_create_waits_for_active(self) -> None:
        data = self.mount_targets.create(dict(_MOUNT_TARGET_INPUTS))

        self.assertEqual(data.attributes["state"], "ACTIVE")
        self.assertEqual(data.attributes["export_set_id"], self.store.mount_targets[data.id].export_set_id)

    def test_export_set_create_adopts_mount_target_export_set(self) -> None:
        mount_target = self.mount_targets.create(dict(_MOUNT_TARGET_INPUTS))
        writes_before = self.store.export_set_write_count

        data = self.export_sets.create({"mount_target_id": mount_target.id})

        self.assertEqual(data.id, mount_target.attributes["export_set_id"])
        self.assertEqual(data.attributes["max_fs_stat_bytes"], DEFAULT_MAX_FS_STAT_BYTES)
        self.assertEqual(self.store.export_set_write_count, writes_before)

    def test_export_set_create_applies_optional_attributes(self) -> None:
        mount_target = self.mount_targets.create(dict(_MOUNT_TARGET_INPUTS))

        data = self.export_sets.create(
            {
                "mount_target_id": mount_target.id,
                "display_name": "export set display name",
                "max_fs_stat_bytes": 23843202333,
                "max_fs_stat_files": None,
            }
        )

        self.assertEqual(data.attributes["display_name"], "export set display name")
        self.assertEqual(data.attributes["max_fs_stat_bytes"], 23843202333)

    def test_export_set_update_sends_only_changed_attributes(self) -> None:
        mount_target = self.mount_targets.create(dict(_MOUNT_TARGET_INPUTS))
        created = self.export_sets.create({"mount_target_id": mount_target.id})

        updated = self.export_sets.update(
            created.id,
            {"mount_target_id": mount_target.id, "display_name": "renamed", "max_fs_stat_files": 10},
            {"display_name"},
        )

        self.assertEqual(updated.id, created.id)
        self.assertEqual(updated.attributes["display_name"], "renamed")
        self.assertNotEqual(updated.attributes["max_fs_stat_files"], 10)

    def test_export_set_delete_leaves_remote_object_alone(self) -> None:
        mount_target = self.mount_targets.create(dict(_MOUNT_TARGET_INPUTS))
        created = self.export_sets.create({"mount_target_id": mount_target.id})

        self.export_sets.delete(created.id)

        self.assertIsNotNone(self.export_sets.read(created.id))

    def test_mount_target_delete_waits_and_read_reports_gone(self) -> None:
        mount_target = self.mount_targets.create(dict(_MOUNT_TARGET_INPUTS))

        self.mount_targets.delete(mount_target.id)

        self.assertIsNone(self.mount_targets.read(mount_target.id))
        self.assertIsNone(self.export_sets.read(mount_target.attributes["export_set_id"]))
        self.mount_targets.delete("ocid1.mounttarget.oc1.phx.missing")

    def test_mount_target_delete_is_idempotent_once_deleted(self) -> None:
        mount_target = self.mount_targets.create(dict(_MOUNT_TARGET_INPUTS))
        self.mount_targets.delete(mount_target.id)
        writes_after_first_delete = self.store.mount_target_write_count

        self.mount_targets.delete(mount_target.id)

        self.assertEqual(self.store.mount_target_write_count, writes_after_first_delete)
        self.assertIs(self.store.mount_targets[mount_target.id].lifecycle_state, LifecycleState.DELETED)

    def test_mount_target_delete_waits_on_deletion_already_in_progress(self) -> None:
        mount_target = self.mount_targets.create(dict(_MOUNT_TARGET_INPUTS))
        record = self.store.mount_targets[mount_target.id]
        self.store.delete_mount_target(mount_target=record)
        writes_before = self.store.mount_target_write_count

        self.mount_targets.delete(mount_target.id)

        self.assertEqual(self.store.mount_target_write_count, writes_before)
        self.assertIs(record.lifecycle_state, LifecycleState.DELETED)

    def test_export_set_on_unknown_mount_target_propagates_not_found(self) -> None:
        with self.assertRaises(ServiceError) as context:
            self.export_sets.create({"mount_target_id": "ocid1.mounttarget.oc1.phx.missing"})
        self.assertEqual(context.exception.status_code, 404)

    def test_unknown_types_are_configuration_errors(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.provider.resource("file_storage_file_system")
        with self.assertRaises(ConfigurationError):
            self.provider.data_source("file_storage_mount_targets")


class ExportSetsDataSourceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryStore()
        self.provider = Provider(InProcessFileStorageClient(self.store))
        self.data_source = self.provider.data_source("file_storage_export_sets")
        self.first = self.store.create_mount_target(
            availability_domain="kIdk:PHX-AD-1",
            compartment_id="ocid1.compartment.oc1..test",
            subnet_id="ocid1.subnet.oc1.phx.test",
            display_name="first",
        )
        self.second = self.store.create_mount_target(
            availability_domain="kIdk:PHX-AD-1",
            compartment_id="ocid1.compartment.oc1..test",
            subnet_id="ocid1.subnet.oc1.phx.test",
            display_name="second",
        )

    def _read(self, **extra):
        inputs = {
            "availability_domain": "kIdk:PHX-AD-1",
            "compartment_id": "ocid1.compartment.oc1..test",
            "display_name": None,
            "id": None,
            "state": None,
            "filter": [],
        }
        inputs.update(extra)
        return self.data_source.read(inputs)

    def test_lists_every_export_set_in_scope(self) -> None:
        data = self._read()

        self.assertEqual(
            [item["id"] for item in data.attributes["export_sets"]],
            [self.first.export_set_id, self.second.export_set_id],
        )
        self.assertNotIn("display_name", data.attributes)

    def test_filter_blocks_narrow_results(self) -> None:
        data = self._read(filter=[{"name": "id", "values": [self.second.export_set_id], "regex": False}])

        self.assertEqual([item["id"] for item in data.attributes["export_sets"]], [self.second.export_set_id])

    def test_result_id_is_deterministic_per_query(self) -> None:
        self.assertEqual(self._read(state="ACTIVE").id, self._read(state="ACTIVE").id)
        self.assertNotEqual(self._read(state="ACTIVE").id, self._read().id)

    def test_unknown_state_is_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            self._read(state="SLEEPING")


if __name__ == "__main__":
    unittest.main()
