import unittest

from fss.acctest.checks import (
    IdentityLog,
    check_no_resource_attr,
    check_resource_attr,
    check_resource_attr_set,
    compose_aggregate_check,
    compose_check,
    from_instance_state,
)
from fss.engine.state import InstanceState, ResourceState, State
from fss.errors import CheckFailure

EXPORT_SET = "file_storage_export_set.test_export_set"


def _state(resource_id: str = "ocid1.exportset.oc1.phx.one", **attributes: str) -> State:
    state = State()
    state.put(
        EXPORT_SET,
        ResourceState(
            type="file_storage_export_set",
            instance=InstanceState(id=resource_id, attributes=attributes),
        ),
    )
    return state


class AttributeCheckTests(unittest.TestCase):
    def test_exact_value_match_and_mismatch(self) -> None:
        state = _state(display_name="export set display name", max_fs_stat_files="223442")

        check_resource_attr(EXPORT_SET, "max_fs_stat_files", "223442")(state)
        with self.assertRaisesRegex(CheckFailure, "expected '1', got '223442'"):
            check_resource_attr(EXPORT_SET, "max_fs_stat_files", "1")(state)

    def test_missing_entry_and_attribute_fail(self) -> None:
        with self.assertRaisesRegex(CheckFailure, "Not found"):
            check_resource_attr("file_storage_export_set.other", "state", "ACTIVE")(_state())
        with self.assertRaisesRegex(CheckFailure, "'state' not found"):
            check_resource_attr(EXPORT_SET, "state", "ACTIVE")(_state())

    def test_empty_collections_count_as_zero(self) -> None:
        check_resource_attr(EXPORT_SET, "export_sets.#", "0")(_state())
        check_no_resource_attr(EXPORT_SET, "export_sets.#")(_state(**{"export_sets.#": "0"}))

    def test_attr_set_rejects_empty_values(self) -> None:
        check_resource_attr_set(EXPORT_SET, "time_created")(_state(time_created="2026-01-01T00:00:00+00:00"))
        check_resource_attr_set(EXPORT_SET, "id")(_state())
        with self.assertRaises(CheckFailure):
            check_resource_attr_set(EXPORT_SET, "display_name")(_state(display_name=""))

    def test_no_attr_fails_when_present(self) -> None:
        with self.assertRaises(CheckFailure):
            check_no_resource_attr(EXPORT_SET, "display_name")(_state(display_name="x"))

    def test_from_instance_state_reads_id(self) -> None:
        self.assertEqual(from_instance_state(_state("es-1"), EXPORT_SET, "id"), "es-1")


class ComposeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calls: list[str] = []

    def _recording(self, label: str, *, fail: bool = False):
        def check(_state: State) -> None:
            self.calls.append(label)
            if fail:
                raise CheckFailure(f"{label} failed")

        return check

    def test_compose_stops_at_first_failure(self) -> None:
        composed = compose_check(
            self._recording("a"),
            self._recording("b", fail=True),
            self._recording("c"),
        )

        with self.assertRaisesRegex(CheckFailure, "Check 2/3 error: b failed"):
            composed(State())
        self.assertEqual(self.calls, ["a", "b"])

    def test_aggregate_runs_everything_and_reports_each_failure(self) -> None:
        composed = compose_aggregate_check(
            self._recording("a", fail=True),
            self._recording("b"),
            self._recording("c", fail=True),
        )

        with self.assertRaises(CheckFailure) as raised:
            composed(State())
        self.assertEqual(self.calls, ["a", "b", "c"])
        self.assertIn("Check 1/3 error: a failed", str(raised.exception))
        self.assertIn("Check 3/3 error: c failed", str(raised.exception))


class IdentityLogTests(unittest.TestCase):
    def test_unchanged_identity_passes_update_check(self) -> None:
        log = IdentityLog()
        log.capture(EXPORT_SET)(_state("es-1"))
        log.expect_unchanged(EXPORT_SET)(_state("es-1"))

        self.assertEqual(log.snapshots, [(EXPORT_SET, "es-1"), (EXPORT_SET, "es-1")])

    def test_changed_identity_fails_update_check(self) -> None:
        log = IdentityLog()
        log.capture(EXPORT_SET)(_state("es-1"))

        with self.assertRaisesRegex(CheckFailure, "Resource recreated when it was supposed to be updated."):
            log.expect_unchanged(EXPORT_SET)(_state("es-2"))

    def test_same_identity_fails_recreate_check(self) -> None:
        log = IdentityLog()
        log.capture(EXPORT_SET)(_state("es-1"))

        with self.assertRaisesRegex(CheckFailure, "expected to be recreated"):
            log.expect_changed(EXPORT_SET)(_state("es-1"))
        log.expect_changed(EXPORT_SET)(_state("es-2"))
        self.assertEqual(log.last, "es-2")

    def test_comparison_without_capture_fails(self) -> None:
        with self.assertRaisesRegex(CheckFailure, "no identity captured"):
            IdentityLog().expect_changed(EXPORT_SET)(_state("es-1"))


if __name__ == "__main__":
    unittest.main()
