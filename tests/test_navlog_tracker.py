from __future__ import annotations

import unittest

from contracts.extraction import ExtractError, ExtractionResult
from navlog.tracker import INITIAL_STATUS, NavlogTracker

from navlog_sample import RELEASE_LINES, pages_for


def _submitted() -> NavlogTracker:
    t = NavlogTracker()
    r = t.submit_document(ExtractionResult.from_pages(pages_for(RELEASE_LINES)))
    assert r.ok, r.errors
    return t


class TestNavlogTrackerSubmit(unittest.TestCase):
    def test_initial_state(self) -> None:
        t = NavlogTracker()
        self.assertEqual(t.status, INITIAL_STATUS)
        self.assertEqual(t.waypoints, [])
        self.assertIsNone(t.current_waypoint)

    def test_submit_parses_waypoints_and_flight_plan(self) -> None:
        t = _submitted()

        self.assertEqual([w.ident for w in t.waypoints], ["PANC", "-CZEG", "ENM"])
        self.assertEqual(t.status, "Parsed 3 waypoints (one row each). Enter takeoff data.")
        self.assertEqual(t.flight_plan.dep, "PANC")
        self.assertEqual(t.flight_plan.dep_time_hhmm, "1230")
        self.assertEqual(t.flight_plan.dest, "KORD")
        self.assertEqual(t.flight_plan.est_landing_fuel_tenths, 123)
        self.assertEqual([r.derived.planned_eta_hhmm for r in t.computed], ["1230", "1304", "1320"])

        enm = t.waypoints[2]
        self.assertEqual(enm.coord, "N62 00.0 W148 00.0")
        self.assertEqual(enm.frq, "128.85")
        self.assertEqual(enm.tbo, "0180")
        self.assertEqual(enm.dstn, "1300")
        # Nothing after the alternate marker is parsed.
        self.assertNotIn("KRFD", [w.ident for w in t.waypoints])

    def test_structural_failure_clears_everything(self) -> None:
        t = _submitted()
        lines = [line for line in RELEASE_LINES if "ALTERNATE" not in line]

        r = t.submit_document(ExtractionResult.from_pages(pages_for(lines)))

        self.assertFalse(r.ok)
        self.assertEqual([e.code for e in r.errors], ["NAVLOG_SECTION_END_MISSING"])
        self.assertEqual(t.waypoints, [])
        self.assertEqual(t.computed, [])
        self.assertFalse(t.flight_plan.found)
        self.assertIn("end marker", t.status)

    def test_missing_header_is_a_failure(self) -> None:
        lines = [line for line in RELEASE_LINES if not line.startswith("IDENT")]

        t = NavlogTracker()
        r = t.submit_document(ExtractionResult.from_pages(pages_for(lines)))

        self.assertFalse(r.ok)
        self.assertEqual([e.code for e in r.errors], ["NAVLOG_HEADER_NOT_FOUND"])
        self.assertEqual(t.waypoints, [])

    def test_failed_extraction_is_reported(self) -> None:
        t = NavlogTracker()
        r = t.submit_document(
            ExtractionResult(
                ok=False,
                errors=[ExtractError(code="EXTRACT_BACKEND_TEXT_FAILED", message="boom")],
                meta={},
                pages=[],
            )
        )

        self.assertFalse(r.ok)
        self.assertEqual([e.code for e in r.errors], ["NAVLOG_EXTRACTION_FAILED"])
        self.assertIn("EXTRACT_BACKEND_TEXT_FAILED", t.status)

    def test_resubmit_resets_pilot_entries(self) -> None:
        t = _submitted()
        t.set_actual_takeoff("1232", "152.0")
        t.set_actual_waypoint(0, "1232", "152.0")

        t.submit_document(ExtractionResult.from_pages(pages_for(RELEASE_LINES)))

        self.assertFalse(t.actual_takeoff.is_set)
        self.assertFalse(t.waypoints[0].has_actuals)
        self.assertIsNone(t.current_waypoint)


class TestNavlogTrackerCommands(unittest.TestCase):
    def test_takeoff_recomputes_and_points_at_first_waypoint(self) -> None:
        t = _submitted()

        r = t.set_actual_takeoff("1232", "152.0")

        self.assertTrue(r.ok)
        self.assertEqual(t.current_waypoint, 0)
        self.assertEqual(t.computed[2].derived.updated_fuel_tenths, 1340)

    def test_blank_takeoff_rejected_without_mutation(self) -> None:
        t = _submitted()
        before = t.snapshot()

        r = t.set_actual_takeoff("1232", "  ")

        self.assertFalse(r.ok)
        self.assertEqual([e.code for e in r.errors], ["TRACKER_TAKEOFF_INPUT_MISSING"])
        self.assertEqual(t.snapshot(), before)

    def test_waypoint_actuals_advance_pointer(self) -> None:
        t = _submitted()
        t.set_actual_takeoff("1232", "152.0")

        self.assertTrue(t.set_actual_waypoint(0, "1232", "152.0").ok)
        self.assertEqual(t.current_waypoint, 1)

        self.assertTrue(t.set_actual_waypoint(2, "1325", "133.0").ok)
        self.assertIsNone(t.current_waypoint)

        d = t.computed[2].derived
        self.assertEqual(t.waypoints[2].actual_fuel, "133.0")
        self.assertEqual(d.updated_eta_hhmm, "1325")
        self.assertEqual(d.eta_diff_display, "-5")
        self.assertEqual(d.delta_tenths, -10)
        self.assertEqual(d.efoa_minus_est_landing_tenths, -93)

    def test_oversized_fuel_entries_are_unknown(self) -> None:
        t = _submitted()

        self.assertTrue(t.set_actual_takeoff("1232", "1e30").ok)
        self.assertEqual(t.actual_takeoff.fuel, "1e30")
        self.assertEqual(t.current_waypoint, 0)
        self.assertTrue(t.set_actual_waypoint(0, "1232", "9" * 30).ok)
        self.assertEqual(t.waypoints[0].actual_fuel, "9" * 30)
        self.assertEqual(len(t.computed), 3)
        self.assertIsNone(t.computed[0].derived.delta_tenths)

    def test_waypoint_rejections(self) -> None:
        t = _submitted()
        before = t.snapshot()

        r1 = t.set_actual_waypoint(1, "", "140.0")
        r2 = t.set_actual_waypoint(7, "1300", "140.0")
        r3 = t.set_actual_waypoint(-1, "1300", "140.0")

        self.assertEqual([e.code for e in r1.errors], ["TRACKER_WAYPOINT_INPUT_MISSING"])
        self.assertEqual([e.code for e in r2.errors], ["TRACKER_WAYPOINT_INDEX_OUT_OF_RANGE"])
        self.assertEqual([e.code for e in r3.errors], ["TRACKER_WAYPOINT_INDEX_OUT_OF_RANGE"])
        self.assertEqual(t.snapshot(), before)


class TestNavlogTrackerSnapshot(unittest.TestCase):
    def test_rows_carry_display_strings(self) -> None:
        t = _submitted()
        t.set_actual_takeoff("1232", "152.0")
        t.set_actual_waypoint(2, "1325", "133.0")

        snap = t.snapshot()

        self.assertEqual(snap["actual_takeoff"], {"time": "1232", "fuel": "152.0", "set": True})
        czeg, enm = snap["rows"][1]["display"], snap["rows"][2]["display"]
        self.assertEqual(czeg["planned_eta"], "13.04")
        self.assertEqual(czeg["fpl_eet"], "00.34")
        self.assertEqual(enm["updated_eta"], "13.25")
        self.assertEqual(enm["eta_diff"], "-5")
        self.assertEqual(enm["delta"], "-1.0")
        self.assertEqual(enm["updated_fuel"], "134.0")
        self.assertEqual(snap["rows"][0]["display"]["fpl_eet"], "")

    def test_display_before_takeoff(self) -> None:
        snap = _submitted().snapshot()

        self.assertFalse(snap["actual_takeoff"]["set"])
        self.assertEqual(snap["rows"][2]["display"]["actual_burn"], "-")


if __name__ == "__main__":
    unittest.main()
