from __future__ import annotations

import unittest

from contracts.navlog import ActualTakeoff, FlightPlan, SignClass, WaypointRecord
from derivation.config import DerivationConfig
from derivation.engine import derive_rows
from derivation.guardrails import FIR_EET_MISMATCH, FUEL_INCREASING, FUEL_NEGATIVE


def _wp(ident: str, **kw: str) -> WaypointRecord:
    return WaypointRecord(ident=ident, **kw)


class TestTimeDerivation(unittest.TestCase):
    def test_planned_eta_from_departure_plus_leg_time(self) -> None:
        rows = derive_rows([_wp("-CZEG", t_tme="0.34")], FlightPlan(dep_time_hhmm="1230", raw="x"), ActualTakeoff())

        self.assertEqual(rows[0].derived.planned_eta_hhmm, "1304")
        self.assertEqual(rows[0].derived.updated_eta_hhmm, "1304")
        self.assertEqual(rows[0].derived.eta_diff_min, 0)

    def test_takeoff_time_is_base_without_flight_plan(self) -> None:
        rows = derive_rows([_wp("ENM", t_tme="0.30")], FlightPlan(), ActualTakeoff(time="0800", fuel="100.0"))
        self.assertEqual(rows[0].derived.planned_eta_hhmm, "0830")

    def test_no_base_time_leaves_eta_unknown(self) -> None:
        rows = derive_rows([_wp("ENM", t_tme="0.30")], FlightPlan(), ActualTakeoff())

        d = rows[0].derived
        self.assertEqual(d.planned_eta_hhmm, "")
        self.assertIsNone(d.eta_diff_min)
        self.assertEqual(d.eta_diff_display, "-")

    def test_planned_eta_wraps_past_midnight(self) -> None:
        rows = derive_rows([_wp("ENM", t_tme="0.20")], FlightPlan(dep_time_hhmm="2350"), ActualTakeoff())
        self.assertEqual(rows[0].derived.planned_eta_hhmm, "0010")

    def test_actual_time_biases_later_waypoints(self) -> None:
        records = [
            _wp("AAA", t_tme="0.10", actual_time="1015"),
            _wp("BBB", t_tme="0.20"),
            _wp("CCC", t_tme="0.30"),
        ]

        rows = derive_rows(records, FlightPlan(dep_time_hhmm="1000"), ActualTakeoff())

        self.assertEqual([r.derived.planned_eta_hhmm for r in rows], ["1010", "1020", "1030"])
        self.assertEqual([r.derived.updated_eta_hhmm for r in rows], ["1015", "1025", "1035"])
        self.assertEqual([r.derived.eta_diff_display for r in rows], ["-5", "-5", "-5"])

    def test_early_arrival_across_midnight(self) -> None:
        records = [_wp("AAA", t_tme="0.20", actual_time="0005")]
        rows = derive_rows(records, FlightPlan(dep_time_hhmm="2350"), ActualTakeoff())
        self.assertEqual(rows[0].derived.eta_diff_min, 5)
        self.assertEqual(rows[0].derived.eta_diff_display, "+5")


class TestFuelDerivation(unittest.TestCase):
    def test_updated_fuel_from_takeoff_fuel(self) -> None:
        rows = derive_rows([_wp("ENM", tbo="0180", frmg="1340")], FlightPlan(), ActualTakeoff("1232", "152.0"))

        d = rows[0].derived
        self.assertEqual(d.updated_fuel_tenths, 1340)
        self.assertEqual(d.planned_fuel_tenths, 1340)
        self.assertEqual(d.planned_burn_tenths, 180)
        self.assertIsNone(d.actual_burn_tenths)
        self.assertEqual(d.delta_class, SignClass.NEUTRAL)

    def test_unknown_inputs_stay_unknown(self) -> None:
        rows = derive_rows([_wp("ENM", tbo="....", frmg="----")], FlightPlan(), ActualTakeoff("1232", "152.0"))

        d = rows[0].derived
        self.assertIsNone(d.planned_burn_tenths)
        self.assertIsNone(d.planned_fuel_tenths)
        self.assertIsNone(d.updated_fuel_tenths)

    def test_fuel_anchor_propagates_from_last_actual(self) -> None:
        records = [
            _wp("AAA", tbo="0100"),
            _wp("BBB", tbo="0200", actual_fuel="78.0"),
            _wp("CCC", tbo="0300"),
            _wp("DDD", tbo="0450"),
        ]
        to = ActualTakeoff("1000", "100.0")

        rows = derive_rows(records, FlightPlan(), to)

        self.assertEqual([r.derived.updated_fuel_tenths for r in rows], [900, 800, 680, 530])

        # Earlier printed burns do not matter once an anchor exists.
        changed = [_wp("AAA", tbo="0150")] + records[1:]
        self.assertEqual(derive_rows(changed, FlightPlan(), to)[2].derived.updated_fuel_tenths, 680)

    def test_actual_fuel_burn_delta_and_landing_comparison(self) -> None:
        records = [_wp("ENM", tbo="0180", frmg="1340", dstn="1300", actual_time="1325", actual_fuel="133.0")]
        fp = FlightPlan(dep_time_hhmm="1230", est_landing_fuel_tenths=123, raw="x")

        d = derive_rows(records, fp, ActualTakeoff("1232", "152.0"))[0].derived

        self.assertEqual(d.actual_burn_tenths, 190)
        self.assertEqual(d.abo_tenths, 190)
        self.assertEqual(d.delta_tenths, -10)
        self.assertEqual(d.delta_class, SignClass.OVER_PLAN)
        self.assertEqual(d.fuel_diff_tenths, -10)
        self.assertEqual(d.efoa_tenths, 30)
        self.assertEqual(d.efoa_minus_est_landing_tenths, -93)
        self.assertEqual(d.efoa_vs_est_landing_class, SignClass.SHORT)

    def test_under_plan_and_excess(self) -> None:
        records = [_wp("ENM", tbo="0180", dstn="0100", actual_fuel="135.0")]
        fp = FlightPlan(est_landing_fuel_tenths=123)

        d = derive_rows(records, fp, ActualTakeoff("1232", "152.0"))[0].derived

        self.assertEqual(d.delta_tenths, 10)
        self.assertEqual(d.delta_class, SignClass.UNDER_PLAN)
        self.assertEqual(d.efoa_tenths, 1250)
        self.assertEqual(d.efoa_vs_est_landing_class, SignClass.EXCESS)

    def test_tas_mac_display(self) -> None:
        rows = derive_rows([_wp("ENM", tas="455", mac="M79"), _wp("FOO", mac="M80")], FlightPlan(), ActualTakeoff())
        self.assertEqual([r.derived.tas_mac for r in rows], ["455 M79", "M80"])

    def test_derived_row_serializes_flat_with_derived_block(self) -> None:
        d = derive_rows([_wp("ENM", tbo="0180")], FlightPlan(), ActualTakeoff("1232", "152.0"))[0].to_dict()

        self.assertEqual(d["ident"], "ENM")
        self.assertEqual(d["derived"]["updated_fuel_tenths"], 1340)
        self.assertEqual(d["derived"]["delta_class"], "neutral")
        self.assertEqual(d["derived"]["advisories"], [])


class TestGuardrails(unittest.TestCase):
    def test_increasing_and_negative_fuel_are_flagged_not_rejected(self) -> None:
        records = [_wp("AAA", tbo="0200"), _wp("BBB", tbo="0100"), _wp("CCC", tbo="1200")]

        rows = derive_rows(records, FlightPlan(), ActualTakeoff("1000", "100.0"))

        self.assertEqual([r.derived.updated_fuel_tenths for r in rows], [800, 900, -200])
        self.assertEqual(rows[0].derived.advisories, ())
        self.assertEqual(rows[1].derived.advisories, (FUEL_INCREASING,))
        self.assertEqual(rows[2].derived.advisories, (FUEL_NEGATIVE,))

    def test_fir_leg_time_checked_against_flight_plan_eet(self) -> None:
        fp = FlightPlan(dep_time_hhmm="1230", eet_by_fir={"CZEG": "0034", "KZMP": "0316"}, raw="x")
        records = [_wp("-CZEG", t_tme="0.35"), _wp("-KZMP", t_tme="3.30"), _wp("ENM", t_tme="9.00")]

        rows = derive_rows(records, fp, ActualTakeoff())

        self.assertEqual(rows[0].derived.advisories, ())
        self.assertEqual(rows[1].derived.advisories, (FIR_EET_MISMATCH,))
        self.assertEqual(rows[2].derived.advisories, ())

    def test_eet_tolerance_is_configurable(self) -> None:
        fp = FlightPlan(eet_by_fir={"KZMP": "0316"})
        rows = derive_rows([_wp("-KZMP", t_tme="3.30")], fp, ActualTakeoff(), DerivationConfig(eet_tolerance_min=15))
        self.assertEqual(rows[0].derived.advisories, ())

    def test_config_rejects_negative_tolerance(self) -> None:
        with self.assertRaises(ValueError):
            DerivationConfig(eet_tolerance_min=-1)


if __name__ == "__main__":
    unittest.main()
