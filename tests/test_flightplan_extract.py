from __future__ import annotations

import unittest

from flightplan.extract import parse_eet_by_fir, parse_est_landing_fuel_tenths, parse_flight_plan

FPL_TEXT = """
FLIGHT RELEASE
(FPL-abc123-IS
-B77W/H-SDE3FGHIJ3J5M1RWXYZ/LB1D1
-PANC1230
-N0488F350 DCT ENM J501 YXE
-KORD0450 KRFD
-PBN/A1B1 EET/CZEG0034 KZMP0316 RMK/TCAS)
EST. LANDING FUEL: 12.3
"""


class TestFlightPlanExtract(unittest.TestCase):
    def test_items_13_16_and_eet(self) -> None:
        fp = parse_flight_plan(FPL_TEXT)

        self.assertTrue(fp.found)
        self.assertEqual(fp.aircraft_id, "ABC123")
        self.assertEqual((fp.dep, fp.dep_time_hhmm), ("PANC", "1230"))
        self.assertEqual((fp.dest, fp.alt), ("KORD", "KRFD"))
        self.assertEqual(fp.eet_by_fir, {"CZEG": "0034", "KZMP": "0316"})
        self.assertEqual(fp.est_landing_fuel_tenths, 123)
        self.assertTrue(fp.raw.startswith("(FPL-abc123-IS -B77W/H"))
        self.assertNotIn("\n", fp.raw)

    def test_single_line_form(self) -> None:
        fp = parse_flight_plan("(FPL-XY1-IS-A320/M-SDE/S-EGLL0900-N0450F350 DCT-EHAM0100 EBBR-0)")
        self.assertEqual((fp.dep, fp.dep_time_hhmm), ("EGLL", "0900"))
        self.assertEqual((fp.dest, fp.alt), ("EHAM", "EBBR"))

    def test_missing_block_still_reports_landing_fuel(self) -> None:
        fp = parse_flight_plan("NO PLAN HERE\nEST LANDING FUEL 15")

        self.assertFalse(fp.found)
        self.assertEqual(fp.dep_time_hhmm, "")
        self.assertEqual(fp.eet_by_fir, {})
        self.assertEqual(fp.est_landing_fuel_tenths, 150)

    def test_landing_fuel_absent(self) -> None:
        self.assertIsNone(parse_est_landing_fuel_tenths("LANDING 12.0"))
        self.assertIsNone(parse_flight_plan("").est_landing_fuel_tenths)

    def test_oversized_landing_fuel_is_unknown(self) -> None:
        fp = parse_flight_plan(FPL_TEXT.replace("12.3", "9" * 30))

        self.assertTrue(fp.found)
        self.assertIsNone(fp.est_landing_fuel_tenths)

    def test_malformed_eet_pairs_are_skipped(self) -> None:
        self.assertEqual(parse_eet_by_fir("(FPL-X EET/CZEG0034 BAD KZMP31)"), {"CZEG": "0034"})


if __name__ == "__main__":
    unittest.main()
