"""
ICAO flight-plan field extraction (items 7, 13, 16, 18 EET/) and the free-text
estimated landing fuel label.
"""

from .extract import parse_eet_by_fir, parse_est_landing_fuel_tenths, parse_flight_plan

__all__ = ["parse_flight_plan", "parse_eet_by_fir", "parse_est_landing_fuel_tenths"]
