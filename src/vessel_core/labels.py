"""Canonical property labels used by the cleanup rules and equations."""

from __future__ import annotations

__all__ = [
    "NOON_PREFIX",
    "noon",
    "SHAFT_SPEED",
    "SHAFT_POWER",
    "SHAFT_TORQUE",
    "SPEED_THROUGH_WATER",
    "SENSOR_STW",
    "MODELED_STW",
    "SPEED_OVER_GROUND",
    "HEADING",
    "DRAFT_AFT",
    "DRAFT_FWD",
    "DRAFT_MID_1",
    "DRAFT_MID_2",
    "TRIM",
    "TRUE_WIND_SPEED",
    "TRUE_WIND_DIR",
    "SEA_CURRENT_SPEED",
    "SEA_CURRENT_DIR",
    "SIG_WAVE_HEIGHT",
    "MAIN_ENGINE_FUEL_CONSUMPTION",
    "GENERATOR_FUEL_CONSUMPTION",
    "TOTAL_FUEL_CONSUMPTION",
    "AIS_LATITUDE",
    "AIS_LONGITUDE",
    "VOYAGE_LATITUDE",
    "VOYAGE_LONGITUDE",
]

NOON_PREFIX = "(Noon) "


def noon(label: str) -> str:
    """Return the noon-report variant of ``label``."""

    return f"{NOON_PREFIX}{label}"


SHAFT_SPEED = "Shaft Speed"
SHAFT_POWER = "Shaft Power"
SHAFT_TORQUE = "Shaft Torque"

SPEED_THROUGH_WATER = "Speed Through Water"
SENSOR_STW = "Sensor Speed Through Water"
MODELED_STW = "Modeled Speed Through Water"
SPEED_OVER_GROUND = "Speed Over Ground"
HEADING = "Heading"

DRAFT_AFT = "Draft Aft"
DRAFT_FWD = "Draft Fwd"
DRAFT_MID_1 = "Draft Mid 1"
DRAFT_MID_2 = "Draft Mid 2"
TRIM = "Trim"

# Weather service hindcast
TRUE_WIND_SPEED = "WS True Wind Speed"
TRUE_WIND_DIR = "WS True Wind Direction"
SEA_CURRENT_SPEED = "WS Sea Current Speed"
SEA_CURRENT_DIR = "WS Sea Current Direction"
SIG_WAVE_HEIGHT = "WS Significant Wave Height"

MAIN_ENGINE_FUEL_CONSUMPTION = "Main Engine Fuel Consumption"
GENERATOR_FUEL_CONSUMPTION = "Generator Fuel Consumption"
TOTAL_FUEL_CONSUMPTION = "Total Fuel Consumption"

AIS_LATITUDE = "AIS Latitude"
AIS_LONGITUDE = "AIS Longitude"
VOYAGE_LATITUDE = "Voyage Location latitude"
VOYAGE_LONGITUDE = "Voyage Location longitude"
