"""Catalog of known telemetry faults and the corrections applied to them.

Entries are plain :class:`CorrectionRule` records kept in declaration order.
Rules for the same ship and window run in the order listed here.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Tuple

from vessel_core import labels
from vessel_core.runtime.shared import SupportsPropertyClean, SupportsPropertySample
from vessel_cleanup.cleanup import transforms as tf
from vessel_cleanup.cleanup.rules import CorrectionRule, Stage

__all__ = ["CATALOG", "parse_time"]

_TIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d")


def parse_time(text: str) -> datetime:
    """Parse a catalog timestamp as UTC, failing loudly on malformed input."""

    stripped = text.strip()
    for fmt in _TIME_FORMATS:
        try:
            parsed = datetime.strptime(stripped, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=timezone.utc)
    raise ValueError(f"Unable to parse catalog timestamp {text!r}")


PRE = Stage.PRE
POST = Stage.POST

_LOW_LEVEL_FLOWS = (
    "ME_HSFO_t_h",
    "ME_LSFO_t_h",
    "ME_MDO_t_h",
    "ME_MGO_t_h",
    "AE_HSFO_t_h",
    "AE_LSFO_t_h",
    "AE_MDO_t_h",
    "AE_MGO_t_h",
    "BLR_HSFO_t_h",
    "BLR_LSFO_t_h",
    "BLR_MDO_t_h",
    "BLR_MGO_t_h",
)


def _filter_shaft_and_flow_outliers(sample: SupportsPropertySample) -> None:
    power = sample.get(labels.SHAFT_POWER)
    speed = sample.get(labels.SHAFT_SPEED)
    if (power is not None and power > 37000) or (speed is not None and speed > 140):
        sample.set(labels.SHAFT_POWER, None)
        sample.set(labels.SHAFT_SPEED, None)
        power = None

    for flow_label in _LOW_LEVEL_FLOWS:
        flow = sample.get(flow_label)
        if flow is None:
            continue
        if power is not None and flow > 2 and power < 3500:
            sample.set(flow_label, None)
        elif flow < 0 or flow > 3:
            sample.set(flow_label, None)


def _null_everything(sample: SupportsPropertyClean) -> None:
    tf.null_all_features(sample)
    tf.remove_bad_gps(sample)


CATALOG: Tuple[CorrectionRule, ...] = (
    CorrectionRule(
        comment="Filter period of weird shaft power / shaft speed",
        issue="NAUT-1439",
        ship_id=5,
        start=parse_time("2017-09-26 21:00"),
        end=parse_time("2017-10-05 01:00"),
        stage=PRE,
        calc=tf.set_null(labels.SHAFT_SPEED, labels.SHAFT_POWER),
    ),
    CorrectionRule(
        comment="Remove large region of erroneous values",
        issue="NAUT-1434",
        ship_id=7,
        start=parse_time("2018-09-10 01:00"),
        end=parse_time("2018-10-31 01:00"),
        stage=PRE,
        calc=tf.set_null(labels.SHAFT_SPEED, labels.SHAFT_POWER),
    ),
    CorrectionRule(
        comment="Scale elevated shaft power figures",
        issue="NAUT-1440",
        ship_id=8,
        start=parse_time("2017-12-09 08:00"),
        end=parse_time("2018-01-24 23:00"),
        stage=PRE,
        calc=tf.scale(labels.SHAFT_POWER, 1.0 / 2.84),
    ),
    CorrectionRule(
        comment="Large region of extremely elevated STW",
        issue="NAUT-1523",
        ship_id=16,
        start=parse_time("2016-12-21 12:00"),
        end=parse_time("2017-01-01 06:00"),
        stage=PRE,
        calc=tf.set_null(labels.SPEED_THROUGH_WATER),
    ),
    CorrectionRule(
        issue="NAUT-2022",
        ship_id=72,
        start=parse_time("2018-10-11 00:00"),
        end=parse_time("2018-11-08 00:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.set_null(*_LOW_LEVEL_FLOWS),
    ),
    CorrectionRule(
        comment="Drop implausible shaft readings and low level fuel flows",
        issue="NAUT-2022",
        ship_id=72,
        unconditional=True,
        stage=PRE,
        calc=_filter_shaft_and_flow_outliers,
    ),
    CorrectionRule(
        comment="Keep the sensor STW and compute the modeled STW",
        issue="NAUT-1860",
        ship_id=1,
        unconditional=True,
        stage=POST,
        calc=tf.store_modeled_stw,
    ),
    CorrectionRule(
        comment="Use the modeled STW once the log speed sensor failed",
        issue="NAUT-1860",
        ship_id=1,
        start=parse_time("2018-03-01 00:00"),
        unconditional=True,
        stage=POST,
        calc=tf.use_modeled_stw,
    ),
    CorrectionRule(
        issue="NAUT-2289",
        ship_id=36,
        start=parse_time("2019-08-10 00:00"),
        end=parse_time("2019-08-10 02:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.remove_bad_gps,
    ),
    CorrectionRule(
        issue="NAUT-2472",
        ship_id=18,
        start=parse_time("2019-02-06 22:00"),
        end=parse_time("2019-02-07 03:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.remove_bad_gps,
    ),
    CorrectionRule(
        comment="Propulsion shaft power is reported in MW",
        issue="NAUT-2259",
        ship_id=45,
        start=parse_time("2019-07-27 21:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.convert_units("PROPULSION SHAFT POWER", labels.SHAFT_POWER, "MW", "kW", 0.99),
    ),
    CorrectionRule(
        comment="Remove erroneous latitude/longitude values",
        issue="DPI-415",
        ship_id=555128,
        start=parse_time("2020-02-29 12:50"),
        end=parse_time("2020-02-29 13:10"),
        unconditional=True,
        stage=PRE,
        calc=tf.remove_bad_gps,
    ),
    CorrectionRule(
        comment="SOG sensor isn't working, so map over it with the observed speed",
        issue="DPI-807",
        ship_id=7,
        start=parse_time("2020-07-22 14:00"),
        end=parse_time("2020-09-22 00:00"),
        unconditional=True,
        stage=POST,
        calc=tf.alias_with_unit("Observed Speed", labels.SPEED_OVER_GROUND),
    ),
    CorrectionRule(
        comment="Sensor data doesn't provide sign for position, but noons do",
        issue="DPI-835, ENG-553",
        ship_id=616,
        start=parse_time("2020-01-01 00:00"),
        end=parse_time("2020-12-20 00:00"),
        unconditional=True,
        stage=POST,
        calc=tf.override_lat_lon_sign,
    ),
    CorrectionRule(
        comment="Generator power tags were changed",
        issue="DPI-922",
        ship_id=207,
        start=parse_time("2020-01-01 00:00"),
        end=parse_time("2020-09-30 06:00"),
        unconditional=True,
        stage=POST,
        calc=tf.override_generator_power(),
    ),
    CorrectionRule(
        comment="Position sign tags not provided yet",
        issue="DPI-920",
        ship_id=207,
        start=parse_time("2020-01-01 00:00"),
        end=parse_time("2021-01-01 00:00"),
        unconditional=True,
        stage=POST,
        calc=tf.override_lat_lon_sign,
    ),
    CorrectionRule(
        comment="Correcting sign which is causing interpolation error",
        issue="DPI-925",
        ship_id=207,
        start=parse_time("2020-09-30 05:00"),
        end=parse_time("2020-09-30 07:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.negate_latitude,
    ),
    CorrectionRule(
        comment="Correcting sign which is causing interpolation error",
        issue="DPI-925",
        ship_id=971,
        start=parse_time("2020-10-10 23:00"),
        end=parse_time("2020-10-11 01:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.negate_latitude,
    ),
    CorrectionRule(
        comment="Remove erroneous fuel flow data before valid data is received",
        issue="DPI-938",
        ship_id=263,
        start=parse_time("2020-08-25 00:00"),
        end=parse_time("2020-10-21 00:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.set_null("STBD VBU unit", "PORT VBU unit"),
    ),
    CorrectionRule(
        comment="Resampling error for voyage location, hold the last known position",
        issue="ENG-756",
        ship_id=639,  # Pacific Blue
        start=parse_time("2021-01-25 20:00:00"),
        end=parse_time("2021-01-25 22:00:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.copy_previous_position,
    ),
    CorrectionRule(
        comment="Interpolate generator fuel consumption for an erroneous data point",
        issue="ENG-576",
        ship_id=389,
        start=parse_time("2021-01-03 04:00"),
        end=parse_time("2021-01-03 06:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.interpolate_from_neighbours("AE_LSFO_t_h"),
    ),
    CorrectionRule(
        comment="Erroneous consumption, fall back on the noon report figures",
        issue="ENG-651",
        ship_id=447,  # Diamondway
        start=parse_time("2021-02-18 04:00:00"),
        end=parse_time("2021-02-24 15:00:00"),
        unconditional=True,
        stage=POST,
        calc=tf.chain(
            tf.copy_property(
                labels.noon(labels.MAIN_ENGINE_FUEL_CONSUMPTION),
                labels.MAIN_ENGINE_FUEL_CONSUMPTION,
            ),
            tf.copy_property(
                labels.noon(labels.GENERATOR_FUEL_CONSUMPTION),
                labels.GENERATOR_FUEL_CONSUMPTION,
            ),
            tf.copy_property(
                labels.noon(labels.TOTAL_FUEL_CONSUMPTION),
                labels.TOTAL_FUEL_CONSUMPTION,
            ),
        ),
    ),
    CorrectionRule(
        comment="Null out data prior to onboarding",
        issue="ENG-756",
        ship_id=640,
        end=parse_time("2021-03-18"),
        unconditional=True,
        stage=POST,
        clean=_null_everything,
    ),
    CorrectionRule(
        comment="Null out noon report data prior to onboarding",
        issue="ENG-756",
        ship_id=641,
        end=parse_time("2021-03-20"),
        unconditional=True,
        stage=POST,
        clean=tf.null_noon_features,
    ),
    CorrectionRule(
        comment="Remove STW data",
        issue="DMT-712",
        ship_id=616,
        start=parse_time("2021-03-21 00:00"),
        end=parse_time("2021-04-16 00:00"),
        unconditional=True,
        stage=POST,
        calc=tf.set_null(labels.SPEED_THROUGH_WATER),
    ),
    CorrectionRule(
        comment="Round extremely small shaft values to zero",
        issue="ENG-850",
        ship_id=512,
        unconditional=True,
        stage=PRE,
        # two decimal places are displayed downstream
        calc=tf.chain(
            tf.set_zero_if_within_epsilon(labels.SHAFT_SPEED, 0.001),
            tf.set_zero_if_within_epsilon(labels.SHAFT_POWER, 0.001),
        ),
    ),
    CorrectionRule(
        comment="Use the deprecated fuel tag prior to the new tag addition",
        issue="ENG-1007",
        ship_id=402,
        end=parse_time("2021-05-27 00:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.copy_property(
            "Engines_Main_1_Fuel_Oil_System_FO_Inlet_Flow_Mass", "Engines_Main_FO_Flow"
        ),
    ),
    CorrectionRule(
        comment="Onboard AIS fallback",
        issue="DPI-1680",
        ship_id=351,
        end=parse_time("2022-05-31 13:00:00"),
        unconditional=True,
        stage=PRE,
        calc=tf.fallback_for_zero_position(labels.AIS_LATITUDE, labels.AIS_LONGITUDE),
    ),
    CorrectionRule(
        comment="Remove shaft power",
        issue="ENG-1263",
        ship_id=612,  # Lake Wanaka
        start=parse_time("2021-11-26 07:00"),
        end=parse_time("2021-11-27 12:00"),
        unconditional=True,
        stage=POST,
        calc=tf.set_null(labels.SHAFT_POWER),
    ),
    CorrectionRule(
        comment="Remove shaft speed",
        issue="ENG-1263",
        ship_id=612,  # Lake Wanaka
        start=parse_time("2022-03-06 11:00"),
        end=parse_time("2022-03-06 22:00"),
        unconditional=True,
        stage=POST,
        calc=tf.set_null(labels.SHAFT_SPEED),
    ),
)
