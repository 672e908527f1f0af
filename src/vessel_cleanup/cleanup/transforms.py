"""Reusable transforms referenced by the cleanup catalog.

Calc transforms accept any :class:`~vessel_core.runtime.shared.SupportsPropertySample`.
Clean transforms (``null_*_features``) require the bulk-clear capability.
Positions are always read and written as a pair so untouched axes keep their
current value.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from vessel_core import labels
from vessel_core.conversions import convert
from vessel_core.equations.speed_through_water import modeled_stw
from vessel_core.runtime.shared import SupportsPropertyClean, SupportsPropertySample

__all__ = [
    "alias",
    "alias_with_unit",
    "chain",
    "convert_units",
    "copy_previous_position",
    "copy_property",
    "fallback_for_zero_position",
    "interpolate_from_neighbours",
    "negate_latitude",
    "negate_longitude",
    "null_all_features",
    "null_noon_features",
    "override_generator_power",
    "override_lat_lon_sign",
    "remove_bad_gps",
    "scale",
    "set_constant",
    "set_null",
    "set_zero_if_within_epsilon",
    "store_modeled_stw",
    "use_modeled_stw",
]

_S = TypeVar("_S", bound=SupportsPropertySample)

NOON_LATITUDE = labels.noon("Latitude")
NOON_LONGITUDE = labels.noon("Longitude")


def chain(*transforms: Callable[[_S], None]) -> Callable[[_S], None]:
    """Return a transform running ``transforms`` in order."""

    def _run(sample: _S) -> None:
        for transform in transforms:
            transform(sample)

    return _run


# -- property transforms -----------------------------------------------------


def set_null(*names: str) -> Callable[[SupportsPropertySample], None]:
    """Mark every property in ``names`` as absent."""

    def _set_null(sample: SupportsPropertySample) -> None:
        for name in names:
            sample.set(name, None)

    return _set_null


def set_constant(value: float, *names: str) -> Callable[[SupportsPropertySample], None]:
    def _set_constant(sample: SupportsPropertySample) -> None:
        for name in names:
            sample.set(name, value)

    return _set_constant


def alias(source: str, target: str) -> Callable[[SupportsPropertySample], None]:
    """Copy ``source`` into ``target`` when ``source`` is present."""

    def _alias(sample: SupportsPropertySample) -> None:
        value = sample.get(source)
        if value is not None:
            sample.set(target, value)

    return _alias


def alias_with_unit(source: str, target: str) -> Callable[[SupportsPropertySample], None]:
    """Like :func:`alias` but carries the unit of ``source`` over to ``target``."""

    def _alias(sample: SupportsPropertySample) -> None:
        value = sample.get(source)
        if value is None:
            return
        unit = sample.unit(source)
        if unit is None:
            sample.set(target, value)
        else:
            sample.set_with_unit(target, value, unit)

    return _alias


def copy_property(source: str, target: str) -> Callable[[SupportsPropertySample], None]:
    """Copy ``source`` into ``target``, propagating absence."""

    def _copy(sample: SupportsPropertySample) -> None:
        sample.set(target, sample.get(source))

    return _copy


def scale(name: str, factor: float) -> Callable[[SupportsPropertySample], None]:
    def _scale(sample: SupportsPropertySample) -> None:
        value = sample.get(name)
        if value is not None:
            sample.set(name, value * factor)

    return _scale


def set_zero_if_within_epsilon(
    name: str, epsilon: float
) -> Callable[[SupportsPropertySample], None]:
    """Clip instrument noise: present values with ``|v| < epsilon`` become ``0.0``."""

    def _clip(sample: SupportsPropertySample) -> None:
        value = sample.get(name)
        if value is not None and abs(value) < epsilon:
            sample.set(name, 0.0)

    return _clip


def interpolate_from_neighbours(name: str) -> Callable[[SupportsPropertySample], None]:
    """Replace ``name`` with the mean of the previous and next samples."""

    def _interpolate(sample: SupportsPropertySample) -> None:
        previous = sample.previous(name)
        following = sample.get_at_offset(name, 1)
        if previous is not None and following is not None:
            sample.set(name, (previous + following) / 2.0)

    return _interpolate


def convert_units(
    source: str,
    target: str,
    from_unit: str,
    to_unit: str,
    factor: float = 1.0,
) -> Callable[[SupportsPropertySample], None]:
    """Write ``source`` converted to ``to_unit`` (times ``factor``) into ``target``."""

    def _convert(sample: SupportsPropertySample) -> None:
        value = sample.get(source)
        if value is None:
            return
        sample.set_with_unit(target, convert(value, from_unit, to_unit) * factor, to_unit)

    return _convert


def override_generator_power(count: int = 4) -> Callable[[SupportsPropertySample], None]:
    """Use the motor/generator power tags as generator power in kW."""

    def _override(sample: SupportsPropertySample) -> None:
        for index in range(1, count + 1):
            value = sample.get(f"M/G {index} Power")
            if value is not None:
                sample.set_with_unit(f"Generator {index} Power", value, "kW")

    return _override


def store_modeled_stw(sample: SupportsPropertySample) -> None:
    """Keep the sensor STW aside and store the modeled STW when computable."""

    sample.set(labels.SENSOR_STW, sample.get(labels.SPEED_THROUGH_WATER))
    modeled = modeled_stw(sample)
    if modeled is not None:
        sample.set(labels.MODELED_STW, modeled)


def use_modeled_stw(sample: SupportsPropertySample) -> None:
    sample.set(labels.SPEED_THROUGH_WATER, sample.get(labels.MODELED_STW))


# -- position transforms -----------------------------------------------------


def remove_bad_gps(sample: SupportsPropertySample) -> None:
    sample.set_position(None, None)


def negate_latitude(sample: SupportsPropertySample) -> None:
    position = sample.position()
    if position is None:
        return
    sample.set_position(-position.latitude, position.longitude)


def negate_longitude(sample: SupportsPropertySample) -> None:
    position = sample.position()
    if position is None:
        return
    sample.set_position(position.latitude, -position.longitude)


def override_lat_lon_sign(sample: SupportsPropertySample) -> None:
    """Align the hemisphere of the position with the noon report."""

    noon_lat = sample.get(NOON_LATITUDE)
    noon_lon = sample.get(NOON_LONGITUDE)
    position = sample.position()
    if noon_lat is None or noon_lon is None or position is None:
        return

    latitude = position.latitude
    longitude = position.longitude
    if noon_lat < 0 and latitude > 0.0:
        latitude = -latitude
    if noon_lon < 0 and longitude > 0.0:
        longitude = -longitude
    sample.set_position(latitude, longitude)


def copy_previous_position(sample: SupportsPropertySample) -> None:
    previous = sample.previous_position()
    if previous is not None:
        sample.set_position(previous.latitude, previous.longitude)


def fallback_for_zero_position(
    latitude_label: str, longitude_label: str
) -> Callable[[SupportsPropertySample], None]:
    """Use the given property pair when the position is missing or at (0, 0)."""

    def _fallback(sample: SupportsPropertySample) -> None:
        position = sample.position()
        if position is not None and (position.latitude != 0.0 or position.longitude != 0.0):
            return
        latitude = sample.get(latitude_label)
        longitude = sample.get(longitude_label)
        if latitude is None or longitude is None:
            return
        sample.set_position(latitude, longitude)

    return _fallback


# -- clean transforms --------------------------------------------------------


def null_noon_features(sample: SupportsPropertyClean) -> None:
    sample.clear_prefixed(labels.NOON_PREFIX)


def null_all_features(sample: SupportsPropertyClean) -> None:
    sample.clear_all()
