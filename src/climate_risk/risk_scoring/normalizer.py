"""
Signal Normalizer

Turns partially-populated provider output into a complete
EnvironmentalSignal. Missing data is never an error, only lower precision.
"""

import math
from typing import Any, Mapping, Optional, Union

import pandas as pd

from climate_risk.errors import InvalidInputError
from climate_risk.models import CurrentWeather, EnvironmentalSignal, RawSignal

# Fallbacks used when the provider omits a field
DEFAULT_TEMPERATURE_C = 20.0
DEFAULT_HUMIDITY_PCT = 50.0
DEFAULT_PRECIPITATION_MM = 0.0
DEFAULT_WIND_SPEED_KMH = 0.0
DEFAULT_ELEVATION_M = 0.0

RAINFALL_WINDOW_HOURS = 24


def finite_or_none(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be numeric, got {value!r}", field=name)
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite, got {value!r}", field=name)
    return number


def _or_default(name: str, value: Any, default: float) -> float:
    number = finite_or_none(name, value)
    return default if number is None else number


def rainfall_accumulation(hourly_precipitation, hours: int = RAINFALL_WINDOW_HOURS) -> float:
    """
    Sum the most recent `hours` hourly precipitation samples (mm)

    Samples are ordered oldest first; gaps count as no rain.
    """
    samples = [finite_or_none("hourly_precipitation", value) for value in hourly_precipitation]
    series = pd.Series(samples, dtype="float64")
    if series.empty:
        return 0.0
    window = series.fillna(0.0).tail(hours)
    return max(float(window.sum()), 0.0)


def _as_raw(raw: Union[RawSignal, Mapping[str, Any], None]) -> RawSignal:
    if raw is None or isinstance(raw, Mapping):
        return RawSignal.from_mapping(raw)
    return raw


def normalize_conditions(raw: Union[RawSignal, Mapping[str, Any], None]) -> CurrentWeather:
    """Current weather with fallbacks applied, for callers without coordinates"""
    raw = _as_raw(raw)
    humidity = _or_default("humidity", raw.humidity, DEFAULT_HUMIDITY_PCT)
    precipitation = _or_default("precipitation", raw.precipitation, DEFAULT_PRECIPITATION_MM)
    wind_speed = _or_default("wind_speed", raw.wind_speed, DEFAULT_WIND_SPEED_KMH)
    return CurrentWeather(
        temperature=_or_default("temperature", raw.temperature, DEFAULT_TEMPERATURE_C),
        humidity=min(max(humidity, 0.0), 100.0),
        precipitation=max(precipitation, 0.0),
        wind_speed=max(wind_speed, 0.0),
    )


def normalize_signal(
    raw: Union[RawSignal, Mapping[str, Any], None],
    latitude: float,
    longitude: float,
    elevation: Optional[float] = None,
) -> EnvironmentalSignal:
    """
    Build a bounded, complete EnvironmentalSignal

    Args:
        raw: Provider output (RawSignal or plain mapping); None means no data
        latitude: Location latitude (-90 to 90)
        longitude: Location longitude (-180 to 180)
        elevation: Ground elevation in metres, None if the lookup failed

    Returns:
        EnvironmentalSignal with fallbacks applied
    """
    raw = _as_raw(raw)

    lat = finite_or_none("latitude", latitude)
    lon = finite_or_none("longitude", longitude)
    if lat is None or not -90 <= lat <= 90:
        raise InvalidInputError("latitude must be between -90 and 90", field="latitude")
    if lon is None or not -180 <= lon <= 180:
        raise InvalidInputError("longitude must be between -180 and 180", field="longitude")

    current = normalize_conditions(raw)

    return EnvironmentalSignal(
        temperature=current.temperature,
        humidity=current.humidity,
        precipitation=current.precipitation,
        rainfall_24h=rainfall_accumulation(raw.hourly_precipitation),
        wind_speed=current.wind_speed,
        elevation=_or_default("elevation", elevation, DEFAULT_ELEVATION_M),
        latitude=lat,
        longitude=lon,
    )
