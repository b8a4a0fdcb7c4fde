"""
Open-Meteo Weather API Connector

Fetches current conditions, recent hourly precipitation and air quality from
the free Open-Meteo APIs (no key required).
API Documentation: https://open-meteo.com/en/docs
"""

import requests
import pandas as pd
from typing import Optional, Dict
import logging

from climate_risk.config import settings
from climate_risk.models import MonitoredLocation, RawSignal

logger = logging.getLogger(__name__)


class OpenMeteoConnector:
    """Connector for the Open-Meteo forecast and air-quality APIs"""

    CURRENT_VARIABLES = "temperature_2m,relative_humidity_2m,precipitation,wind_speed_10m"

    def __init__(
        self,
        base_url: Optional[str] = None,
        air_quality_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url or settings.OPEN_METEO_BASE_URL
        self.air_quality_url = air_quality_url or settings.OPEN_METEO_AIR_QUALITY_URL
        self.timeout = timeout or settings.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def _get_json(self, url: str, params: Dict) -> Optional[Dict]:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching {url}: {e}")
            return None
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            return None

    def get_forecast(self, latitude: float, longitude: float) -> Optional[Dict]:
        """Current conditions plus yesterday's and today's hourly precipitation"""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": self.CURRENT_VARIABLES,
            "hourly": "precipitation",
            "past_days": 1,
            "forecast_days": 1,
            "timezone": "auto",
        }
        logger.info(f"Fetching weather for ({latitude}, {longitude})")
        return self._get_json(f"{self.base_url}/forecast", params)

    @staticmethod
    def _recent_hourly_precipitation(data: Dict) -> tuple:
        """
        Hourly precipitation up to the current observation, oldest first

        Forecast hours after the current timestamp are dropped so the
        accumulation window only covers rain that has already fallen.
        """
        hourly = data.get("hourly") or {}
        times = hourly.get("time") or []
        values = hourly.get("precipitation") or []
        if not times or len(times) != len(values):
            return tuple(values)

        series = pd.Series(values, index=pd.to_datetime(times), dtype="float64")
        current_time = (data.get("current") or {}).get("time")
        if current_time:
            series = series[series.index <= pd.to_datetime(current_time)]

        return tuple(None if pd.isna(v) else float(v) for v in series.tail(24))

    def get_current_conditions(self, latitude: float, longitude: float) -> Optional[RawSignal]:
        """
        Get the raw environmental signal for a location

        Returns:
            RawSignal, or None when the provider is unavailable
        """
        data = self.get_forecast(latitude, longitude)
        if data is None:
            return None

        current = data.get("current") or {}
        return RawSignal(
            temperature=current.get("temperature_2m"),
            humidity=current.get("relative_humidity_2m"),
            precipitation=current.get("precipitation"),
            wind_speed=current.get("wind_speed_10m"),
            hourly_precipitation=self._recent_hourly_precipitation(data),
        )

    def get_air_quality(self, latitude: float, longitude: float) -> Optional[float]:
        """Current US AQI for a location, None when unavailable"""
        params = {"latitude": latitude, "longitude": longitude, "current": "us_aqi"}
        data = self._get_json(f"{self.air_quality_url}/air-quality", params)
        if data is None:
            return None
        return (data.get("current") or {}).get("us_aqi")

    def fetch_location_signal(self, location: MonitoredLocation) -> Optional[RawSignal]:
        """
        Roster fetcher for the batch evaluators

        Wildfire-prone locations also get an AQI reading; a failed AQI
        lookup leaves us_aqi empty rather than failing the location.
        """
        signal = self.get_current_conditions(location.latitude, location.longitude)
        if signal is None or not location.wildfire_prone:
            return signal

        aqi = self.get_air_quality(location.latitude, location.longitude)
        if aqi is None:
            return signal
        return RawSignal(
            temperature=signal.temperature,
            humidity=signal.humidity,
            precipitation=signal.precipitation,
            wind_speed=signal.wind_speed,
            hourly_precipitation=signal.hourly_precipitation,
            us_aqi=aqi,
        )


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("OPEN-METEO CONNECTOR TEST")
    print("=" * 60 + "\n")

    connector = OpenMeteoConnector()
    signal = connector.get_current_conditions(25.7617, -80.1918)

    if signal:
        print(f"✓ Miami, FL: {signal.temperature}°C, {signal.humidity}% humidity, "
              f"{signal.wind_speed} km/h wind")
        print(f"  Last {len(signal.hourly_precipitation)} hours of precipitation retrieved")
    else:
        print("✗ Could not retrieve weather")
