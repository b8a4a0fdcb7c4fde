"""
Open-Elevation API Connector

API Documentation: https://open-elevation.com/
"""

import requests
from typing import Optional
import logging

from climate_risk.config import settings
from climate_risk.models import MonitoredLocation

logger = logging.getLogger(__name__)


class OpenElevationConnector:
    """Connector for the Open-Elevation lookup API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url or settings.OPEN_ELEVATION_URL
        self.timeout = timeout or settings.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def get_elevation(self, latitude: float, longitude: float) -> Optional[float]:
        """Ground elevation in metres, None when the lookup fails"""
        url = f"{self.base_url}/lookup"
        params = {"locations": f"{latitude},{longitude}"}

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            results = response.json().get("results") or []
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching elevation: {e}")
            return None
        except ValueError as e:
            logger.error(f"Invalid elevation response: {e}")
            return None

        if not results or results[0].get("elevation") is None:
            logger.warning(f"No elevation for ({latitude}, {longitude})")
            return None
        return float(results[0]["elevation"])

    def fetch_location_elevation(self, location: MonitoredLocation) -> Optional[float]:
        return self.get_elevation(location.latitude, location.longitude)
