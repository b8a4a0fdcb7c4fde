"""
API Connectors for the Climate Risk Platform

This package contains connectors for the external environmental data sources:
- Open-Meteo: Current weather, hourly precipitation and air quality
- Open-Elevation: Ground elevation
"""

from .open_meteo_connector import OpenMeteoConnector
from .elevation_connector import OpenElevationConnector

__all__ = [
    "OpenMeteoConnector",
    "OpenElevationConnector",
]
