"""
Tests for the Open-Meteo and Open-Elevation connectors.

The HTTP session is replaced with a MagicMock so no network is used.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from climate_risk.api_connectors import OpenElevationConnector, OpenMeteoConnector
from climate_risk.models import MonitoredLocation


def _response(payload=None, error=None):
    response = MagicMock()
    if error is not None:
        response.raise_for_status.side_effect = error
    response.json.return_value = payload
    return response


def _session(*responses):
    session = MagicMock()
    session.get.side_effect = list(responses)
    return session


FORECAST = {
    "current": {
        "time": "2026-10-18T02:00",
        "temperature_2m": 28.4,
        "relative_humidity_2m": 71,
        "precipitation": 1.2,
        "wind_speed_10m": 18.5,
    },
    "hourly": {
        "time": [f"2026-10-17T{h:02d}:00" for h in range(24)]
        + [f"2026-10-18T{h:02d}:00" for h in range(24)],
        "precipitation": [0.5] * 24 + [1.0] * 3 + [9.0] * 21,
    },
}


class TestOpenMeteoConnector:
    def test_current_conditions(self):
        connector = OpenMeteoConnector(session=_session(_response(FORECAST)))
        signal = connector.get_current_conditions(25.76, -80.19)
        assert signal.temperature == 28.4
        assert signal.humidity == 71
        assert signal.precipitation == 1.2
        assert signal.wind_speed == 18.5

    def test_hourly_window_stops_at_current_hour(self):
        connector = OpenMeteoConnector(session=_session(_response(FORECAST)))
        signal = connector.get_current_conditions(25.76, -80.19)
        # 21 hours from yesterday plus 00:00-02:00 today; future hours dropped
        assert len(signal.hourly_precipitation) == 24
        assert sum(signal.hourly_precipitation) == pytest.approx(21 * 0.5 + 3 * 1.0)

    def test_request_parameters(self):
        session = _session(_response(FORECAST))
        OpenMeteoConnector(base_url="http://meteo.test/v1", session=session).get_current_conditions(1.0, 2.0)
        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url == "http://meteo.test/v1/forecast"
        assert params["latitude"] == 1.0
        assert "wind_speed_10m" in params["current"]

    def test_http_error_returns_none(self):
        error = requests.exceptions.HTTPError("503 Server Error")
        connector = OpenMeteoConnector(session=_session(_response(error=error)))
        assert connector.get_current_conditions(0, 0) is None

    def test_timeout_returns_none(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.Timeout("timed out")
        assert OpenMeteoConnector(session=session).get_current_conditions(0, 0) is None

    def test_missing_current_block(self):
        connector = OpenMeteoConnector(session=_session(_response({})))
        signal = connector.get_current_conditions(0, 0)
        assert signal.temperature is None
        assert signal.hourly_precipitation == ()

    def test_air_quality(self):
        connector = OpenMeteoConnector(session=_session(_response({"current": {"us_aqi": 163}})))
        assert connector.get_air_quality(34.05, -118.24) == 163

    def test_location_fetch_adds_aqi_for_wildfire_prone(self):
        session = _session(_response(FORECAST), _response({"current": {"us_aqi": 190}}))
        location = MonitoredLocation("Los Angeles, CA", 34.05, -118.24, wildfire_prone=True)
        signal = OpenMeteoConnector(session=session).fetch_location_signal(location)
        assert signal.us_aqi == 190
        assert signal.temperature == 28.4

    def test_location_fetch_skips_aqi_otherwise(self):
        session = _session(_response(FORECAST))
        location = MonitoredLocation("Denver, CO", 39.74, -104.99)
        signal = OpenMeteoConnector(session=session).fetch_location_signal(location)
        assert signal.us_aqi is None
        assert session.get.call_count == 1


class TestOpenElevationConnector:
    def test_elevation(self):
        connector = OpenElevationConnector(
            session=_session(_response({"results": [{"elevation": 1609.0}]}))
        )
        assert connector.get_elevation(39.74, -104.99) == 1609.0

    def test_empty_results(self):
        connector = OpenElevationConnector(session=_session(_response({"results": []})))
        assert connector.get_elevation(0, 0) is None

    def test_connection_error(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        assert OpenElevationConnector(session=session).get_elevation(0, 0) is None
