# ABOUTME: Tests for the Surfline forecast API client
# ABOUTME: Uses mocked requests to validate params, decoding, and error mapping

from unittest.mock import MagicMock, patch

import pytest
import requests

from surfline2influx.errors import ForecastError
from surfline2influx.forecast import client as client_module
from surfline2influx.forecast.client import SurflineClient
from surfline2influx.forecast.models import RatingForecast, TideForecast, WaveForecast, WindForecast

WIND_RESPONSE = {
    "associated": {"location": {"lat": 32.79, "lon": -117.26}},
    "data": {
        "wind": [
            {
                "timestamp": 1692514800,
                "utcOffset": -7,
                "speed": 12.5,
                "direction": 270,
                "directionType": "Onshore",
                "gust": 15.1,
                "optimalScore": 0,
            }
        ]
    },
}

WAVE_RESPONSE = {
    "data": {
        "wave": [
            {
                "timestamp": 1692514800,
                "utcOffset": -7,
                "probability": 85.0,
                "surf": {
                    "min": 2,
                    "max": 3,
                    "optimalScore": 1,
                    "humanRelation": "Thigh to waist",
                    "raw": {"min": 2.1, "max": 3.2},
                },
                "power": 120.5,
                "swells": [
                    {"height": 1.5, "period": 14, "impact": 0.6, "power": 80.1,
                     "direction": 210, "directionMin": 200, "optimalScore": 1},
                    {"height": 0.8, "period": 8, "impact": 0.4, "power": 20.0,
                     "direction": 280, "directionMin": 270, "optimalScore": 0},
                ],
            }
        ]
    }
}

TIDE_RESPONSE = {
    "associated": {
        "tideLocation": {"name": "La Jolla", "lat": 32.87, "lon": -117.26, "min": -1.2, "max": 6.1}
    },
    "data": {
        "tides": [
            {"timestamp": 1692514800, "utcOffset": -7, "type": "HIGH", "height": 5.4},
            {"timestamp": 1692536400, "utcOffset": -7, "type": "LOW", "height": 0.3},
        ]
    },
}

RATING_RESPONSE = {
    "data": {
        "rating": [
            {"timestamp": 1692514800, "utcOffset": -7, "rating": {"key": "FAIR", "value": 2}}
        ]
    }
}


def mock_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = "error body"
    return response


class TestSurflineClient:
    """Tests for SurflineClient"""

    def test_wind_forecast_decodes_samples_and_location(self):
        with patch("surfline2influx.forecast.client.requests.get") as mock_get:
            mock_get.return_value = mock_response(WIND_RESPONSE)

            result = SurflineClient(base_url="https://example.test").get_wind_forecast("spot-1", 5, 1)

        assert isinstance(result, WindForecast)
        assert result.location.lat == 32.79
        assert result.location.lon == -117.26
        assert len(result.samples) == 1
        sample = result.samples[0]
        assert sample.speed == 12.5
        assert sample.direction == 270
        assert sample.direction_type == "Onshore"
        assert sample.gust == 15.1
        assert sample.utc_offset == -7

    def test_wind_forecast_sends_flags_and_window(self):
        with patch("surfline2influx.forecast.client.requests.get") as mock_get:
            mock_get.return_value = mock_response(WIND_RESPONSE)

            SurflineClient(base_url="https://example.test/", timeout=3).get_wind_forecast(
                "spot-1", 5, 1, corrected=False, cache_enabled=True
            )

        mock_get.assert_called_once()
        args, kwargs = mock_get.call_args
        assert args[0] == "https://example.test/wind"
        assert kwargs["params"] == {
            "spotId": "spot-1",
            "days": 5,
            "intervalHours": 1,
            "corrected": "false",
            "cacheEnabled": "true",
        }
        assert kwargs["timeout"] == 3

    def test_base_url_defaults_to_config(self):
        with patch.object(client_module.Config, "SURFLINE_BASE_URL", "https://config.test/forecasts/"):
            client = SurflineClient()

        assert client.base_url == "https://config.test/forecasts"

    def test_wave_forecast_decodes_nested_swells(self):
        with patch("surfline2influx.forecast.client.requests.get") as mock_get:
            mock_get.return_value = mock_response(WAVE_RESPONSE)

            result = SurflineClient(base_url="https://example.test").get_wave_forecast("spot-1", 5, 1)

        assert isinstance(result, WaveForecast)
        sample = result.samples[0]
        assert sample.probability == 85.0
        assert sample.surf.human_relation == "Thigh to waist"
        assert sample.surf.raw_min == 2.1
        assert sample.surf.raw_max == 3.2
        assert [s.period for s in sample.swells] == [14, 8]
        assert sample.swells[0].direction_min == 200
        assert mock_get.call_args[0][0] == "https://example.test/wave"

    def test_tide_forecast_decodes_station(self):
        with patch("surfline2influx.forecast.client.requests.get") as mock_get:
            mock_get.return_value = mock_response(TIDE_RESPONSE)

            result = SurflineClient(base_url="https://example.test").get_tide_forecast("spot-1", 5, 1)

        assert isinstance(result, TideForecast)
        assert result.location.name == "La Jolla"
        assert [t.type for t in result.samples] == ["HIGH", "LOW"]
        assert mock_get.call_args[0][0] == "https://example.test/tides"

    def test_rating_forecast_decodes_key_and_value(self):
        with patch("surfline2influx.forecast.client.requests.get") as mock_get:
            mock_get.return_value = mock_response(RATING_RESPONSE)

            result = SurflineClient(base_url="https://example.test").get_rating_forecast("spot-1", 5, 1)

        assert isinstance(result, RatingForecast)
        assert result.samples[0].key == "FAIR"
        assert result.samples[0].value == 2

    def test_http_error_raises_forecast_error(self):
        with patch("surfline2influx.forecast.client.requests.get") as mock_get:
            mock_get.return_value = mock_response({}, status_code=503)

            with pytest.raises(ForecastError) as exc_info:
                SurflineClient(base_url="https://example.test").get_wave_forecast("spot-1", 5, 1)

        assert exc_info.value.kind == "wave"
        assert exc_info.value.spot_id == "spot-1"
        assert "HTTP 503" in str(exc_info.value)

    def test_network_error_raises_forecast_error(self):
        with patch("surfline2influx.forecast.client.requests.get") as mock_get:
            mock_get.side_effect = requests.ConnectionError("Connection refused")

            with pytest.raises(ForecastError, match="Connection refused") as exc_info:
                SurflineClient(base_url="https://example.test").get_tide_forecast("spot-1", 5, 1)

        assert exc_info.value.kind == "tide"
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_invalid_json_raises_forecast_error(self):
        with patch("surfline2influx.forecast.client.requests.get") as mock_get:
            response = mock_response(None)
            response.json.side_effect = ValueError("Expecting value")
            mock_get.return_value = response

            with pytest.raises(ForecastError, match="invalid JSON"):
                SurflineClient(base_url="https://example.test").get_rating_forecast("spot-1", 5, 1)

    def test_malformed_response_raises_forecast_error(self):
        with patch("surfline2influx.forecast.client.requests.get") as mock_get:
            mock_get.return_value = mock_response({"unexpected": "structure"})

            with pytest.raises(ForecastError, match="malformed response") as exc_info:
                SurflineClient(base_url="https://example.test").get_wind_forecast("spot-1", 5, 1)

        assert exc_info.value.kind == "wind"
