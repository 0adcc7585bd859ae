import json

import pytest
import requests

from openweathermap_mcp.config import Settings
from openweathermap_mcp.openweathermap import OpenWeatherMapClient
from openweathermap_mcp.weather_server import WeatherToolInvoker


def make_response(payload, status=200, url="https://api.test/data/2.5/weather"):
    response = requests.Response()
    response.status_code = status
    response.url = url
    if isinstance(payload, (bytes, str)):
        response._content = payload if isinstance(payload, bytes) else payload.encode()
    else:
        response._content = json.dumps(payload).encode()
    return response


class FakeSession:
    """Records GET calls and replays queued responses or exceptions."""

    def __init__(self):
        self.calls = []
        self.queue = []

    def respond(self, payload, status=200):
        self.queue.append(make_response(payload, status))

    def fail(self, exc):
        self.queue.append(exc)

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        outcome = self.queue.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def settings():
    return Settings(api_key="test-key", base_url="https://api.test/data/2.5", timeout=5.0)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(settings, session):
    return OpenWeatherMapClient(settings, session=session)


@pytest.fixture
def invoker(client):
    return WeatherToolInvoker(client)


@pytest.fixture
def current_payload():
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
        "main": {
            "temp": 14.2,
            "feels_like": 13.6,
            "temp_min": 12.9,
            "temp_max": 15.4,
            "pressure": 1015,
            "humidity": 72,
        },
        "wind": {"speed": 4.6, "deg": 240},
        "sys": {"country": "GB", "sunrise": 1700000000, "sunset": 1700030000},
        "name": "London",
        "dt": 1000,
        "timezone": 3600,
    }


def forecast_entry(dt, description="light rain", icon="10d"):
    weather = [{"description": description, "icon": icon}] if description else []
    return {
        "dt": dt,
        "main": {
            "temp": 10.0,
            "feels_like": 9.1,
            "temp_min": 9.5,
            "temp_max": 10.4,
            "pressure": 1012,
            "humidity": 80,
        },
        "weather": weather,
        "wind": {"speed": 3.2, "deg": 200, "gust": 6.1},
        "dt_txt": "2023-11-14 21:00:00",
    }


@pytest.fixture
def forecast_payload():
    return {
        "cod": "200",
        "cnt": 3,
        "list": [forecast_entry(1700000000 + i * 10800) for i in range(3)],
        "city": {
            "name": "Tirunelveli",
            "country": "IN",
            "coord": {"lat": 8.7333, "lon": 77.7},
            "timezone": 19800,
        },
    }
