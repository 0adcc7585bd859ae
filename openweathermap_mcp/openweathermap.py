"""
Thin client for OpenWeatherMap's current weather and forecast APIs.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, TypedDict

import requests
from requests import Session

from .config import Settings
from .params import ForecastParams, LookupParams, UnitSystem

logger = logging.getLogger(__name__)

CURRENT_WEATHER_PATH = "/weather"
FORECAST_PATH = "/forecast"

NO_DESCRIPTION = "N/A"

# fromtimestamp raises OverflowError or OSError for out-of-range epochs.
_SHAPE_ERRORS = (
    KeyError,
    TypeError,
    ValueError,
    AttributeError,
    IndexError,
    OverflowError,
    OSError,
)


class OpenWeatherMapError(RuntimeError):
    """Raised when OpenWeatherMap cannot satisfy a request."""


class Coordinates(TypedDict):
    lon: float
    lat: float


class Location(TypedDict):
    name: str | None
    country: str | None
    coord: Coordinates | None
    timezoneOffsetSeconds: int | None


class Conditions(TypedDict):
    description: str
    icon: str | None


class Temperature(TypedDict):
    value: float
    feelsLike: float
    min: float
    max: float
    units: UnitSystem


class Sun(TypedDict):
    sunriseISO: str | None
    sunsetISO: str | None


class CurrentWeatherResult(TypedDict):
    location: Location
    observationTimeISO: str
    conditions: Conditions
    temperature: Temperature
    humidity: float
    pressure: float
    wind: dict[str, Any] | None
    sun: Sun


class ForecastItem(TypedDict):
    timeISO: str
    description: str
    icon: str | None
    temperature: Temperature
    humidity: float
    pressure: float
    wind: dict[str, Any] | None
    textTime: str | None


class ForecastResult(TypedDict):
    location: Location
    count: int
    items: list[ForecastItem]


def _configure_session() -> Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


def _error_detail(exc: requests.HTTPError) -> str:
    """
    Prefer the provider's JSON error body, fall back to the requests message.
    """
    response = exc.response
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if body is not None:
            return json.dumps(body, separators=(",", ":"))
    return str(exc)


class OpenWeatherMapClient:
    """
    Issues one GET per lookup against the configured OpenWeatherMap base URL.
    """

    def __init__(self, settings: Settings, session: Session | None = None) -> None:
        self._settings = settings
        self._session = session or _configure_session()

    def fetch(self, path: str, query: dict[str, Any]) -> dict[str, Any]:
        """
        Perform a GET request and return the parsed JSON object.
        """
        url = f"{self._settings.base_url}{path}"
        params = {**query, "appid": self._settings.api_key}
        try:
            response = self._session.get(
                url, params=params, timeout=self._settings.timeout
            )
            response.raise_for_status()
        except requests.Timeout as exc:
            raise OpenWeatherMapError(
                f"request to {path} timed out after {self._settings.timeout}s: {exc}"
            ) from exc
        except requests.HTTPError as exc:
            raise OpenWeatherMapError(_error_detail(exc)) from exc
        except requests.RequestException as exc:
            raise OpenWeatherMapError(str(exc)) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise OpenWeatherMapError("OpenWeatherMap returned a non-JSON response") from exc
        if not isinstance(data, dict):
            raise OpenWeatherMapError("OpenWeatherMap returned an unexpected response")
        return data

    def current_weather(self, params: LookupParams) -> CurrentWeatherResult:
        data = self.fetch(CURRENT_WEATHER_PATH, params.query())
        return normalize_current_weather(data, params.units)

    def forecast(self, params: ForecastParams) -> ForecastResult:
        data = self.fetch(FORECAST_PATH, params.query())
        return normalize_forecast(data, params.units, params.limit)


def to_iso(epoch_seconds: float) -> str:
    """
    Render epoch seconds as a UTC instant, e.g. 1970-01-01T01:16:40.000Z.
    """
    instant = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _conditions(entry: dict[str, Any]) -> Conditions:
    weather = entry.get("weather") or []
    first = weather[0] if weather else {}
    description = first.get("description")
    return {
        "description": NO_DESCRIPTION if description is None else description,
        "icon": first.get("icon"),
    }


def _temperature(main: dict[str, Any], units: UnitSystem) -> Temperature:
    return {
        "value": main["temp"],
        "feelsLike": main["feels_like"],
        "min": main["temp_min"],
        "max": main["temp_max"],
        "units": units,
    }


def normalize_current_weather(
    data: dict[str, Any], units: UnitSystem
) -> CurrentWeatherResult:
    """
    Reshape a /weather payload.

    The observation time is shifted by the location's UTC offset so it reads
    as local time at the queried place.
    """
    try:
        main = data["main"]
        sys_block = data.get("sys") or {}
        offset = data.get("timezone")
        sunrise = sys_block.get("sunrise")
        sunset = sys_block.get("sunset")
        return {
            "location": {
                "name": data.get("name"),
                "country": sys_block.get("country"),
                "coord": data.get("coord"),
                "timezoneOffsetSeconds": offset,
            },
            "observationTimeISO": to_iso(data["dt"] + (offset or 0)),
            "conditions": _conditions(data),
            "temperature": _temperature(main, units),
            "humidity": main["humidity"],
            "pressure": main["pressure"],
            "wind": data.get("wind"),
            "sun": {
                "sunriseISO": to_iso(sunrise) if sunrise is not None else None,
                "sunsetISO": to_iso(sunset) if sunset is not None else None,
            },
        }
    except _SHAPE_ERRORS as exc:
        raise OpenWeatherMapError(
            f"unexpected current weather response: {exc!r}"
        ) from exc


def _forecast_item(entry: dict[str, Any], units: UnitSystem) -> ForecastItem:
    conditions = _conditions(entry)
    main = entry["main"]
    return {
        # Forecast entries carry no usable per-item offset; reported in UTC.
        "timeISO": to_iso(entry["dt"]),
        "description": conditions["description"],
        "icon": conditions["icon"],
        "temperature": _temperature(main, units),
        "humidity": main["humidity"],
        "pressure": main["pressure"],
        "wind": entry.get("wind"),
        "textTime": entry.get("dt_txt"),
    }


def normalize_forecast(
    data: dict[str, Any], units: UnitSystem, limit: int
) -> ForecastResult:
    """
    Reshape a /forecast payload, keeping at most ``limit`` entries.
    """
    try:
        city = data.get("city") or {}
        entries = (data.get("list") or [])[:limit]
        items = [_forecast_item(entry, units) for entry in entries]
        return {
            "location": {
                "name": city.get("name"),
                "country": city.get("country"),
                "coord": city.get("coord"),
                "timezoneOffsetSeconds": city.get("timezone"),
            },
            "count": len(items),
            "items": items,
        }
    except _SHAPE_ERRORS as exc:
        raise OpenWeatherMapError(f"unexpected forecast response: {exc!r}") from exc


__all__ = [
    "CurrentWeatherResult",
    "ForecastResult",
    "OpenWeatherMapClient",
    "OpenWeatherMapError",
    "normalize_current_weather",
    "normalize_forecast",
    "to_iso",
]
