"""
Validated lookup parameters built from loosely typed tool arguments.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal, Mapping, cast

from .errors import invalid_params

UnitSystem = Literal["standard", "metric", "imperial"]

UNIT_SYSTEMS: tuple[UnitSystem, ...] = ("standard", "metric", "imperial")
DEFAULT_UNITS: UnitSystem = "metric"
DEFAULT_LANG = "en"

MIN_LIMIT = 1
MAX_LIMIT = 40
DEFAULT_LIMIT = 12

MISSING_LOCATION = "Provide either city or both lat and lon"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coordinate(value: Any) -> float:
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise invalid_params("lat and lon must be finite numbers")
    return number


def _normalize_units(units: Any) -> UnitSystem:
    if units is None:
        return DEFAULT_UNITS
    if not isinstance(units, str):
        raise invalid_params("units must be one of: standard, metric, imperial")
    normalized = units.strip().lower()
    if not normalized:
        return DEFAULT_UNITS
    if normalized not in UNIT_SYSTEMS:
        raise invalid_params(
            f"Unsupported units {units!r}. Use standard, metric or imperial."
        )
    return cast(UnitSystem, normalized)


def _normalize_lang(lang: Any) -> str:
    if lang is None:
        return DEFAULT_LANG
    normalized = str(lang).strip()
    return normalized or DEFAULT_LANG


def clamp_limit(value: Any) -> int:
    """
    Floor and clamp a requested forecast size to [1, 40].

    Missing or unparsable values yield the default of 12; this never raises.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_LIMIT
    try:
        number = float(value)
    except OverflowError:
        return MAX_LIMIT if value > 0 else MIN_LIMIT
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    if math.isnan(number):
        return DEFAULT_LIMIT
    if math.isinf(number):
        return MAX_LIMIT if number > 0 else MIN_LIMIT
    return max(MIN_LIMIT, min(MAX_LIMIT, math.floor(number)))


@dataclass(frozen=True)
class LookupParams:
    """Location, units and language for a single provider lookup."""

    city: str | None = None
    lat: float | None = None
    lon: float | None = None
    units: UnitSystem = DEFAULT_UNITS
    lang: str = DEFAULT_LANG

    def __post_init__(self) -> None:
        has_city = self.city is not None
        has_coords = self.lat is not None and self.lon is not None
        if has_city == has_coords:
            raise invalid_params(MISSING_LOCATION)
        if self.units not in UNIT_SYSTEMS:
            raise invalid_params(
                f"Unsupported units {self.units!r}. Use standard, metric or imperial."
            )

    @staticmethod
    def _location(arguments: Mapping[str, Any]) -> dict[str, Any]:
        city = arguments.get("city")
        if isinstance(city, str) and city.strip():
            return {"city": city.strip()}
        lat = arguments.get("lat")
        lon = arguments.get("lon")
        if _is_number(lat) and _is_number(lon):
            return {"lat": _coordinate(lat), "lon": _coordinate(lon)}
        raise invalid_params(MISSING_LOCATION)

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any] | None) -> "LookupParams":
        arguments = arguments or {}
        return cls(
            **cls._location(arguments),
            units=_normalize_units(arguments.get("units")),
            lang=_normalize_lang(arguments.get("lang")),
        )

    def query(self) -> dict[str, Any]:
        """Base provider query: units, lang and either q or lat/lon."""
        params: dict[str, Any] = {"units": self.units, "lang": self.lang}
        if self.city is not None:
            params["q"] = self.city
        else:
            params["lat"] = self.lat
            params["lon"] = self.lon
        return params


@dataclass(frozen=True)
class ForecastParams(LookupParams):
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        super().__post_init__()
        if not MIN_LIMIT <= self.limit <= MAX_LIMIT:
            raise invalid_params(f"limit must be between {MIN_LIMIT} and {MAX_LIMIT}")

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any] | None) -> "ForecastParams":
        arguments = arguments or {}
        return cls(
            **cls._location(arguments),
            units=_normalize_units(arguments.get("units")),
            lang=_normalize_lang(arguments.get("lang")),
            limit=clamp_limit(arguments.get("limit")),
        )

    def query(self) -> dict[str, Any]:
        params = super().query()
        params["cnt"] = self.limit
        return params


__all__ = [
    "DEFAULT_LIMIT",
    "ForecastParams",
    "LookupParams",
    "UnitSystem",
    "clamp_limit",
]
