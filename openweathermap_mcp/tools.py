"""
Static tool registry: names, descriptions and input schemas.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from mcp.types import Tool

from .params import DEFAULT_LANG, DEFAULT_LIMIT, DEFAULT_UNITS, MAX_LIMIT, MIN_LIMIT, UNIT_SYSTEMS


class ToolName(str, Enum):
    CURRENT_WEATHER = "get_current_weather"
    FORECAST = "get_forecast"


@dataclass(frozen=True)
class ToolDefinition:
    name: ToolName
    description: str
    input_schema: dict[str, Any]

    def to_mcp(self) -> Tool:
        return Tool(
            name=self.name.value,
            description=self.description,
            inputSchema=self.input_schema,
        )


_UNITS_SCHEMA = {
    "type": "string",
    "description": "Units of measurement: standard (K), metric (C), imperial (F)",
    "enum": list(UNIT_SYSTEMS),
    "default": DEFAULT_UNITS,
}

_LANG_SCHEMA = {
    "type": "string",
    "description": "Language code for descriptions (e.g., en, hi, ta)",
    "default": DEFAULT_LANG,
}

_LOCATION_REQUIREMENT = [
    {"required": ["city"]},
    {"required": ["lat", "lon"]},
]


TOOL_DEFINITIONS: dict[ToolName, ToolDefinition] = {
    ToolName.CURRENT_WEATHER: ToolDefinition(
        name=ToolName.CURRENT_WEATHER,
        description=(
            "Get current weather by city or coordinates (OpenWeatherMap /weather)"
        ),
        input_schema={
            "type": "object",
            "properties": {
                "city": {
                    "type": "string",
                    "description": "City name, e.g., London or London,UK",
                },
                "lat": {"type": "number", "description": "Latitude (e.g., 28.6139)"},
                "lon": {"type": "number", "description": "Longitude (e.g., 77.2090)"},
                "units": _UNITS_SCHEMA,
                "lang": _LANG_SCHEMA,
            },
            "anyOf": _LOCATION_REQUIREMENT,
        },
    ),
    ToolName.FORECAST: ToolDefinition(
        name=ToolName.FORECAST,
        description=(
            "Get 5 day / 3 hour forecast by city or coordinates "
            "(OpenWeatherMap /forecast)"
        ),
        input_schema={
            "type": "object",
            "properties": {
                "city": {
                    "type": "string",
                    "description": "City name, e.g., Tirunelveli,IN",
                },
                "lat": {"type": "number", "description": "Latitude"},
                "lon": {"type": "number", "description": "Longitude"},
                "units": _UNITS_SCHEMA,
                "lang": _LANG_SCHEMA,
                "limit": {
                    "type": "number",
                    "description": (
                        f"Number of forecast items to return ({MIN_LIMIT}-{MAX_LIMIT})"
                    ),
                    "default": DEFAULT_LIMIT,
                },
            },
            "anyOf": _LOCATION_REQUIREMENT,
        },
    ),
}


def list_tools() -> list[Tool]:
    """Discovery response, in declaration order."""
    return [definition.to_mcp() for definition in TOOL_DEFINITIONS.values()]


__all__ = ["TOOL_DEFINITIONS", "ToolDefinition", "ToolName", "list_tools"]
