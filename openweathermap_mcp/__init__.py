"""
OpenWeatherMap MCP server package exposing weather and forecast tools.
"""

from .config import Settings, load_settings
from .weather_server import create_weather_server

__all__ = ["Settings", "create_weather_server", "load_settings"]
