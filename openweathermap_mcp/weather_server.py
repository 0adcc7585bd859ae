"""
FastMCP server exposing OpenWeatherMap current weather and forecast tools.
"""

from __future__ import annotations

import json
import logging
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Mapping

from fastmcp import FastMCP
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import CallToolRequestParams, TextContent

from .config import Settings
from .errors import ToolInvocationError, internal_error, method_not_found
from .openweathermap import OpenWeatherMapClient, OpenWeatherMapError
from .params import ForecastParams, LookupParams
from .tools import TOOL_DEFINITIONS, ToolName

if TYPE_CHECKING:
    from fastmcp.server.middleware import CallNext

logger = logging.getLogger(__name__)

Handler = Callable[[Mapping[str, Any]], Any]


def _as_text(payload: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


class WeatherToolInvoker:
    """
    Resolves a tool name, validates its arguments and runs one provider lookup.
    """

    def __init__(self, client: OpenWeatherMapClient) -> None:
        self._client = client
        self._handlers: dict[ToolName, Handler] = {
            ToolName.CURRENT_WEATHER: self._current_weather,
            ToolName.FORECAST: self._forecast,
        }

    def _current_weather(self, arguments: Mapping[str, Any]) -> Any:
        params = LookupParams.from_arguments(arguments)
        logger.info("Fetching current weather %s", params.query())
        return self._client.current_weather(params)

    def _forecast(self, arguments: Mapping[str, Any]) -> Any:
        params = ForecastParams.from_arguments(arguments)
        logger.info("Fetching forecast %s", params.query())
        return self._client.forecast(params)

    def resolve(self, name: Any) -> ToolName:
        """Map a requested name onto a declared tool or raise MethodNotFound."""
        try:
            return ToolName(name)
        except ValueError:
            logger.error("Unknown tool requested: %s", name)
            raise method_not_found(f"Unknown tool: {name}") from None

    def invoke(
        self, name: str, arguments: Mapping[str, Any] | None
    ) -> list[TextContent]:
        tool = self.resolve(name)

        try:
            return _as_text(self._handlers[tool](arguments or {}))
        except ToolInvocationError as exc:
            logger.error("Rejected %s call: %s", tool.value, exc)
            raise
        except OpenWeatherMapError as exc:
            logger.error("Failed to fetch data for %s: %s", tool.value, exc)
            raise internal_error(f"Failed to fetch data: {exc}") from exc
        except Exception as exc:
            logger.exception("Unexpected failure in %s", tool.value)
            raise internal_error(f"Failed to fetch data: {exc}") from exc


class WeatherTool(Tool):
    """MCP tool whose input schema is declared statically."""

    handler: Callable[[Mapping[str, Any]], list[TextContent]]

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        return ToolResult(content=self.handler(arguments))


class ToolNameMiddleware(Middleware):
    """Rejects undeclared tool names through the invoker before lookup."""

    def __init__(self, invoker: WeatherToolInvoker) -> None:
        self._invoker = invoker

    async def on_call_tool(
        self,
        context: MiddlewareContext[CallToolRequestParams],
        call_next: CallNext[CallToolRequestParams, ToolResult],
    ) -> ToolResult:
        self._invoker.resolve(context.message.name)
        return await call_next(context)


def create_weather_server(
    settings: Settings, client: OpenWeatherMapClient | None = None
) -> FastMCP:
    """
    Create and configure the FastMCP server with the weather tools.
    """
    invoker = WeatherToolInvoker(client or OpenWeatherMapClient(settings))
    server = FastMCP(settings.server_name, middleware=[ToolNameMiddleware(invoker)])

    for definition in TOOL_DEFINITIONS.values():
        server.add_tool(
            WeatherTool(
                name=definition.name.value,
                description=definition.description,
                parameters=definition.input_schema,
                handler=partial(invoker.invoke, definition.name.value),
            )
        )

    logger.debug("Registered tools: %s", ", ".join(t.value for t in TOOL_DEFINITIONS))
    return server


__all__ = ["ToolNameMiddleware", "WeatherTool", "WeatherToolInvoker", "create_weather_server"]
