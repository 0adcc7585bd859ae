from openweathermap_mcp.tools import TOOL_DEFINITIONS, ToolName, list_tools


def test_two_tools_in_declaration_order():
    tools = list_tools()

    assert [tool.name for tool in tools] == ["get_current_weather", "get_forecast"]
    assert all(tool.description for tool in tools)


def test_location_requirement_declared_on_both_tools():
    for definition in TOOL_DEFINITIONS.values():
        schema = definition.input_schema
        assert schema["anyOf"] == [{"required": ["city"]}, {"required": ["lat", "lon"]}]
        assert schema["properties"]["units"]["enum"] == ["standard", "metric", "imperial"]
        assert schema["properties"]["units"]["default"] == "metric"
        assert schema["properties"]["lang"]["default"] == "en"


def test_only_forecast_declares_limit():
    current = TOOL_DEFINITIONS[ToolName.CURRENT_WEATHER].input_schema["properties"]
    forecast = TOOL_DEFINITIONS[ToolName.FORECAST].input_schema["properties"]

    assert "limit" not in current
    assert forecast["limit"]["default"] == 12


def test_mcp_tool_carries_schema_verbatim():
    tool = list_tools()[1]

    assert tool.inputSchema == TOOL_DEFINITIONS[ToolName.FORECAST].input_schema
