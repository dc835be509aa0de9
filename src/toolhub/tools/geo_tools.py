"""
Geo Tools — location and weather lookups

Tools:
  geocode      — place name or address -> coordinates (Nominatim)
  get_weather  — current conditions and daily forecast (Open-Meteo)
"""

from datetime import date
from typing import Any, Dict, List

from toolhub.core import schema
from toolhub.core.context import ServerContext
from toolhub.core.envelope import Failure, TextResult, text_output_shape
from toolhub.core.registry import ToolDescriptor
from toolhub.server.logger import get_logger
from toolhub.tools.basic_tools import format_number
from toolhub.tools.http import get_json

log = get_logger("tools.geo")

# Only the first days of the forecast are rendered, whatever was requested
MAX_DAYS_SHOWN = 3

# WMO weather interpretation codes
WEATHER_CODES: Dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snowfall",
    73: "Moderate snowfall",
    75: "Heavy snowfall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def describe_weather(code: Any) -> str:
    return WEATHER_CODES.get(code, f"Weather code: {code}")


async def _geocode(ctx: ServerContext, args: Dict[str, Any]):
    query = args["query"]
    data = await get_json(
        ctx.http,
        ctx.config.NOMINATIM_URL,
        params={"q": query, "format": "json", "limit": "1"},
        # Nominatim rejects requests without a User-Agent
        headers={"User-Agent": ctx.config.USER_AGENT},
    )
    if not isinstance(data, list) or not data:
        return Failure(f"Address not found: {query}")

    place = data[0]
    lat = format_number(float(place["lat"]))
    lon = format_number(float(place["lon"]))
    display_name = place.get("display_name") or query

    return TextResult(
        f"Address: {display_name}\n"
        f"Latitude: {lat}\n"
        f"Longitude: {lon}\n"
        f"Coordinates: ({lat}, {lon})"
    )


async def _get_weather(ctx: ServerContext, args: Dict[str, Any]):
    latitude = args["latitude"]
    longitude = args["longitude"]
    forecast_days = args["forecast_days"]

    data = await get_json(ctx.http, ctx.config.OPEN_METEO_URL, params={
        "latitude": format_number(latitude),
        "longitude": format_number(longitude),
        "current_weather": "true",
        "hourly": "temperature_2m,relativehumidity_2m,precipitation,weathercode,windspeed_10m",
        "daily": "temperature_2m_max,temperature_2m_min,precipitation_sum,weathercode",
        "forecast_days": str(forecast_days),
        "timezone": "auto",
    })
    if data.get("error"):
        return Failure(f"API error: {data.get('reason')}")

    current = data["current_weather"]
    daily = data["daily"]
    days_shown = min(forecast_days, MAX_DAYS_SHOWN, len(daily["time"]))

    output = f"📍 Location: latitude {format_number(latitude)}, longitude {format_number(longitude)}\n\n"
    output += "🌡️ Current weather\n"
    output += f"Temperature: {format_number(current['temperature'])}°C\n"
    output += f"Conditions: {describe_weather(current['weathercode'])}\n"
    output += f"Wind speed: {format_number(current['windspeed'])} km/h\n\n"

    output += f"📅 {forecast_days}-day forecast (first {days_shown} days)\n"
    for i in range(days_shown):
        day = date.fromisoformat(daily["time"][i])
        output += f"\n{day.strftime('%a, %b %d')}\n"
        output += (
            f"High: {format_number(daily['temperature_2m_max'][i])}°C / "
            f"Low: {format_number(daily['temperature_2m_min'][i])}°C\n"
        )
        output += f"Conditions: {describe_weather(daily['weathercode'][i])}\n"
        precipitation = daily["precipitation_sum"][i]
        if precipitation and precipitation > 0:
            output += f"Precipitation: {format_number(precipitation)} mm\n"

    log.debug(f"Weather for ({latitude}, {longitude}): {days_shown}/{forecast_days} days shown")
    return TextResult(output)


TOOLS: List[ToolDescriptor] = [
    ToolDescriptor(
        name="geocode",
        description="Looks up a city name or address and returns its latitude and longitude.",
        input_shape=schema.Shape({
            "query": schema.string(
                'City name or address to search for, e.g. "Seoul", "New York"'
            ),
        }),
        output_shape=text_output_shape("Latitude and longitude"),
        handler=_geocode,
    ),
    ToolDescriptor(
        name="get_weather",
        description=(
            "Returns current weather and a daily forecast for the given coordinates "
            "and forecast length."
        ),
        input_shape=schema.Shape({
            "latitude": schema.number("Latitude (WGS84)"),
            "longitude": schema.number("Longitude (WGS84)"),
            "forecast_days": schema.integer(
                "Forecast length in days (default: 7, max: 16)",
                default=7, minimum=1, maximum=16,
            ),
        }),
        output_shape=text_output_shape("Weather report"),
        handler=_get_weather,
    ),
]
