"""Tests for the bundled tools, with external services mocked."""

import json
import re

import httpx
import pytest
from toolhub.core import envelope
from toolhub.core.dispatcher import Dispatcher
from toolhub.core.envelope import ErrorEnvelope, ImageBlock
from toolhub.tools.basic_tools import format_number


def _forecast(days=7):
    dates = [f"2026-10-{19 + i:02d}" for i in range(days)]
    return {
        "current_weather": {"temperature": 18.0, "weathercode": 2, "windspeed": 7.5},
        "daily": {
            "time": dates,
            "temperature_2m_max": [20.5 + i for i in range(days)],
            "temperature_2m_min": [11.0 + i for i in range(days)],
            "precipitation_sum": [0.0, 3.2] + [0.0] * (days - 2),
            "weathercode": [0, 61] + [3] * (days - 2),
        },
    }


class TestGreet:
    @pytest.mark.asyncio
    async def test_korean(self, dispatcher):
        result = await dispatcher.call_tool("greet", {"name": "Sam", "language": "ko"})
        assert "안녕하세요, Sam님!" in result.content[0].text

    @pytest.mark.asyncio
    async def test_default_language(self, dispatcher):
        result = await dispatcher.call_tool("greet", {"name": "Sam"})
        text = result.content[0].text
        assert "Hey there, Sam!" in text
        assert result.structured == {"content": [{"type": "text", "text": text}]}

    @pytest.mark.asyncio
    async def test_unsupported_language(self, dispatcher):
        result = await dispatcher.call_tool("greet", {"name": "Sam", "language": "fr"})
        assert result.kind == envelope.VALIDATION
        assert "language: invalid_enum" in result.message


class TestCalculator:
    @pytest.mark.asyncio
    async def test_division(self, dispatcher):
        result = await dispatcher.call_tool(
            "calculator", {"number1": 6, "number2": 3, "operator": "/"}
        )
        assert result.content[0].text == "6 / 3 = 2"

    @pytest.mark.asyncio
    async def test_division_by_zero(self, dispatcher):
        result = await dispatcher.call_tool(
            "calculator", {"number1": 5, "number2": 0, "operator": "/"}
        )
        assert isinstance(result, ErrorEnvelope)
        assert result.message == "calculator error: Cannot divide by zero"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("a,op,b,expected", [
        (2, "+", 3, "2 + 3 = 5"),
        (2.5, "-", 1, "2.5 - 1 = 1.5"),
        (1.5, "*", 4, "1.5 * 4 = 6"),
        (1, "/", 4, "1 / 4 = 0.25"),
    ])
    async def test_operations(self, dispatcher, a, op, b, expected):
        result = await dispatcher.call_tool(
            "calculator", {"number1": a, "number2": b, "operator": op}
        )
        assert result.content[0].text == expected

    def test_format_number(self):
        assert format_number(2.0) == "2"
        assert format_number(-0.5) == "-0.5"
        assert format_number(7) == "7"


class TestGetTime:
    @pytest.mark.asyncio
    async def test_valid_timezone(self, dispatcher):
        result = await dispatcher.call_tool("get_time", {"timezone": "Asia/Seoul"})
        text = result.content[0].text
        assert text.startswith("Timezone: Asia/Seoul\nCurrent time: ")
        assert re.search(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$", text)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tz", ["Mars/Olympus_Mons", "", "../etc/passwd"])
    async def test_invalid_timezone(self, dispatcher, tz):
        result = await dispatcher.call_tool("get_time", {"timezone": tz})
        assert result.message == f"get_time error: Invalid timezone: {tz}"


class TestGeocode:
    @pytest.mark.asyncio
    async def test_found(self, make_ctx):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[{
                "lat": "37.5666791", "lon": "126.9782914", "display_name": "Seoul, South Korea",
            }])

        result = await Dispatcher(make_ctx(handler)).call_tool("geocode", {"query": "Seoul"})
        assert result.content[0].text == (
            "Address: Seoul, South Korea\n"
            "Latitude: 37.5666791\n"
            "Longitude: 126.9782914\n"
            "Coordinates: (37.5666791, 126.9782914)"
        )
        request = seen[0]
        assert request.url.params["q"] == "Seoul"
        assert request.url.params["limit"] == "1"
        assert request.headers["User-Agent"]

    @pytest.mark.asyncio
    async def test_empty_result(self, make_ctx):
        ctx = make_ctx(lambda request: httpx.Response(200, json=[]))
        result = await Dispatcher(ctx).call_tool("geocode", {"query": "Atlantis"})
        assert result.message == "geocode error: Address not found: Atlantis"

    @pytest.mark.asyncio
    async def test_http_error(self, make_ctx):
        ctx = make_ctx(lambda request: httpx.Response(503))
        result = await Dispatcher(ctx).call_tool("geocode", {"query": "Seoul"})
        assert result.message == "geocode error: API request failed: 503 Service Unavailable"

    @pytest.mark.asyncio
    async def test_network_failure(self, make_ctx):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await Dispatcher(make_ctx(handler)).call_tool("geocode", {"query": "Seoul"})
        assert result.message == "geocode error: API request failed: connection refused"


class TestWeather:
    @pytest.mark.asyncio
    async def test_shows_three_days(self, make_ctx):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=_forecast(7))

        result = await Dispatcher(make_ctx(handler)).call_tool(
            "get_weather", {"latitude": 37.5, "longitude": 127, "forecast_days": 7}
        )
        text = result.content[0].text
        assert text.count("High: ") == 3
        assert "7-day forecast (first 3 days)" in text
        assert "Temperature: 18°C" in text
        assert "Conditions: Partly cloudy" in text
        assert "Precipitation: 3.2 mm" in text
        assert text.count("Precipitation:") == 1
        assert seen[0].url.params["forecast_days"] == "7"
        assert seen[0].url.params["timezone"] == "auto"

    @pytest.mark.asyncio
    async def test_default_forecast_days(self, make_ctx):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=_forecast(7))

        await Dispatcher(make_ctx(handler)).call_tool(
            "get_weather", {"latitude": 0, "longitude": 0}
        )
        assert seen[0].url.params["forecast_days"] == "7"

    @pytest.mark.asyncio
    async def test_short_forecast(self, make_ctx):
        ctx = make_ctx(lambda request: httpx.Response(200, json=_forecast(2)))
        result = await Dispatcher(ctx).call_tool(
            "get_weather", {"latitude": 0, "longitude": 0, "forecast_days": 2}
        )
        assert result.content[0].text.count("High: ") == 2

    @pytest.mark.asyncio
    async def test_sixteen_days_accepted(self, make_ctx):
        ctx = make_ctx(lambda request: httpx.Response(200, json=_forecast(16)))
        result = await Dispatcher(ctx).call_tool(
            "get_weather", {"latitude": 0, "longitude": 0, "forecast_days": 16}
        )
        assert not result.is_error
        assert result.content[0].text.count("High: ") == 3

    @pytest.mark.asyncio
    async def test_seventeen_days_rejected(self, dispatcher):
        result = await dispatcher.call_tool(
            "get_weather", {"latitude": 0, "longitude": 0, "forecast_days": 17}
        )
        assert result.kind == envelope.VALIDATION
        assert "forecast_days: out_of_range" in result.message

    @pytest.mark.asyncio
    async def test_api_error_payload(self, make_ctx):
        ctx = make_ctx(lambda request: httpx.Response(
            200, json={"error": True, "reason": "Latitude must be in range of -90 to 90°."}
        ))
        result = await Dispatcher(ctx).call_tool(
            "get_weather", {"latitude": 0, "longitude": 0}
        )
        assert result.message == (
            "get_weather error: API error: Latitude must be in range of -90 to 90°."
        )


class TestGenerateImage:
    @pytest.mark.asyncio
    async def test_missing_token_fails_before_network(self, make_ctx):
        # no_network handler fails the test if a request is sent
        result = await Dispatcher(make_ctx(hf_token="")).call_tool(
            "generate_image", {"prompt": "Astronaut riding a horse"}
        )
        assert result.kind == envelope.EXECUTION
        assert result.message.startswith("generate_image error: Hugging Face token is not configured")

    @pytest.mark.asyncio
    async def test_returns_image_block(self, make_ctx):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, content=b"\x89PNGdata", headers={"content-type": "image/png"})

        ctx = make_ctx(handler, hf_token="hf_test")
        result = await Dispatcher(ctx).call_tool("generate_image", {"prompt": "a cat"})

        assert len(result.content) == 1
        block = result.content[0]
        assert isinstance(block, ImageBlock)
        assert block.data == b"\x89PNGdata"
        assert block.media_type == "image/png"
        assert result.structured is None

        request = seen[0]
        assert request.headers["Authorization"] == "Bearer hf_test"
        assert str(request.url).endswith("black-forest-labs/FLUX.1-schnell")
        body = json.loads(request.content)
        assert body == {"inputs": "a cat", "parameters": {"num_inference_steps": 4}}

    @pytest.mark.asyncio
    async def test_api_failure(self, make_ctx):
        ctx = make_ctx(lambda request: httpx.Response(401), hf_token="hf_bad")
        result = await Dispatcher(ctx).call_tool("generate_image", {"prompt": "a cat"})
        assert result.message == "generate_image error: API request failed: 401 Unauthorized"
