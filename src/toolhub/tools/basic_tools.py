"""
Basic Tools — pure computation, no network

Tools:
  greet       — greeting in Korean or English
  calculator  — four arithmetic operations on two numbers
  get_time    — current time in an IANA timezone
"""

from datetime import datetime
from typing import Any, Dict, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from toolhub.core import schema
from toolhub.core.context import ServerContext
from toolhub.core.envelope import Failure, TextResult, text_output_shape
from toolhub.core.registry import ToolDescriptor
from toolhub.server.logger import get_logger

log = get_logger("tools.basic")


def format_number(value: Any) -> str:
    """Render 2.0 as '2' and 2.5 as '2.5'."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


async def _greet(ctx: ServerContext, args: Dict[str, Any]):
    name = args["name"]
    if args["language"] == "ko":
        return TextResult(f"안녕하세요, {name}님!")
    return TextResult(f"Hey there, {name}! 👋 Nice to meet you!")


_OPERATIONS = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": lambda a, b: a / b,
}


async def _calculator(ctx: ServerContext, args: Dict[str, Any]):
    a, b, op = args["number1"], args["number2"], args["operator"]
    if op == "/" and b == 0:
        return Failure("Cannot divide by zero")

    result = _OPERATIONS[op](a, b)
    return TextResult(f"{format_number(a)} {op} {format_number(b)} = {format_number(result)}")


async def _get_time(ctx: ServerContext, args: Dict[str, Any]):
    timezone = args["timezone"]
    try:
        zone = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        log.info(f"Rejected timezone {timezone!r}")
        return Failure(f"Invalid timezone: {timezone}")

    now = datetime.now(zone)
    return TextResult(
        f"Timezone: {timezone}\n"
        f"Current time: {now.strftime('%Y-%m-%d %H:%M:%S')}"
    )


TOOLS: List[ToolDescriptor] = [
    ToolDescriptor(
        name="greet",
        description="Returns a greeting for the given name and language.",
        input_shape=schema.Shape({
            "name": schema.string("Name of the person to greet"),
            "language": schema.enum(
                ["ko", "en"], "Greeting language (default: en)", default="en"
            ),
        }),
        output_shape=text_output_shape("Greeting"),
        handler=_greet,
    ),
    ToolDescriptor(
        name="calculator",
        description="Applies an arithmetic operator to two numbers and returns the result.",
        input_shape=schema.Shape({
            "number1": schema.number("First operand"),
            "number2": schema.number("Second operand"),
            "operator": schema.enum(["+", "-", "*", "/"], "Operator (+, -, *, /)"),
        }),
        output_shape=text_output_shape("Calculation result"),
        handler=_calculator,
    ),
    ToolDescriptor(
        name="get_time",
        description="Returns the current time in the given timezone.",
        input_shape=schema.Shape({
            "timezone": schema.string(
                "IANA timezone name, e.g. Asia/Seoul, America/New_York, Europe/London"
            ),
        }),
        output_shape=text_output_shape("Current time"),
        handler=_get_time,
    ),
]
