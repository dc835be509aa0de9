"""
toolhub MCP Tools

Modules:
  basic_tools  — greet, calculator, get_time
  geo_tools    — geocode, get_weather
  image_tools  — generate_image
"""

from toolhub.tools import basic_tools
from toolhub.tools import geo_tools
from toolhub.tools import image_tools

# Registration order is the order clients see in tools/list
ALL_TOOLS = basic_tools.TOOLS + geo_tools.TOOLS + image_tools.TOOLS
