"""Server assembly: every tool, resource and prompt this package ships."""

from typing import Optional

from toolhub.core.context import ServerContext
from toolhub.prompts import PROMPTS
from toolhub.resources import RESOURCES
from toolhub.server.server import ToolhubServer
from toolhub.server.transport import StdioTransport
from toolhub.tools import ALL_TOOLS


def build_server(
    ctx: Optional[ServerContext] = None,
    transport: Optional[StdioTransport] = None,
) -> ToolhubServer:
    """Create a server with the full catalog registered."""
    srv = ToolhubServer(ctx=ctx, transport=transport)
    srv.register_tools(ALL_TOOLS)
    srv.register_resources(RESOURCES)
    srv.register_prompts(PROMPTS)
    return srv
