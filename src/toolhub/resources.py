"""
Resources

  mcp://server-info  — catalog of tools, prompts and resources plus runtime
                       metadata, as a JSON document
"""

import json
import platform
from datetime import datetime, timezone
from typing import List

from toolhub.core.catalog import describe
from toolhub.core.context import ServerContext
from toolhub.core.registry import ResourceDescriptor

SERVER_INFO_URI = "mcp://server-info"


def format_uptime(seconds: float) -> str:
    seconds = int(seconds)
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m {seconds % 60}s"


async def _server_info(ctx: ServerContext, uri: str) -> str:
    info = describe(ctx)
    uptime = ctx.uptime
    info["system"] = {
        "pythonVersion": platform.python_version(),
        "platform": platform.system().lower(),
        "architecture": platform.machine(),
    }
    info["runtime"] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": uptime,
        "uptimeFormatted": format_uptime(uptime),
    }
    return json.dumps(info, indent=2, ensure_ascii=False)


RESOURCES: List[ResourceDescriptor] = [
    ResourceDescriptor(
        uri=SERVER_INFO_URI,
        name="server-info",
        title="Server info",
        description="Server information and the available tools, resources and prompts",
        mime_type="application/json",
        handler=_server_info,
    ),
]
