"""
Method Router — Dispatch MCP methods to the core

Routes:
  initialize       -> server capabilities handshake
  ping             -> empty result
  tools/list       -> registered tool definitions
  tools/call       -> Dispatcher.call_tool
  resources/list   -> registered resource definitions
  resources/read   -> Dispatcher.read_resource
  prompts/list     -> registered prompt definitions
  prompts/get      -> Dispatcher.get_prompt

Notifications (initialized included) get no response.
"""

from typing import Any, Dict, Optional

from toolhub.core.context import ServerContext
from toolhub.core.dispatcher import Dispatcher
from toolhub.server.logger import get_logger
from toolhub.server.protocol import (
    initialize_result,
    tools_list_result,
    tool_call_result,
    resources_list_result,
    resource_read_result,
    prompts_list_result,
    prompt_get_result,
    ProtocolError,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
)

log = get_logger("router")


class Router:
    """MCP method dispatcher."""

    def __init__(self, ctx: ServerContext):
        self.ctx = ctx
        self.dispatcher = Dispatcher(ctx)

    async def route(self, msg_type: str, msg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Route a validated message to the appropriate handler.
        Returns the result payload or None for notifications.
        """
        if msg_type != "request":
            return None

        method = msg["method"]
        params = msg.get("params") or {}

        if method == "initialize":
            return self._handle_initialize(params)

        if method == "ping":
            return {}

        if method == "tools/list":
            return tools_list_result(self.ctx.tools.list())

        if method == "tools/call":
            name = _required_str(params, "name", "tool name")
            return tool_call_result(
                await self.dispatcher.call_tool(name, params.get("arguments"))
            )

        if method == "resources/list":
            return resources_list_result(self.ctx.resources.list())

        if method == "resources/read":
            uri = _required_str(params, "uri", "resource URI")
            return resource_read_result(await self.dispatcher.read_resource(uri))

        if method == "prompts/list":
            return prompts_list_result(self.ctx.prompts.list())

        if method == "prompts/get":
            name = _required_str(params, "name", "prompt name")
            return prompt_get_result(
                await self.dispatcher.get_prompt(name, params.get("arguments"))
            )

        raise ProtocolError(METHOD_NOT_FOUND, f"Unknown method: {method}")

    def _handle_initialize(self, params: Dict) -> Dict[str, Any]:
        client = params.get("clientInfo")
        client_name = client.get("name", "?") if isinstance(client, dict) else "?"
        log.info(f"Client initialize: {client_name} protocol={params.get('protocolVersion', '?')}")
        return initialize_result(
            server_name=self.ctx.config.SERVER_NAME,
            server_version=self.ctx.config.SERVER_VERSION,
            protocol_version=self.ctx.config.PROTOCOL_VERSION,
        )


def _required_str(params: Dict[str, Any], key: str, label: str) -> str:
    value = params.get(key)
    if not value:
        raise ProtocolError(INVALID_PARAMS, f"Missing {label}")
    if not isinstance(value, str):
        raise ProtocolError(INVALID_PARAMS, f"{label.capitalize()} must be a string")
    return value
