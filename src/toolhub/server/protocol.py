"""
JSON-RPC 2.0 Protocol — message checks and MCP wire encoding

Two halves:
- JSON-RPC framing: classify incoming messages, build responses and errors
- MCP results: encode registry descriptors and dispatcher envelopes as the
  payloads of initialize, */list, tools/call, resources/read and prompts/get

Tool failures are encoded in-band (isError). Resource and prompt failures
become ProtocolError with the code mapped from the envelope kind.
"""

from typing import Any, Dict, Iterable, Optional, Union

from toolhub.core import envelope
from toolhub.core.envelope import (
    DocumentContent,
    ErrorEnvelope,
    PromptResult,
    ResponseEnvelope,
    TextBlock,
)
from toolhub.core.registry import PromptDescriptor, ResourceDescriptor, ToolDescriptor

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

RequestId = Union[int, str]


class ProtocolError(Exception):
    """An error answered with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


def validate_message(msg: Any) -> str:
    """
    Classify a decoded message as 'request', 'notification', 'response' or
    'error'. Anything else raises ProtocolError(INVALID_REQUEST).
    """
    if not isinstance(msg, dict):
        raise ProtocolError(INVALID_REQUEST, "Message must be a JSON object")
    if msg.get("jsonrpc") != JSONRPC_VERSION:
        raise ProtocolError(INVALID_REQUEST, f"Expected jsonrpc={JSONRPC_VERSION}")

    if "method" in msg:
        if not isinstance(msg["method"], str):
            raise ProtocolError(INVALID_REQUEST, "Method must be a string")
        if msg.get("params") is not None and not isinstance(msg["params"], dict):
            raise ProtocolError(INVALID_REQUEST, "Params must be an object")
        return "request" if "id" in msg else "notification"

    if "id" in msg:
        if "result" in msg:
            return "response"
        if "error" in msg:
            return "error"
    raise ProtocolError(INVALID_REQUEST, "Cannot determine message type")


def make_response(request_id: RequestId, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def make_error(
    request_id: Optional[RequestId],
    code: int,
    message: str,
    data: Any = None,
) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error}


# --- MCP results ---

_ERROR_CODES = {
    envelope.NOT_FOUND: INVALID_PARAMS,
    envelope.VALIDATION: INVALID_PARAMS,
    envelope.EXECUTION: INTERNAL_ERROR,
}


def initialize_result(
    server_name: str,
    server_version: str,
    protocol_version: str,
    capabilities: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Handshake payload; every capability is static, so nothing is listChanged."""
    return {
        "protocolVersion": protocol_version,
        "capabilities": capabilities or {
            "tools": {"listChanged": False},
            "resources": {"subscribe": False, "listChanged": False},
            "prompts": {"listChanged": False},
        },
        "serverInfo": {"name": server_name, "version": server_version},
    }


def tools_list_result(tools: Iterable[ToolDescriptor]) -> Dict[str, Any]:
    return {"tools": [tool.to_dict() for tool in tools]}


def resources_list_result(resources: Iterable[ResourceDescriptor]) -> Dict[str, Any]:
    return {"resources": [resource.to_dict() for resource in resources]}


def prompts_list_result(prompts: Iterable[PromptDescriptor]) -> Dict[str, Any]:
    return {"prompts": [prompt.to_dict() for prompt in prompts]}


def tool_call_result(result: Union[ResponseEnvelope, ErrorEnvelope]) -> Dict[str, Any]:
    if isinstance(result, ErrorEnvelope):
        return {"content": [TextBlock(result.message).to_dict()], "isError": True}

    payload: Dict[str, Any] = {"content": [block.to_dict() for block in result.content]}
    if result.has_structured:
        payload["structuredContent"] = result.structured
    return payload


def resource_read_result(result: Union[DocumentContent, ErrorEnvelope]) -> Dict[str, Any]:
    if isinstance(result, ErrorEnvelope):
        raise envelope_error(result)
    return {
        "contents": [{"uri": result.uri, "mimeType": result.mime_type, "text": result.text}],
    }


def prompt_get_result(result: Union[PromptResult, ErrorEnvelope]) -> Dict[str, Any]:
    if isinstance(result, ErrorEnvelope):
        raise envelope_error(result)
    return {
        "description": result.description,
        "messages": [
            {"role": message.role, "content": TextBlock(message.text).to_dict()}
            for message in result.messages
        ],
    }


def envelope_error(error: ErrorEnvelope) -> ProtocolError:
    """The JSON-RPC error a resource or prompt ErrorEnvelope is answered with."""
    return ProtocolError(_ERROR_CODES.get(error.kind, INTERNAL_ERROR), error.message)
