"""
Outbound HTTP helpers for tool bodies

Any transport error or non-2xx status becomes an ExecutionError carrying a
readable cause; the dispatcher turns it into "<tool> error: <cause>".
"""

from typing import Any, Dict, Optional, Tuple

import httpx

from toolhub.core.errors import ExecutionError
from toolhub.server.logger import get_logger

log = get_logger("tools.http")


def _check(response: httpx.Response):
    if response.is_success:
        return
    raise ExecutionError(f"API request failed: {response.status_code} {response.reason_phrase}")


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    try:
        response = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as exc:
        log.error(f"GET {url} failed: {exc}")
        raise ExecutionError(f"API request failed: {exc}") from exc

    _check(response)
    try:
        return response.json()
    except ValueError as exc:
        raise ExecutionError("API returned invalid JSON") from exc


async def post_bytes(
    client: httpx.AsyncClient,
    url: str,
    payload: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
) -> Tuple[bytes, str]:
    """POST a JSON payload, return (body, content type)."""
    try:
        response = await client.post(url, json=payload, headers=headers)
    except httpx.HTTPError as exc:
        log.error(f"POST {url} failed: {exc}")
        raise ExecutionError(f"API request failed: {exc}") from exc

    _check(response)
    content_type = response.headers.get("content-type", "").split(";")[0].strip()
    return response.content, content_type
