"""Catalog Introspector — a read-only description of everything registered."""

from typing import Any, Dict, List

from toolhub.core.context import ServerContext


def describe(ctx: ServerContext) -> Dict[str, Any]:
    tools = [_tool_entry(t) for t in ctx.tools.list()]
    prompts = [
        {
            "name": p.name,
            "title": p.title,
            "description": p.description,
            "parameters": p.argument_shape.summary(),
        }
        for p in ctx.prompts.list()
    ]
    resources = [
        {
            "name": r.name,
            "uri": r.uri,
            "title": r.title,
            "description": r.description,
            "mimeType": r.mime_type,
        }
        for r in ctx.resources.list()
    ]

    return {
        "server": {
            "name": ctx.config.SERVER_NAME,
            "version": ctx.config.SERVER_VERSION,
            "description": ctx.config.SERVER_DESCRIPTION,
        },
        "capabilities": {
            "tools": _section(tools),
            "prompts": _section(prompts),
            "resources": _section(resources),
        },
    }


def _tool_entry(tool) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "name": tool.name,
        "description": tool.description,
        "parameters": tool.input_shape.summary(),
    }
    if tool.output_description:
        entry["output"] = tool.output_description
    return entry


def _section(items: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"count": len(items), "list": items}
