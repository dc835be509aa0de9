"""
Dispatcher — one pass per request, no state carried between requests

  Received -> Resolved -> Validated -> Executed -> Enveloped
                  |            |            |
                  +------------+------------+--> Failed -> ErrorEnvelope

Request-time failures never escape as exceptions: unknown targets, invalid
arguments, Failure outcomes and anything a handler raises all come back as
an ErrorEnvelope.
"""

from typing import Any, Dict, List, Optional, Union

from toolhub.core import envelope
from toolhub.core.context import ServerContext
from toolhub.core.envelope import (
    DocumentContent,
    ErrorEnvelope,
    Failure,
    PromptMessage,
    PromptResult,
    ResponseEnvelope,
)
from toolhub.core.schema import validate
from toolhub.server.logger import get_logger

log = get_logger("dispatcher")

TOOL = "tool"
RESOURCE = "resource"
PROMPT = "prompt"


class Dispatcher:
    """Routes named invocations through validation, handler and envelope."""

    def __init__(self, ctx: ServerContext):
        self.ctx = ctx

    async def dispatch(
        self, kind: str, target: str, arguments: Optional[Dict[str, Any]] = None
    ) -> Union[ResponseEnvelope, DocumentContent, PromptResult, ErrorEnvelope]:
        if kind == TOOL:
            return await self.call_tool(target, arguments)
        if kind == RESOURCE:
            return await self.read_resource(target)
        if kind == PROMPT:
            return await self.get_prompt(target, arguments)
        raise ValueError(f"Unknown request kind: {kind}")

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> Union[ResponseEnvelope, ErrorEnvelope]:
        tool = self.ctx.tools.get(name) if isinstance(name, str) else None
        if tool is None:
            return self._not_found("Tool", name)

        checked = validate(tool.input_shape, arguments)
        if not checked.ok:
            return self._invalid(name, checked.message)

        outcome = await self._execute(name, tool.handler, checked.value)
        if isinstance(outcome, Failure):
            return self._failed(name, outcome.message)

        try:
            response = envelope.build(outcome, tool.output_shape)
        except TypeError as exc:
            return self._failed(name, str(exc))

        if tool.output_shape is not None:
            mirror = validate(tool.output_shape, response.structured)
            if not mirror.ok:
                return self._failed(
                    name, f"output does not match declared shape: {mirror.message}"
                )

        log.debug(f"Tool {name} ok ({len(response.content)} blocks)")
        return response

    async def read_resource(self, uri: str) -> Union[DocumentContent, ErrorEnvelope]:
        resource = self.ctx.resources.get(uri) if isinstance(uri, str) else None
        if resource is None:
            return self._not_found("Resource", uri)

        outcome = await self._execute(resource.name, resource.handler, uri)
        if isinstance(outcome, Failure):
            return self._failed(resource.name, outcome.message)
        if not isinstance(outcome, str):
            return self._failed(resource.name, "resource handler must return text")

        log.debug(f"Resource {uri} ok ({len(outcome)} chars)")
        return DocumentContent(uri, resource.mime_type, outcome)

    async def get_prompt(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> Union[PromptResult, ErrorEnvelope]:
        prompt = self.ctx.prompts.get(name) if isinstance(name, str) else None
        if prompt is None:
            return self._not_found("Prompt", name)

        checked = validate(prompt.argument_shape, arguments)
        if not checked.ok:
            return self._invalid(name, checked.message)

        outcome = await self._execute(name, prompt.handler, checked.value)
        if isinstance(outcome, Failure):
            return self._failed(name, outcome.message)
        if not isinstance(outcome, list):
            return self._failed(name, "prompt handler must return a message list")
        messages: List[PromptMessage] = outcome

        log.debug(f"Prompt {name} ok ({len(messages)} messages)")
        return PromptResult(prompt.description, messages)

    async def _execute(self, name: str, handler, payload: Any) -> Any:
        """Await the handler; a raised exception becomes a Failure."""
        try:
            return await handler(self.ctx, payload)
        except Exception as exc:
            log.error(f"{name} raised: {exc}", exc_info=True)
            return Failure(str(exc) or exc.__class__.__name__)

    # -- error envelopes --

    def _not_found(self, kind: str, target: str) -> ErrorEnvelope:
        log.warning(f"{kind} not found: {target}")
        return envelope.build_error(envelope.NOT_FOUND, f"{kind} not found: {target}")

    def _invalid(self, name: str, details: str) -> ErrorEnvelope:
        log.warning(f"Invalid arguments for {name}: {details}")
        return envelope.build_error(
            envelope.VALIDATION, f"Invalid arguments for {name}: {details}"
        )

    def _failed(self, name: str, cause: str) -> ErrorEnvelope:
        log.warning(f"{name} failed: {cause}")
        return envelope.build_error(envelope.EXECUTION, f"{name} error: {cause}")
