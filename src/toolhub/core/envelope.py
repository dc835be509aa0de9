"""
Response Envelope Builder

Handlers return one HandlerOutcome variant:
  TextResult(text)                 -> one text block
  ImageResult(data, media_type)    -> one image block
  StructuredResult(value)          -> one text block with the JSON document
  Failure(message)                 -> ErrorEnvelope

build() turns a successful outcome into a ResponseEnvelope. The structured
mirror is attached only when the tool declared an output shape.
"""

import base64
import json
from typing import Any, Dict, List, Optional, Union

from toolhub.core import schema
from toolhub.core.schema import Shape

# ErrorEnvelope kinds
NOT_FOUND = "not_found"
VALIDATION = "validation"
EXECUTION = "execution"


# --- content blocks ---

class TextBlock:
    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


class ImageBlock:
    __slots__ = ("data", "media_type")

    def __init__(self, data: bytes, media_type: str):
        self.data = data
        self.media_type = media_type

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "image",
            "data": base64.b64encode(self.data).decode("ascii"),
            "mimeType": self.media_type,
        }


ContentBlock = Union[TextBlock, ImageBlock]


# --- handler outcomes ---

class TextResult:
    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text


class ImageResult:
    __slots__ = ("data", "media_type")

    def __init__(self, data: bytes, media_type: str = "image/png"):
        self.data = data
        self.media_type = media_type


class StructuredResult:
    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value


class Failure:
    """A declared failure, e.g. division by zero or an unknown timezone."""

    __slots__ = ("message",)

    def __init__(self, message: str):
        self.message = message


HandlerOutcome = Union[TextResult, ImageResult, StructuredResult, Failure]


# --- envelopes ---

class ResponseEnvelope:
    """
    Content blocks plus the optional structured mirror. has_structured is
    tracked apart from `structured`, which may itself be null.
    """

    __slots__ = ("content", "structured", "has_structured")

    def __init__(
        self,
        content: List[ContentBlock],
        structured: Any = None,
        has_structured: Optional[bool] = None,
    ):
        self.content = content
        self.structured = structured
        self.has_structured = (structured is not None) if has_structured is None else has_structured

    is_error = False


class ErrorEnvelope:
    __slots__ = ("kind", "message")

    def __init__(self, kind: str, message: str):
        self.kind = kind
        self.message = message

    is_error = True

    def __repr__(self) -> str:
        return f"ErrorEnvelope({self.kind}, {self.message!r})"


def build(outcome: HandlerOutcome, output_shape: Optional[Shape] = None) -> ResponseEnvelope:
    """Wrap a successful handler outcome."""
    if isinstance(outcome, TextResult):
        blocks: List[ContentBlock] = [TextBlock(outcome.text)]
        structured = _mirror(blocks) if output_shape is not None else None
    elif isinstance(outcome, ImageResult):
        blocks = [ImageBlock(outcome.data, outcome.media_type)]
        structured = _mirror(blocks) if output_shape is not None else None
    elif isinstance(outcome, StructuredResult):
        blocks = [TextBlock(json.dumps(outcome.value, indent=2, ensure_ascii=False))]
        structured = outcome.value if output_shape is not None else None
    else:
        raise TypeError(f"Not a successful handler outcome: {outcome!r}")
    return ResponseEnvelope(blocks, structured, has_structured=output_shape is not None)


def build_error(kind: str, message: str) -> ErrorEnvelope:
    return ErrorEnvelope(kind, message)


def _mirror(blocks: List[ContentBlock]) -> Dict[str, Any]:
    return {"content": [block.to_dict() for block in blocks]}


# --- resource and prompt results ---

class DocumentContent:
    """resources/read payload: one text document."""

    __slots__ = ("uri", "mime_type", "text")

    def __init__(self, uri: str, mime_type: str, text: str):
        self.uri = uri
        self.mime_type = mime_type
        self.text = text

    is_error = False


class PromptMessage:
    __slots__ = ("role", "text")

    def __init__(self, role: str, text: str):
        self.role = role
        self.text = text


class PromptResult:
    """prompts/get payload: role-tagged messages in order."""

    __slots__ = ("description", "messages")

    def __init__(self, description: str, messages: List[PromptMessage]):
        self.description = description
        self.messages = messages

    is_error = False


def text_output_shape(description: str) -> Shape:
    """Output shape of a tool whose structured mirror is its text block list."""
    block = schema.Shape({
        "type": schema.enum(["text"]),
        "text": schema.string(description),
    })
    return schema.Shape({"content": schema.array(schema.obj(block), description)})
