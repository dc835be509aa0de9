"""
Registries — ordered, uniquely-keyed stores of tools, resources and prompts

Registration happens once at startup. A duplicate key raises
ConfigurationError and leaves the registry untouched. list() returns
descriptors in registration order; that order is what tools/list and the
catalog show.
"""

from typing import Any, Awaitable, Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from toolhub.core.errors import ConfigurationError
from toolhub.core.schema import Shape

ToolHandler = Callable[..., Awaitable[Any]]


class ToolDescriptor:
    __slots__ = (
        "name", "description", "input_shape", "output_shape",
        "handler", "title", "output_description",
    )

    def __init__(
        self,
        name: str,
        description: str,
        input_shape: Shape,
        handler: ToolHandler,
        output_shape: Optional[Shape] = None,
        title: Optional[str] = None,
        output_description: Optional[str] = None,
    ):
        self.name = name
        self.description = description
        self.input_shape = input_shape
        self.output_shape = output_shape
        self.handler = handler
        self.title = title
        self.output_description = output_description

    @property
    def key(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """MCP tools/list entry."""
        entry: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_shape.to_json_schema(),
        }
        if self.title:
            entry["title"] = self.title
        if self.output_shape is not None:
            entry["outputSchema"] = self.output_shape.to_json_schema()
        return entry


class ResourceDescriptor:
    __slots__ = ("uri", "name", "title", "description", "mime_type", "handler")

    def __init__(
        self,
        uri: str,
        name: str,
        handler: ToolHandler,
        title: str = "",
        description: str = "",
        mime_type: str = "text/plain",
    ):
        self.uri = uri
        self.name = name
        self.title = title
        self.description = description
        self.mime_type = mime_type
        self.handler = handler

    @property
    def key(self) -> str:
        return self.uri

    def to_dict(self) -> Dict[str, Any]:
        """MCP resources/list entry."""
        return {
            "uri": self.uri,
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "mimeType": self.mime_type,
        }


class PromptDescriptor:
    __slots__ = ("name", "title", "description", "argument_shape", "handler")

    def __init__(
        self,
        name: str,
        description: str,
        argument_shape: Shape,
        handler: ToolHandler,
        title: str = "",
    ):
        self.name = name
        self.title = title
        self.description = description
        self.argument_shape = argument_shape
        self.handler = handler

    @property
    def key(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """MCP prompts/list entry."""
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "arguments": [
                {
                    "name": name,
                    "description": spec.description,
                    "required": spec.required,
                }
                for name, spec in self.argument_shape.items()
            ],
        }


D = TypeVar("D", ToolDescriptor, ResourceDescriptor, PromptDescriptor)


class Registry(Generic[D]):
    """Insertion-ordered descriptor store for one category."""

    def __init__(self, kind: str):
        self.kind = kind
        self._entries: Dict[str, D] = {}

    def register(self, descriptor: D) -> D:
        key = descriptor.key
        if key in self._entries:
            raise ConfigurationError(f"{self.kind} already registered: {key}")
        self._entries[key] = descriptor
        return descriptor

    def register_all(self, descriptors: List[D]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    def get(self, key: str) -> Optional[D]:
        return self._entries.get(key)

    def list(self) -> List[D]:
        return list(self._entries.values())

    def names(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[D]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._entries)
