"""toolhub core — registries, validation, dispatch and envelopes."""

from toolhub.core.context import ServerContext
from toolhub.core.dispatcher import Dispatcher
from toolhub.core.errors import ConfigurationError, ExecutionError
from toolhub.core.registry import PromptDescriptor, Registry, ResourceDescriptor, ToolDescriptor

__all__ = [
    "ServerContext",
    "Dispatcher",
    "ConfigurationError",
    "ExecutionError",
    "Registry",
    "ToolDescriptor",
    "ResourceDescriptor",
    "PromptDescriptor",
]
