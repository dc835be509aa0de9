"""
Error taxonomy

  ConfigurationError  — bad registration; fatal at startup, never caught
  ExecutionError      — a handler or one of its collaborators failed

Unknown targets and invalid arguments are not raised at all: the dispatcher
returns them as ErrorEnvelopes (see toolhub.core.envelope).
"""


class ToolhubError(Exception):
    """Base class for toolhub errors."""


class ConfigurationError(ToolhubError):
    """Raised while wiring the server, e.g. a duplicate registration."""


class ExecutionError(ToolhubError):
    """A handler (or an external service it called) failed."""
