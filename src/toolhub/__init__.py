"""toolhub — an MCP tool gateway with schema-checked dispatch."""

__version__ = "1.0.0"
