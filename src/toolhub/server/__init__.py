"""toolhub MCP server — raw JSON-RPC over stdio."""
