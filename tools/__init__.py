# tools package for MCP server tools
# Modules in this package expose `get_tools() -> dict[str, dict]` mapping a tool name to its
# `func`, `title`, `description`, `read_only` flag and `params` metadata.
# Each `func` is `async (arguments, client) -> ToolResult`.
# Server will dynamically import modules from this directory (skipping `_`-prefixed ones) and register them.
__all__ = []
