"""MCP protocol transport: JSON-RPC over HTTP."""
