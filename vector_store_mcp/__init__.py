"""MCP gateway for the OpenAI vector store and files API."""

__version__ = "1.2.0"
