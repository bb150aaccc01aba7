"""Base exception for the vector store MCP server."""


class VectorStoreMCPError(Exception):
    """Base exception for all errors raised inside the server."""
    
    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)
