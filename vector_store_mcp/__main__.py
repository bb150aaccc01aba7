"""Run the MCP server with uvicorn: ``python -m vector_store_mcp``."""
import argparse
import uvicorn

from .config import get_settings


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Serve the OpenAI vector store API as MCP tools.")
    parser.add_argument("--host", type=str, default=settings.HOST, help="Host to bind the server to.")
    parser.add_argument("--port", type=int, default=settings.PORT, help="Port to run the server on.")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reloading for development.")
    args = parser.parse_args()

    uvicorn.run(
        "vector_store_mcp.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )

if __name__ == "__main__":
    main()
