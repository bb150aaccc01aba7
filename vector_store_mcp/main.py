import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from .config import get_settings
from .exceptions import VectorStoreMCPError
from .log import configure_logging
from .mcp_transport.router import router as mcp_router

settings = get_settings()

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    # Shared client for connection pooling. No client-side timeout is
    # enforced; a call takes as long as the upstream takes.
    app.state.http_client = httpx.AsyncClient(timeout=None)

    yield

    await app.state.http_client.aclose()

app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
    debug=settings.DEBUG
)

# CORS for browser-based MCP clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=settings.CORS_MAX_AGE,
)

# Global exception handlers
@app.exception_handler(VectorStoreMCPError)
async def server_exception_handler(request: Request, exc: VectorStoreMCPError):
    return JSONResponse(
        status_code=500,
        content={"error": exc.code, "message": exc.message}
    )

@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME}

# Include routers
app.include_router(mcp_router)
