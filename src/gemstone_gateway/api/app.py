from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gemstone_gateway.api.dependencies import HandlerDep, IdentityDep, lifespan
from gemstone_gateway.config import settings
from gemstone_gateway.dto import (
    ChatRequest,
    ChatResponse,
    HealthCheckResponse,
    ResetLimitResponse,
    StatusResponse,
)

app = FastAPI(
    title="Gemstone Gateway API",
    description="Rate-limited, cached gemstone recommendation chat backed by a generative model",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Gemstone Gateway API",
        "version": "0.1.0",
        "description": "Rate-limited, cached gemstone recommendation chat",
        "endpoints": {
            "chat": "/api/gemstone-ai",
            "status": "/api/gemstone-ai/status",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/api/gemstone-ai", response_model=ChatResponse)
async def chat(request: ChatRequest, handler: HandlerDep, identity: IdentityDep) -> ChatResponse:
    """
    Answer a gemstone question in one line, with catalog suggestions.

    Args:
        request: Chat request with text and topic marker.

    Returns:
        Reply, suggested gemstones and whether the reply was cached.
    """
    return await handler.chat(request, identity)


@app.get("/api/gemstone-ai/status", response_model=StatusResponse)
async def chat_status(handler: HandlerDep, identity: IdentityDep) -> StatusResponse:
    """Quota configuration and the caller's current usage."""
    return await handler.get_status(identity)


@app.post("/api/gemstone-ai/reset-limit", response_model=ResetLimitResponse)
async def reset_limit(handler: HandlerDep, identity: IdentityDep) -> ResetLimitResponse:
    """Reset the caller's quota and cooldown (development only)."""
    return await handler.reset_limit(identity)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gemstone_gateway.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
