#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Main application entry point - chat relay
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from chat_relay.config import settings
from chat_relay.chat_api import router as chat_router, register_exception_handlers
from chat_relay.helpers import info_log
from chat_relay.services.network_manager import network_manager


@asynccontextmanager
async def lifespan(app: FastAPI):
    info_log("[APP] 服务启动", provider=settings.AI_PROVIDER)
    yield
    await network_manager.cleanup()


# Create FastAPI app
app = FastAPI(
    title="Chat Relay",
    description="Relay chat prompts to a Zhipu or OpenAI compatible API",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

# Include API router
app.include_router(chat_router)


@app.options("/")
async def handle_options():
    """Handle OPTIONS requests"""
    return Response(status_code=200)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Chat Relay",
        "version": "1.0.0",
        "description": "对话转发服务，POST /api/chat",
    }


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.LISTEN_PORT,
        reload=False,
        log_level="info",
    )
