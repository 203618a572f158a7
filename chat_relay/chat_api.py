"""
Chat relay endpoint
"""

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .errors import ChatRelayError
from .helpers import (
    error_log,
    bind_request_context,
    reset_request_context,
    request_stage_log,
)
from .schemas import ChatReply, ChatRequest
from .services.chat_service import ChatService
from .services.network_manager import get_http_client

router = APIRouter()


@router.post("/api/chat", response_model=ChatReply)
async def chat(
    body: ChatRequest,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """转发一次对话请求到上游并返回归一化结果"""
    service = ChatService(settings, client)
    request_stage_log(
        "received",
        "收到客户端请求",
        mode="messages" if body.messages else "prompt",
        message_count=len(body.messages) if body.messages else 1,
    )
    bind_request_context(provider=service.provider, model=service.resolve_model(body))
    try:
        return await service.complete(body)
    finally:
        reset_request_context("provider", "model")


async def chat_relay_error_handler(request: Request, exc: ChatRelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    error_log("[REQUEST] 请求体校验失败", errors=errors)
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request body", "errors": errors},
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(ChatRelayError, chat_relay_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
