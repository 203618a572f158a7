"""Service layer forwarding one chat request to the configured provider."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict

import httpx

from ..config import Settings
from ..errors import (
    ClientInputError,
    InternalError,
    ServerConfigError,
    TokenSigningError,
    UpstreamError,
    UpstreamTimeoutError,
)
from ..helpers import (
    debug_log,
    error_log,
    perf_timer,
    request_stage_log,
)
from ..schemas import ChatReply, ChatRequest
from ..signature import TokenSigner
from .response_parser import response_parser

# 仅在值为真时才透传的可选参数（0 / 空值会被丢弃）
OPTIONAL_FIELDS = ("max_tokens", "temperature", "top_p", "thinking")


class ChatService:
    """Encapsulate the relay workflow independent of the FastAPI layer."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient) -> None:
        self.settings = settings
        self.client = client
        self.parser = response_parser

    @property
    def provider(self) -> str:
        return self.settings.AI_PROVIDER

    def ensure_configured(self) -> None:
        if not self.settings.AI_API_KEY:
            error_log("[CONFIG] AI_API_KEY 未配置")
            raise ServerConfigError()

    def resolve_model(self, request: ChatRequest) -> str:
        return request.model or self.settings.default_model

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        """构建上游请求体"""
        if request.messages:
            messages = [m.model_dump() for m in request.messages]
        elif request.prompt:
            messages = [{"role": "user", "content": request.prompt}]
        else:
            raise ClientInputError()

        payload: Dict[str, Any] = {
            "model": self.resolve_model(request),
            "messages": messages,
        }
        for field in OPTIONAL_FIELDS:
            value = getattr(request, field)
            if value:
                payload[field] = value

        if (
            "thinking" not in payload
            and self.provider == "zhipuai"
            and self.settings.AI_THINKING_TYPE
        ):
            payload["thinking"] = {"type": self.settings.AI_THINKING_TYPE}
        return payload

    def build_headers(self) -> Dict[str, str]:
        api_key = self.settings.AI_API_KEY
        if self.settings.should_sign:
            try:
                token = TokenSigner(api_key).generate()
            except TokenSigningError as exc:
                error_log("[AUTH] 令牌签名失败", reason=exc.reason)
                raise
        else:
            token = api_key
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }

    async def _post(self, payload: Dict[str, Any], headers: Dict[str, str]) -> httpx.Response:
        return await self.client.post(
            self.settings.api_url,
            json=payload,
            headers=headers,
            follow_redirects=True,
        )

    async def send(self, payload: Dict[str, Any], headers: Dict[str, str]) -> httpx.Response:
        """发起一次上游调用，超过 AI_TIMEOUT 秒即取消"""
        timeout = self.settings.AI_TIMEOUT
        request_stage_log(
            "upstream_request",
            "向上游发起请求",
            provider=self.provider,
            timeout=timeout,
        )
        try:
            with perf_timer("upstream_call"):
                return await asyncio.wait_for(self._post(payload, headers), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            error_log("[UPSTREAM] 上游响应超时", timeout=timeout, error_type=type(exc).__name__)
            raise UpstreamTimeoutError() from exc

    def relay_error(self, response: httpx.Response) -> UpstreamError:
        try:
            details = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            details = {"message": "Unknown error"}
        error_log(
            "上游返回错误",
            status_code=response.status_code,
            error_detail=response.text[:200],
        )
        return UpstreamError(response.status_code, details, self.provider)

    async def complete(self, request: ChatRequest) -> ChatReply:
        """处理一次对话请求，返回归一化后的回复"""
        payload = self.build_payload(request)
        self.ensure_configured()
        model = payload["model"]
        debug_log("[REQUEST] 上游请求体", message_count=len(payload["messages"]), model=model)

        try:
            headers = self.build_headers()
            response = await self.send(payload, headers)

            if not response.is_success:
                raise self.relay_error(response)

            data = response.json()
            request_stage_log("upstream_response", "上游响应成功", status=response.status_code)
            text = self.parser.extract_text(data)
            return ChatReply(provider=self.provider, model=model, text=text, raw=data)
        except (UpstreamError, UpstreamTimeoutError):
            raise
        except TokenSigningError as exc:
            raise InternalError() from exc
        except Exception as exc:
            error_log("处理请求时发生错误", error=str(exc), error_type=type(exc).__name__)
            raise InternalError() from exc
