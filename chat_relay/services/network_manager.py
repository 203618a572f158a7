"""Shared HTTP client management."""

from __future__ import annotations

import asyncio
from typing import Dict, Optional

import httpx

from ..helpers import info_log, error_log


_CONNECTION_POOL_CONFIG: Dict[str, object] = {
    "limits": httpx.Limits(
        max_keepalive_connections=20,
        max_connections=100,
        keepalive_expiry=30,
    ),
    # 整体超时由服务层的 wait_for 控制，这里只兜底连接阶段
    "timeout": httpx.Timeout(
        connect=10.0,
        read=None,
        write=30.0,
        pool=10.0,
    ),
    "follow_redirects": True,
}


class NetworkManager:
    """Own the shared upstream client and close it on shutdown."""

    def __init__(self) -> None:
        self._client: Optional[httpx.AsyncClient] = None
        self._client_lock = asyncio.Lock()

    async def get_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None or self._client.is_closed:
                info_log("[CLIENT] 创建上游客户端")
                self._client = httpx.AsyncClient(**_CONNECTION_POOL_CONFIG)
            return self._client

    async def cleanup(self) -> None:
        async with self._client_lock:
            client = self._client
            self._client = None

        if client:
            try:
                await client.aclose()
                info_log("[CLIENT] 上游客户端已关闭")
            except Exception as exc:  # pragma: no cover
                error_log("[CLIENT] 关闭上游客户端失败", error=str(exc))


network_manager = NetworkManager()


async def get_http_client() -> httpx.AsyncClient:
    """FastAPI dependency returning the shared upstream client."""
    return await network_manager.get_client()
