#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
智谱 API 鉴权令牌签名
"""

import time
import hmac
import base64
import hashlib
from typing import Dict, Any, Tuple

import orjson
from jose import jwt
from jose.exceptions import JWTError

from .errors import TokenSigningError
from .helpers import debug_log

TOKEN_TTL_MS = 3_600_000

_TOKEN_HEADER = {"alg": "HS256", "sign_type": "SIGN"}


def b64url_encode(raw: bytes) -> str:
    """base64url 编码并去掉末尾的 '=' 填充"""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def split_compound_key(compound_key: str) -> Tuple[str, str]:
    """按第一个 '.' 拆分 id.secret 形式的密钥。"""
    api_id, sep, secret = (compound_key or "").partition(".")
    if not sep:
        raise TokenSigningError("API key is not in id.secret form")
    if not api_id:
        raise TokenSigningError("API key id part is empty")
    if not secret:
        raise TokenSigningError("API key secret part is empty")
    return api_id, secret


def sign_token(compound_key: str, timestamp_ms: int) -> str:
    """
    生成 HS256 签名令牌: header.payload.signature

    Args:
        compound_key: id.secret 形式的 API 密钥
        timestamp_ms: 签发时间（毫秒）

    Returns:
        str: 三段 base64url（无填充）拼接的令牌

    Raises:
        TokenSigningError: 密钥无法拆分出 id 与 secret
    """
    api_id, secret = split_compound_key(compound_key)

    payload = {
        "api_key": api_id,
        "exp": timestamp_ms + TOKEN_TTL_MS,
        "timestamp": timestamp_ms,
    }
    # orjson 输出紧凑 JSON 并保持键顺序
    signing_input = f"{b64url_encode(orjson.dumps(_TOKEN_HEADER))}.{b64url_encode(orjson.dumps(payload))}"
    digest = hmac.new(secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()
    return f"{signing_input}.{b64url_encode(digest)}"


def generate_token(compound_key: str) -> str:
    """使用当前时间签发令牌。"""
    return sign_token(compound_key, int(time.time() * 1000))


def decode_token_claims(token: str) -> Dict[str, Any]:
    """解码令牌 payload（不校验签名），出现异常时返回空字典。"""
    try:
        if not token:
            return {}
        return jwt.get_unverified_claims(token)
    except JWTError as e:
        debug_log(f"令牌解码错误: {e}")
        return {}


class TokenSigner:
    """签名器封装，持有一个 id.secret 形式的密钥。"""

    def __init__(self, compound_key: str):
        # 构造时校验密钥格式
        self.api_id, _ = split_compound_key(compound_key)
        self._compound_key = compound_key

    def generate(self) -> str:
        token = generate_token(self._compound_key)
        claims = decode_token_claims(token)
        debug_log("[AUTH] 已签发令牌", api_key=claims.get("api_key"), exp=claims.get("exp"))
        return token
