"""
chat_relay package - Core application modules
"""

from .config import settings, get_settings, Settings
from .errors import (
    ChatRelayError,
    ClientInputError,
    ServerConfigError,
    UpstreamError,
    UpstreamTimeoutError,
    TokenSigningError,
    InternalError,
)
from .schemas import ChatRequest, ChatMessage, ChatReply
from .signature import TokenSigner, sign_token, generate_token, decode_token_claims
from .services.response_parser import extract_reply_text

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "ChatRelayError",
    "ClientInputError",
    "ServerConfigError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "TokenSigningError",
    "InternalError",
    "ChatRequest",
    "ChatMessage",
    "ChatReply",
    "TokenSigner",
    "sign_token",
    "generate_token",
    "decode_token_claims",
    "extract_reply_text",
]
