"""Service layer utilities consolidating reusable business logic."""

from .network_manager import network_manager, get_http_client
from .response_parser import response_parser
from .chat_service import ChatService

__all__ = [
    "network_manager",
    "get_http_client",
    "response_parser",
    "ChatService",
]
