"""
Application data models
"""

from typing import Dict, List, Optional, Any
from pydantic import BaseModel, ConfigDict


class ChatMessage(BaseModel):
    """Chat message model"""
    model_config = ConfigDict(extra="allow")

    role: str
    content: str


class ChatRequest(BaseModel):
    """Inbound body of POST /api/chat: either a prompt or a full conversation"""
    model_config = ConfigDict(extra="ignore")

    prompt: Optional[str] = None
    messages: Optional[List[ChatMessage]] = None
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    thinking: Optional[Dict[str, Any]] = None


class ChatReply(BaseModel):
    """Normalized reply returned to the frontend"""
    provider: str
    model: str
    text: str
    raw: Any
