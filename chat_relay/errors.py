"""Exception hierarchy mapped onto HTTP responses."""

from typing import Any, Dict, Optional


class ChatRelayError(Exception):
    """Base exception; carries the status code and the caller-facing message."""

    status_code: int = 500
    message: str = "An internal server error occurred."

    def __init__(self, message: Optional[str] = None, **extra: Any) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.extra: Dict[str, Any] = extra

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, **self.extra}


class ClientInputError(ChatRelayError):
    """Missing or malformed request body."""

    status_code = 400
    message = "Prompt or messages array is required"


class ServerConfigError(ChatRelayError):
    """Server-side configuration is incomplete. Detail stays in the logs."""

    status_code = 500
    message = "Server configuration error."


class UpstreamError(ChatRelayError):
    """The provider answered with a non-success status."""

    message = "Failed to get response from AI service."

    def __init__(self, status_code: int, details: Any, provider: str) -> None:
        super().__init__(details=details, provider=provider)
        self.status_code = status_code
        self.details = details
        self.provider = provider


class UpstreamTimeoutError(ChatRelayError):
    status_code = 504
    message = "Request timeout - AI service took too long to respond."


class TokenSigningError(ChatRelayError):
    """The compound API key cannot be turned into a signed token.

    The reason is kept on the exception for logging; callers only ever see
    the generic message.
    """

    def __init__(self, reason: str) -> None:
        super().__init__()
        self.reason = reason
        self.args = (reason,)


class InternalError(ChatRelayError):
    pass
