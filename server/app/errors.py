# app/errors.py
from fastapi import HTTPException


class ClientInputError(HTTPException):
    """Missing or malformed request payload."""

    def __init__(self, message: str):
        super().__init__(status_code=400, detail=message)


class NotFoundError(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=404, detail=message)


class ServerConfigError(HTTPException):
    """The server is missing configuration it needs (never echo secret values)."""

    def __init__(self, message: str = "API key not configured"):
        super().__init__(status_code=500, detail=message)


class UpstreamProviderError(HTTPException):
    """Non-success answer from the chat-completion provider, relayed with its status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(status_code=status_code, detail=message)


class RateLimitExceeded(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=429, detail=message)
