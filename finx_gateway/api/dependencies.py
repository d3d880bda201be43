"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from finx_gateway.infrastructure.clients.chat import ChatClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_chat_client() -> ChatClient:
    """Provide chat model client instance"""
    return ChatClient()
