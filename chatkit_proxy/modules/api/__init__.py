"""
API Module - Black Box Interface

Purpose: HTTP models and routing
Interface: request/response models; create_session_router() in .routes
Hidden: Request parsing, response assembly

The API module only orchestrates - it contains no business logic.
"""

from .models import (
    ChatKitConfiguration,
    CreatedSessionResponse,
    CreateSessionRequest,
    ErrorResponse,
    FileUploadOptions,
    HealthResponse,
    ReusedSessionResponse,
    SessionScope,
    WorkflowRef,
)

__all__ = [
    "ChatKitConfiguration",
    "CreatedSessionResponse",
    "CreateSessionRequest",
    "ErrorResponse",
    "FileUploadOptions",
    "HealthResponse",
    "ReusedSessionResponse",
    "SessionScope",
    "WorkflowRef",
]
