"""
Upstream Module - Black Box Interface

Purpose: Talk to the hosted ChatKit sessions API
Interface: ChatKitClient.create_session(), extract_upstream_error()
Hidden: Headers, request body layout, error payload shapes
"""

from .client import ChatKitClient, UpstreamResult, build_http_client
from .errors import ERROR_EXTRACTORS, extract_error_detail, extract_upstream_error

__all__ = [
    "ChatKitClient",
    "UpstreamResult",
    "build_http_client",
    "ERROR_EXTRACTORS",
    "extract_error_detail",
    "extract_upstream_error",
]
