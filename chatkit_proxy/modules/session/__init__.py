"""
Session Module - Black Box Interface

Purpose: Create or reuse ChatKit sessions for browser visitors
Interface: SessionProxy.create_session(), method_not_allowed()
Hidden: Cookie names and attributes, workflow resolution, upstream error mapping

The module is framework-agnostic; the API module adapts ProxyResponse to HTTP.
"""

from .session import (
    CLIENT_SECRET_COOKIE_NAME,
    SESSION_COOKIE_MAX_AGE,
    SESSION_COOKIE_NAME,
    ProxyResponse,
    SessionProxy,
    generate_visitor_id,
    method_not_allowed,
    parse_request_body,
)

__all__ = [
    "CLIENT_SECRET_COOKIE_NAME",
    "SESSION_COOKIE_MAX_AGE",
    "SESSION_COOKIE_NAME",
    "ProxyResponse",
    "SessionProxy",
    "generate_visitor_id",
    "method_not_allowed",
    "parse_request_body",
]
