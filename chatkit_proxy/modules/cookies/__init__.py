"""
Cookies Module - Black Box Interface

Purpose: Read request cookies and build Set-Cookie values
Interface: parse_cookie_header(), get_cookie_value(), Cookie
Hidden: Header splitting, percent-encoding
"""

from .codec import Cookie, get_cookie_value, parse_cookie_header

__all__ = ["Cookie", "get_cookie_value", "parse_cookie_header"]
