"""
ChatKit Session Proxy

A thin HTTP front-end that mints ChatKit sessions on behalf of browser
visitors and relays the upstream credential back through cookies.

Architecture:
- Each module is self-contained with clear interfaces
- Configuration is built once and injected, never read ad hoc
- The session handler knows nothing about the web framework

Modules:
- config: Server settings
- cookies: Cookie header parsing and Set-Cookie serialization
- upstream: ChatKit sessions API client and error extraction
- session: Create-session proxy logic
- api: HTTP models and routes
"""

__version__ = "1.0.0"
