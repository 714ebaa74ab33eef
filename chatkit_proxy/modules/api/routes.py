"""
Create-session routes.

The router only adapts HTTP to the session module: it hands over the raw
Cookie header and body, then turns the ProxyResponse back into JSON with
one Set-Cookie header per staged cookie.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from ..session import ProxyResponse, SessionProxy, method_not_allowed

CREATE_SESSION_ENDPOINT = "/api/create-session"
HEALTH_PATH = "/health"

NON_POST_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_session_proxy(request: Request) -> SessionProxy:
    """Dependency returning the proxy built during application startup."""
    proxy = getattr(request.app.state, "session_proxy", None)
    if proxy is None:
        raise HTTPException(503, "Service not initialized")
    return proxy


def to_json_response(result: ProxyResponse) -> JSONResponse:
    response = JSONResponse(status_code=result.status_code, content=result.payload)
    for cookie in result.set_cookies:
        response.headers.append("set-cookie", cookie)
    return response


def create_session_router() -> APIRouter:
    """
    Create the session router.

    Returns:
        FastAPI router serving /api/create-session
    """
    router = APIRouter(tags=["session"])

    @router.post(CREATE_SESSION_ENDPOINT)
    async def create_session(
        request: Request,
        proxy: SessionProxy = Depends(get_session_proxy),
    ) -> JSONResponse:
        """
        Create or reuse a ChatKit session.

        Returns:
            200: {client_secret, reused: true} or {client_secret, expires_after, reused: false}
            400: Missing workflow id
            500: Missing API key or unexpected error
            4xx/5xx: Upstream error relayed with its status
        """
        body = await request.body()
        result = await proxy.create_session(request.headers.get("cookie"), body)
        return to_json_response(result)

    @router.api_route(CREATE_SESSION_ENDPOINT, methods=NON_POST_METHODS, include_in_schema=False)
    async def create_session_method_not_allowed() -> JSONResponse:
        return to_json_response(method_not_allowed())

    return router
