import json
import logging
import random
import string
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...config.provider import ProxyConfig
from ..api.models import (
    CreatedSessionResponse,
    CreateSessionRequest,
    ErrorResponse,
    ReusedSessionResponse,
)
from ..cookies import Cookie, parse_cookie_header
from ..upstream import ChatKitClient, extract_error_detail

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "chatkit_session_id"
CLIENT_SECRET_COOKIE_NAME = "chatkit_client_secret"
SESSION_COOKIE_MAX_AGE = 60 * 60 * 24 * 30  # 30 days

MISSING_API_KEY_ERROR = "Missing OPENAI_API_KEY environment variable"
MISSING_WORKFLOW_ERROR = "Missing workflow id"
UNEXPECTED_ERROR = "Unexpected error"
METHOD_NOT_ALLOWED_ERROR = "Method Not Allowed"

_BASE36_ALPHABET = string.digits + string.ascii_lowercase


@dataclass
class ProxyResponse:
    """Framework-independent response produced by the session proxy."""
    status_code: int
    payload: Any
    set_cookies: List[str] = field(default_factory=list)


def generate_visitor_id() -> str:
    """Random UUID, or a pseudo-random base-36 string if no OS entropy source exists."""
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        return "".join(random.choice(_BASE36_ALPHABET) for _ in range(11))


def parse_request_body(raw: bytes) -> Optional[CreateSessionRequest]:
    """
    Parse the create-session body permissively.

    Empty bodies, invalid or too deeply nested JSON and non-object JSON
    yield None. Inside an object, each field is read on its own: a value
    of the wrong type is dropped without discarding the rest of the body.
    """
    if not raw:
        return None

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        logger.debug("Ignoring non-JSON create-session body")
        return None

    if not isinstance(data, dict):
        return None

    return CreateSessionRequest.model_validate(data)


def method_not_allowed() -> ProxyResponse:
    return ProxyResponse(405, ErrorResponse(error=METHOD_NOT_ALLOWED_ERROR).model_dump(exclude_unset=True))


def _collect(*cookies: Optional[str]) -> List[str]:
    return [c for c in cookies if c]


class SessionProxy:
    def __init__(
        self,
        config: ProxyConfig,
        upstream: ChatKitClient,
        id_factory: Callable[[], str] = generate_visitor_id,
    ):
        """
        Initialize session proxy.

        Args:
            config: Proxy configuration (API key, default workflow, environment)
            upstream: Client for the ChatKit sessions API
            id_factory: Generator for new visitor identifiers
        """
        self.config = config
        self.upstream = upstream
        self.id_factory = id_factory

    def _cookie(self, name: str, value: str) -> str:
        return Cookie(
            name=name,
            value=value,
            path="/",
            max_age=SESSION_COOKIE_MAX_AGE,
            http_only=True,
            same_site="Lax",
            secure=self.config.is_production,
        ).serialize()

    def resolve_visitor_id(self, cookies: Dict[str, str]) -> Tuple[str, Optional[str]]:
        """
        Read the visitor identifier from cookies or mint a new one.

        Returns:
            Tuple of (visitor_id, Set-Cookie value or None if the cookie already exists)
        """
        existing = cookies.get(SESSION_COOKIE_NAME)
        if existing:
            return existing, None

        visitor_id = self.id_factory()
        return visitor_id, self._cookie(SESSION_COOKIE_NAME, visitor_id)

    async def create_session(self, cookie_header: Optional[str], body: bytes) -> ProxyResponse:
        """
        Handle a create-session request.

        Args:
            cookie_header: Raw Cookie request header, if any
            body: Raw request body

        Returns:
            ProxyResponse with status, JSON payload and Set-Cookie values

        Logic:
        1. Fail fast without an upstream API key
        2. Resolve (or mint) the visitor identifier
        3. Reuse a cached client secret cookie if present
        4. Otherwise resolve the workflow id and call upstream
        5. Relay the upstream result, staging the client secret cookie
        """
        session_cookie: Optional[str] = None
        client_secret_cookie: Optional[str] = None

        try:
            if not self.config.is_configured:
                return ProxyResponse(500, ErrorResponse(error=MISSING_API_KEY_ERROR).model_dump(exclude_unset=True))

            request = parse_request_body(body) or CreateSessionRequest()
            cookies = parse_cookie_header(cookie_header)

            user_id, session_cookie = self.resolve_visitor_id(cookies)

            existing_secret = cookies.get(CLIENT_SECRET_COOKIE_NAME)
            if existing_secret:
                logger.debug("Reusing client secret from cookie")
                return ProxyResponse(
                    200,
                    ReusedSessionResponse(client_secret=existing_secret).model_dump(),
                    _collect(session_cookie),
                )

            workflow_id = request.resolve_workflow_id(self.config.default_workflow_id)
            if not workflow_id:
                return ProxyResponse(
                    400,
                    ErrorResponse(error=MISSING_WORKFLOW_ERROR).model_dump(exclude_unset=True),
                    _collect(session_cookie),
                )

            result = await self.upstream.create_session(
                workflow_id=workflow_id,
                user=user_id,
                file_upload_enabled=request.file_upload_enabled,
            )

            if not result.ok:
                logger.error(
                    f"ChatKit session creation failed: status={result.status_code} "
                    f"reason={result.reason_phrase!r} body={result.payload!r}"
                )
                message = extract_error_detail(
                    result.payload, f"Failed to create session: {result.reason_phrase}"
                )
                return ProxyResponse(
                    result.status_code,
                    ErrorResponse(error=message, details=result.payload).model_dump(exclude_unset=True),
                    _collect(session_cookie),
                )

            client_secret = result.get("client_secret")
            if not isinstance(client_secret, str):
                client_secret = None
            expires_after = result.get("expires_after")

            if client_secret:
                client_secret_cookie = self._cookie(CLIENT_SECRET_COOKIE_NAME, client_secret)

            logger.info(f"Created ChatKit session for workflow {workflow_id}")
            return ProxyResponse(
                200,
                CreatedSessionResponse(
                    client_secret=client_secret,
                    expires_after=expires_after,
                ).model_dump(),
                _collect(session_cookie, client_secret_cookie),
            )

        except Exception:
            logger.exception("Create session error")
            return ProxyResponse(
                500,
                ErrorResponse(error=UNEXPECTED_ERROR).model_dump(exclude_unset=True),
                _collect(session_cookie, client_secret_cookie),
            )
