"""
ChatKit sessions API client.

Wraps a single call, POST /v1/chatkit/sessions, on top of a shared
httpx.AsyncClient. The call is never retried; transport errors propagate
to the caller.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from ...config.provider import ProxyConfig

logger = logging.getLogger(__name__)

CHATKIT_BETA_HEADER = "chatkit_beta=v1"


@dataclass
class UpstreamResult:
    """Outcome of an upstream session-creation call."""
    status_code: int
    reason_phrase: str
    payload: Any = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def get(self, key: str) -> Any:
        """Read a top-level field, tolerating non-object payloads."""
        if isinstance(self.payload, dict):
            return self.payload.get(key)
        return None


class ChatKitClient:
    """Client for the upstream ChatKit session endpoint."""

    def __init__(self, config: ProxyConfig, http_client: httpx.AsyncClient):
        """
        Initialize client.

        Args:
            config: Proxy configuration (API key, base URL)
            http_client: Shared async HTTP client, owned by the caller
        """
        self.config = config
        self.http = http_client

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
            "OpenAI-Beta": CHATKIT_BETA_HEADER,
        }

    async def create_session(
        self,
        workflow_id: str,
        user: str,
        file_upload_enabled: bool = False,
    ) -> UpstreamResult:
        """
        Mint a new ChatKit session.

        Args:
            workflow_id: Upstream workflow identifier
            user: Visitor identifier, passed as the upstream user field
            file_upload_enabled: Whether the widget may upload files

        Returns:
            UpstreamResult; the payload is {} when the body is not valid JSON

        Raises:
            httpx.HTTPError: On transport failure
        """
        body = {
            "workflow": {"id": workflow_id},
            "user": user,
            "chatkit_configuration": {
                "file_upload": {"enabled": file_upload_enabled},
            },
        }

        request_kwargs: Dict[str, Any] = {"headers": self._headers(), "json": body}
        if self.config.upstream_timeout is not None:
            request_kwargs["timeout"] = self.config.upstream_timeout

        logger.debug(f"Creating ChatKit session for workflow {workflow_id}")
        response = await self.http.post(self.config.sessions_url, **request_kwargs)

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = {}

        return UpstreamResult(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            payload=payload,
        )


def build_http_client(config: Optional[ProxyConfig] = None, **kwargs: Any) -> httpx.AsyncClient:
    """Create the shared AsyncClient used for upstream calls."""
    if config is not None and config.upstream_timeout is not None:
        kwargs.setdefault("timeout", config.upstream_timeout)
    return httpx.AsyncClient(**kwargs)
