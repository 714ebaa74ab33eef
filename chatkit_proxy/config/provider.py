"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol

DEFAULT_CHATKIT_BASE = "https://api.openai.com"
CHATKIT_SESSIONS_PATH = "/v1/chatkit/sessions"


@dataclass(frozen=True)
class ProxyConfig:
    """Upstream and cookie configuration for the session proxy."""
    api_key: Optional[str]
    api_base: str = DEFAULT_CHATKIT_BASE
    default_workflow_id: str = ""
    environment: str = "development"
    upstream_timeout: Optional[float] = None

    @property
    def is_configured(self) -> bool:
        """Check if an upstream API key is available."""
        return bool(self.api_key)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def sessions_url(self) -> str:
        """Full URL of the upstream session-creation endpoint."""
        return f"{self.api_base.rstrip('/')}{CHATKIT_SESSIONS_PATH}"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_proxy_config(self) -> ProxyConfig:
        """Get session proxy configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_proxy_config(self) -> ProxyConfig:
        """Get session proxy configuration from environment variables."""
        workflow_id = os.getenv("CHATKIT_WORKFLOW_ID")
        if workflow_id is None:
            workflow_id = os.getenv("NEXT_PUBLIC_CHATKIT_WORKFLOW_ID", "")

        timeout_env = os.getenv("UPSTREAM_TIMEOUT")
        try:
            upstream_timeout = float(timeout_env) if timeout_env else None
        except ValueError:
            raise ValueError(
                f"UPSTREAM_TIMEOUT must be a number of seconds, got {timeout_env!r}"
            )

        return ProxyConfig(
            api_key=os.getenv("OPENAI_API_KEY") or None,
            api_base=os.getenv("CHATKIT_API_BASE") or DEFAULT_CHATKIT_BASE,
            default_workflow_id=workflow_id.strip(),
            environment=os.getenv("NODE_ENV") or os.getenv("ENVIRONMENT", "development"),
            upstream_timeout=upstream_timeout,
        )


class StaticConfigProvider:
    """Provider returning a fixed, explicitly constructed configuration."""

    def __init__(self, proxy_config: ProxyConfig):
        self._proxy_config = proxy_config

    def get_proxy_config(self) -> ProxyConfig:
        return self._proxy_config
