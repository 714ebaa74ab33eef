from .provider import ConfigProvider, EnvConfigProvider, ProxyConfig

__all__ = ["ConfigProvider", "EnvConfigProvider", "ProxyConfig"]
