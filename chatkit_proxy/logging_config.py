"""
Logging configuration for the proxy and its uvicorn server.

Health-check traffic on the health route is dropped from the access log; every
other access line and all application logs pass through.
"""

import logging
import logging.config
from typing import Any, Dict, Iterable, Optional, Tuple

from chatkit_proxy.modules.api.routes import HEALTH_PATH

QUIET_METHODS = ("GET", "HEAD")


class HealthCheckFilter(logging.Filter):
    """Filter to suppress access-log lines for quiet paths."""

    def __init__(self, paths: Iterable[str] = (HEALTH_PATH,)):
        super().__init__()
        self.paths = frozenset(paths)

    def _request_line(self, record: logging.LogRecord) -> Optional[Tuple[str, str]]:
        """(method, path) from a uvicorn access record, query string stripped."""
        # uvicorn passes (client_addr, method, full_path, http_version, status_code)
        if isinstance(record.args, tuple) and len(record.args) == 5:
            method, full_path = record.args[1], record.args[2]
            return str(method), str(full_path).split("?", 1)[0]

        parts = record.getMessage().split('"')
        if len(parts) >= 2:
            request = parts[1].split()
            if len(request) >= 2:
                return request[0], request[1].split("?", 1)[0]
        return None

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True

        request_line = self._request_line(record)
        if request_line is None:
            return True

        method, path = request_line
        return not (method in QUIET_METHODS and path in self.paths)


def get_logging_config(
    log_level: str = "INFO",
    quiet_paths: Iterable[str] = (HEALTH_PATH,),
) -> Dict[str, Any]:
    """Get logging configuration with health check suppression."""
    log_level = log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {
                "()": HealthCheckFilter,
                "paths": list(quiet_paths),
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter"]
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": "INFO",
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": "INFO",
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": "INFO",
                "propagate": False
            },
            # Request lines for upstream calls are logged by the proxy itself
            "httpx": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            },
            "chatkit_proxy": {
                "handlers": ["default"],
                "level": log_level,
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(log_level: str = "INFO") -> None:
    logging.config.dictConfig(get_logging_config(log_level))
