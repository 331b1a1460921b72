"""
Configuration for the Langfuse Operator.

Loaded from environment variables once at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# Read at import time: kopf timer intervals are fixed when handlers register
DRIFT_CHECK_INTERVAL_SECONDS = int(os.getenv("DRIFT_CHECK_INTERVAL_SECONDS", "300"))


@dataclass
class OperatorConfig:
    """Process-level settings and admin credentials."""

    host: str
    admin_api_key: str = field(repr=False)  # Never log the admin key
    request_timeout: float = 30.0
    metrics_port: int = 8080

    @classmethod
    def from_env(cls) -> OperatorConfig:
        """Load from environment variables."""
        host = os.getenv("LANGFUSE_HOST", "")
        if not host:
            raise ValueError("LANGFUSE_HOST environment variable must be set.")

        admin_api_key = os.getenv("LANGFUSE_ADMIN_KEY", "")
        if not admin_api_key:
            raise ValueError(
                "LANGFUSE_ADMIN_KEY environment variable must be set. "
                "Admin API key cannot be empty."
            )

        return cls(
            host=host,
            admin_api_key=admin_api_key,
            request_timeout=float(os.getenv("LANGFUSE_REQUEST_TIMEOUT", "30")),
            metrics_port=int(os.getenv("METRICS_PORT", "8080")),
        )


_config: OperatorConfig | None = None


def get_config() -> OperatorConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = OperatorConfig.from_env()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration."""
    global _config
    _config = None
