"""Main entry point for the Langfuse Operator.

Run with ``kopf run -m langfuse_operator.main``.
"""

from __future__ import annotations

import logging
from typing import Any

import kopf

from . import handlers  # noqa: F401
from . import health
from . import logging as structured_logging
from .config import get_config
from .handlers.shared import close_client_factory
from .tracing import initialize_tracing

logger = logging.getLogger(__name__)


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    # Set up structured JSON logging
    structured_logging.setup_structured_logging()
    initialize_tracing()

    # Fail fast on a missing host or admin key
    config = get_config()
    logger.info(f"Managing Langfuse at {config.host}")

    # Use AnnotationsProgressStorage to avoid conflicts with status updates
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = 0
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = 4

    # Start metrics HTTP server with health check endpoints
    health.start_metrics_server(config.metrics_port)


@kopf.on.cleanup()
def shutdown(**_: Any) -> None:
    """Close pooled Langfuse connections."""
    close_client_factory()
