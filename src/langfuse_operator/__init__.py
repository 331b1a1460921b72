"""Kubernetes operator reconciling Langfuse organizations, projects and API keys."""

__version__ = "0.1.0"
