"""Prometheus metrics for the Langfuse Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "langfuse_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "langfuse_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

error_total = Counter(
    "langfuse_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

resource_status_total = Counter(
    "langfuse_operator_resource_status_total",
    "Resource status transitions",
    ["kind", "status"],
)

# Entities deleted out-of-band and healed by the read phase
drift_detected_total = Counter(
    "langfuse_operator_drift_detected_total",
    "Total number of configuration drift detections",
    ["kind"],
)

# API call metrics
api_call_total = Counter(
    "langfuse_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "langfuse_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)
