"""
Prometheus metrics for workflow monitoring.
"""

from prometheus_client import CollectorRegistry, Counter, generate_latest

registry = CollectorRegistry()


def get_registry() -> CollectorRegistry:
    """Get the registry all workflow metrics are attached to."""
    return registry


JOB_TRANSITIONS = Counter(
    "job_status_transitions_total",
    "Total number of job status changes",
    ["from_status", "to_status"],
    registry=registry,
)

WORKFLOW_OPERATIONS = Counter(
    "workflow_operations_total",
    "Total number of workflow operations handled",
    ["operation", "outcome"],
    registry=registry,
)

WORKFLOW_REJECTIONS = Counter(
    "workflow_rejections_total",
    "Total number of rejected workflow operations",
    ["operation", "failure_kind"],
    registry=registry,
)

ACTIVATION_ATTEMPTS = Counter(
    "activation_attempts_total",
    "Total number of installation activation attempts",
    ["outcome"],
    registry=registry,
)

ERRORS_TOTAL = Counter(
    "errors_total",
    "Total number of unexpected errors",
    ["error_type", "component"],
    registry=registry,
)


def record_transition(from_status: str, to_status: str) -> None:
    """Record a job status change."""
    if from_status != to_status:
        JOB_TRANSITIONS.labels(from_status=from_status, to_status=to_status).inc()


def record_operation(operation: str, success: bool) -> None:
    WORKFLOW_OPERATIONS.labels(
        operation=operation, outcome="success" if success else "failure"
    ).inc()


def record_rejection(operation: str, failure_kind: str) -> None:
    WORKFLOW_REJECTIONS.labels(operation=operation, failure_kind=failure_kind).inc()


def record_activation(outcome: str) -> None:
    ACTIVATION_ATTEMPTS.labels(outcome=outcome).inc()


def record_error(error_type: str, component: str) -> None:
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def export_metrics() -> bytes:
    """Render the registry in Prometheus text format."""
    return generate_latest(registry)
