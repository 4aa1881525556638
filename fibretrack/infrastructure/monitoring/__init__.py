"""
Monitoring package.
"""

from .metrics import (
    ACTIVATION_ATTEMPTS,
    ERRORS_TOTAL,
    JOB_TRANSITIONS,
    WORKFLOW_OPERATIONS,
    WORKFLOW_REJECTIONS,
    export_metrics,
    get_registry,
    record_activation,
    record_error,
    record_operation,
    record_rejection,
    record_transition,
)

__all__ = [
    "ACTIVATION_ATTEMPTS",
    "ERRORS_TOTAL",
    "JOB_TRANSITIONS",
    "WORKFLOW_OPERATIONS",
    "WORKFLOW_REJECTIONS",
    "export_metrics",
    "get_registry",
    "record_activation",
    "record_error",
    "record_operation",
    "record_rejection",
    "record_transition",
]
