"""
Domain value objects package.
"""

from .failure_kind import FailureKind
from .job_status import JobStatus

__all__ = [
    "FailureKind",
    "JobStatus",
]
