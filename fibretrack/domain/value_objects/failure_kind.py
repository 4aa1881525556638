"""
Failure kind value object.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of a rejected workflow operation."""

    NOT_FOUND = "not_found"
    PRECONDITION_FAILED = "precondition_failed"
    INVALID_INPUT = "invalid_input"
    STOCHASTIC_FAILURE = "stochastic_failure"
    TRANSPORT_FAULT = "transport_fault"

    def is_retryable(self) -> bool:
        """Check if the same call may succeed later without caller changes.

        Stochastic failures need the job taken out of Hold-Over first, and
        nothing else changes by simply calling again.
        """
        return self == self.TRANSPORT_FAULT

    def has_side_effect(self) -> bool:
        """Check if the failure changed stored state."""
        return self == self.STOCHASTIC_FAILURE
