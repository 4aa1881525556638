"""
Job status value object.
"""

from enum import Enum


class JobStatus(str, Enum):
    """Job lifecycle status enumeration."""

    NEW = "New"
    ASSIGNED = "Assigned"
    SCHEDULED = "Scheduled"
    INSTALLATION_IN_PROGRESS = "Installation in Progress"
    PENDING_ACTIVATION = "Pending Activation"
    COMPLETED = "Completed"
    HOLD_OVER = "Hold-Over"

    def can_be_held_over(self) -> bool:
        """Check if status is one the hold-over path is normally entered from."""
        return self in [self.ASSIGNED, self.SCHEDULED, self.INSTALLATION_IN_PROGRESS]
