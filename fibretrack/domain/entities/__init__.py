"""
Domain entities package.
"""

from .directory import Company, Customer, User
from .installation import Device, Installation, InventoryItem
from .job import Job, JobComment

__all__ = [
    "Company",
    "Customer",
    "Device",
    "Installation",
    "InventoryItem",
    "Job",
    "JobComment",
    "User",
]
