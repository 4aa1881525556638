"""
Domain package.
"""

from .entities import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "Company",
    "Customer",
    "Device",
    "Installation",
    "InventoryItem",
    "Job",
    "JobComment",
    "User",

    # Exceptions
    "DuplicateInstallationError",
    "EntityIdentityError",
    "RepositoryError",

    # Value Objects
    "FailureKind",
    "JobStatus",
]
